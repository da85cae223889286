from typing import Any

from pydantic import BaseModel, Field


class SupportTicketRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    priority: str = Field(..., min_length=1)
    service_id: str | None = None
    package_id: str | None = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()


class TicketMessageRequest(BaseModel):
    message: str = Field(..., min_length=1)
