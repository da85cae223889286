from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from edge.app.schemas.contact import EMAIL_PATTERN


class ConsultationRequest(BaseModel):
    """Public booking request; field names follow the website's camelCase payload."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1)
    consultation_type: str = Field(..., min_length=1, alias="consultationType")
    business_type: str | None = Field(None, alias="businessType")
    preferred_date: str | None = Field(None, alias="preferredDate")
    preferred_time: str | None = Field(None, alias="preferredTime")
    description: str | None = None
    urgency: str | None = None
    package_id: str | None = Field(None, alias="packageId")
    service_id: str | None = Field(None, alias="serviceId")

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(by_alias=False)
