from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: str
    service: str
    version: str
