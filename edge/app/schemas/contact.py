from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str | None = None
    company: str | None = None
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    inquiry_type: str = "general"


class ContactResponse(BaseModel):
    message: str
    id: str
