from pydantic import BaseModel, ConfigDict, Field

from edge.app.schemas.contact import EMAIL_PATTERN


class NewsletterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., pattern=EMAIL_PATTERN)
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    source: str = "website"
