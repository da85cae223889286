from pydantic import BaseModel, ConfigDict, Field

from edge.app.schemas.contact import EMAIL_PATTERN


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
