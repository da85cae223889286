from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from edge.app.schemas.contact import EMAIL_PATTERN


class GovernmentRequest(BaseModel):
    """Assisted government-service application; camelCase payload from the website."""

    model_config = ConfigDict(populate_by_name=True)

    service_id: str = Field(..., min_length=1, alias="serviceId")
    applicant_first_name: str = Field(..., min_length=1, alias="applicantFirstName")
    applicant_last_name: str = Field(..., min_length=1, alias="applicantLastName")
    applicant_email: str = Field(..., pattern=EMAIL_PATTERN, alias="applicantEmail")
    applicant_phone: str | None = Field(None, alias="applicantPhone")
    applicant_id_number: str | None = Field(None, alias="applicantIdNumber")
    request_details: dict[str, Any] | str | None = Field(None, alias="requestDetails")

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(by_alias=False)
