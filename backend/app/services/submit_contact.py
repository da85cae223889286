"""
Accepts a validated contact request and ContactRepository abstraction; returns an outcome.
Router translates outcome to HTTP status codes and content.
"""

from dataclasses import dataclass

from backend.app.ports.contact_repository import ContactRepository
from backend.app.schemas.contact import ContactRequest


@dataclass(frozen=True)
class SubmitContactOutcome:
    """Result of submit_contact. success=True => id set; success=False => error set."""
    success: bool
    id: str | None = None
    error: str | None = None


async def submit_contact(request: ContactRequest, repository: ContactRepository) -> SubmitContactOutcome:
    try:
        contact_id = await repository.create(request.model_dump())
    except Exception as e:
        return SubmitContactOutcome(success=False, error=str(e))
    return SubmitContactOutcome(success=True, id=contact_id)
