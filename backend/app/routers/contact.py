from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger

from backend.app.core import SERVICE_NAME
from backend.app.schemas.contact import ContactRequest, ContactResponse
from backend.app.services.submit_contact import submit_contact

CONTACT_ACKNOWLEDGEMENT = "Contact form submitted successfully. We will get back to you within 24 hours."


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


contact_router = APIRouter(prefix="/api/contact", tags=["Contact"])


@contact_router.post(
    "",
    summary="Submit a contact form",
    description="Stores the contact form in the primary datastore with status `new`.",
    responses={
        201: {"description": "Contact form stored."},
        422: {"description": "Invalid request body."},
        503: {"description": "Datastore unavailable."},
    },
)
async def post_contact(request: Request, body: ContactRequest) -> Response:
    repo = getattr(request.app.state, "contact_repository", None)
    if repo is None:
        return Response(status_code=503, content="Database not available")

    outcome = await submit_contact(body, repo)
    if not outcome.success:
        logger.bind(service_name=SERVICE_NAME, event="contact_store_failed", error=outcome.error).warning("")
        return Response(status_code=503, content="Failed to submit contact form")

    _log("contact_stored", id=outcome.id, inquiry_type=body.inquiry_type)
    return Response(
        status_code=201,
        media_type="application/json",
        content=ContactResponse(message=CONTACT_ACKNOWLEDGEMENT, id=outcome.id or "").model_dump_json(),
    )
