from __future__ import annotations

import time

from fastapi import APIRouter, Request, Response
from loguru import logger

from edge.app.constants import ContactStatus, Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from
from edge.app.schemas.contact import ContactRequest, ContactResponse

CONTACT_ACKNOWLEDGEMENT = "Contact form submitted successfully. We will get back to you within 24 hours."

contact_router = APIRouter(prefix="/contact", tags=["Contact"])


@contact_router.post(
    "",
    summary="Submit a contact form",
    description="Stores the form with status `new`. When the datastore rejects the write the submission is still acknowledged with a fallback id.",
    responses={200: {"description": "Form accepted."}, 422: {"description": "Invalid request body."}},
)
async def post_contact(request: Request, body: ContactRequest) -> Response:
    row = {**body.model_dump(), "status": ContactStatus.NEW}
    baas = baas_from(request)

    contact_id: str | None = None
    if baas is not None:
        try:
            stored = await baas.insert(Table.CONTACT_FORMS, row)
            if stored.get("id") is not None:
                contact_id = str(stored["id"])
        except BaasError as exc:
            logger.bind(service_name=SERVICE_NAME, event="contact_store_failed", error=str(exc)).warning("")

    if contact_id is None:
        contact_id = f"fallback-id-{int(time.time() * 1000)}"
        logger.bind(
            service_name=SERVICE_NAME,
            event="contact_received_fallback",
            email=body.email,
            subject=body.subject,
            inquiry_type=body.inquiry_type,
        ).info("")
    else:
        logger.bind(service_name=SERVICE_NAME, event="contact_stored", id=contact_id).info("")

    return Response(
        status_code=200,
        media_type="application/json",
        content=ContactResponse(message=CONTACT_ACKNOWLEDGEMENT, id=contact_id).model_dump_json(),
    )
