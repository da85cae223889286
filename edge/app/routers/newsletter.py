from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from
from edge.app.schemas.newsletter import NewsletterRequest

SUBSCRIBED = "Successfully subscribed to newsletter!"

newsletter_router = APIRouter(prefix="/newsletter", tags=["Newsletter"])


@newsletter_router.post(
    "/subscribe",
    summary="Subscribe an e-mail address",
    description="Upserts on e-mail, so subscribing twice reactivates the same row. Datastore failures are still acknowledged.",
)
async def subscribe(request: Request, body: NewsletterRequest) -> JSONResponse:
    baas = baas_from(request)
    row = {
        "email": body.email,
        "first_name": body.first_name,
        "last_name": body.last_name,
        "subscription_source": body.source,
        "is_active": True,
        "subscribed_at": datetime.now(tz=timezone.utc).isoformat(),
    }

    if baas is not None:
        try:
            subscription = await baas.upsert(Table.NEWSLETTERS, row, on_conflict="email")
        except BaasError as exc:
            logger.bind(service_name=SERVICE_NAME, event="newsletter_store_failed", error=str(exc)).warning("")
        else:
            return JSONResponse(content={"message": SUBSCRIBED, "subscription": subscription})

    logger.bind(service_name=SERVICE_NAME, event="newsletter_received_fallback", source=body.source).info("")
    return JSONResponse(content={"message": SUBSCRIBED})
