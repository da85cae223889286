from __future__ import annotations

import time
from datetime import date, datetime, timezone

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import ConsultationStatus, Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from
from edge.app.schemas.consultation import ConsultationRequest
from edge.app.services.fallback_content import sample_consultation_slots

CONSULTATION_ACKNOWLEDGEMENT = (
    "Consultation request submitted successfully. We will contact you within 24 hours."
)

consultations_router = APIRouter(prefix="/consultations", tags=["Consultations"])


@consultations_router.post(
    "",
    summary="Book a consultation",
    description="Creates a pending consultation request. A datastore failure still acknowledges the booking with a fallback id.",
)
async def book_consultation(request: Request, body: ConsultationRequest) -> JSONResponse:
    row = {**body.to_row(), "status": ConsultationStatus.PENDING}
    baas = baas_from(request)

    consultation = None
    if baas is not None:
        try:
            consultation = await baas.insert(Table.CONSULTATIONS, row)
        except BaasError as exc:
            logger.bind(service_name=SERVICE_NAME, event="consultation_store_failed", error=str(exc)).warning("")

    if consultation is None:
        consultation = {
            "id": f"consultation-{int(time.time() * 1000)}",
            "first_name": body.first_name,
            "last_name": body.last_name,
            "email": body.email,
            "phone": body.phone,
            "consultation_type": body.consultation_type,
            "status": ConsultationStatus.PENDING,
            "created_at": datetime.now(tz=timezone.utc).isoformat(),
        }
        logger.bind(service_name=SERVICE_NAME, event="consultation_received_fallback", id=consultation["id"]).info("")

    return JSONResponse(content={"message": CONSULTATION_ACKNOWLEDGEMENT, "consultation": consultation})


@consultations_router.get("/slots", summary="Available consultation slots from a date")
async def list_slots(
    request: Request,
    slot_date: date | None = Query(None, alias="date"),
    consultant_id: str | None = None,
) -> JSONResponse:
    start = slot_date or datetime.now(tz=timezone.utc).date()
    baas = baas_from(request)
    if baas is None:
        return JSONResponse(content={"slots": sample_consultation_slots(start)})

    filters = {
        "is_available": "eq.true",
        "is_blocked": "eq.false",
        "date": f"gte.{start.isoformat()}",
    }
    if consultant_id:
        filters["consultant_id"] = f"eq.{consultant_id}"
    try:
        slots = await baas.select(Table.CONSULTATION_SLOTS, filters=filters, order="date,start_time")
    except BaasError as exc:
        logger.bind(service_name=SERVICE_NAME, event="consultation_slots_fallback", error=str(exc)).warning("")
        slots = sample_consultation_slots(start)
    return JSONResponse(content={"slots": slots})
