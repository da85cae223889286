from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import GovernmentRequestStatus, Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from
from edge.app.schemas.government import GovernmentRequest
from edge.app.services.fallback_content import sample_government_services

REQUEST_ACKNOWLEDGEMENT = (
    "Government service request submitted successfully. We will contact you within 24 hours."
)

government_router = APIRouter(prefix="/government", tags=["Government services"])


@government_router.get("/services", summary="Active assisted government services")
async def list_government_services(request: Request) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return JSONResponse(content={"services": sample_government_services()})

    try:
        services = await baas.select(Table.GOVERNMENT_SERVICES, filters={"is_active": "eq.true"}, order="name")
    except BaasError as exc:
        logger.bind(service_name=SERVICE_NAME, event="government_services_fallback", error=str(exc)).warning("")
        services = sample_government_services()
    return JSONResponse(content={"services": services})


@government_router.post(
    "/requests",
    summary="Request help with a government service",
    description="Creates a pending request. A datastore failure still acknowledges it with a fallback request number.",
)
async def create_government_request(request: Request, body: GovernmentRequest) -> JSONResponse:
    baas = baas_from(request)
    row = {**body.to_row(), "status": GovernmentRequestStatus.PENDING}

    created = None
    if baas is not None:
        try:
            created = await baas.insert(Table.GOVERNMENT_REQUESTS, row)
        except BaasError as exc:
            logger.bind(service_name=SERVICE_NAME, event="government_request_store_failed", error=str(exc)).warning("")

    if created is None:
        stamp = int(time.time() * 1000)
        created = {
            "id": f"gov-req-{stamp}",
            "request_number": f"GOV{stamp}",
            "status": GovernmentRequestStatus.PENDING,
            "created_at": datetime.now(tz=timezone.utc).isoformat(),
        }
        logger.bind(service_name=SERVICE_NAME, event="government_request_received_fallback", id=created["id"]).info("")

    return JSONResponse(content={"message": REQUEST_ACKNOWLEDGEMENT, "request": created})
