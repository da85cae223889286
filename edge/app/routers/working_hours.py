from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from
from edge.app.services.fallback_content import default_working_hours

working_hours_router = APIRouter(prefix="/working-hours", tags=["Working hours"])


@working_hours_router.get("", summary="Active working hours ordered by day of week")
async def list_working_hours(request: Request) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return JSONResponse(content={"workingHours": default_working_hours()})

    try:
        rows = await baas.select(Table.WORKING_HOURS, filters={"active": "eq.true"}, order="day_of_week")
    except BaasError as exc:
        logger.bind(service_name=SERVICE_NAME, event="working_hours_fallback", error=str(exc)).warning("")
        rows = default_working_hours()
    return JSONResponse(content={"workingHours": rows})
