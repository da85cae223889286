from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from, error_response


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


services_router = APIRouter(prefix="/services", tags=["Services"])


@services_router.get("", summary="Active services with their packages")
async def list_services(request: Request) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return error_response(503, "Service not available")

    try:
        services = await baas.select(
            Table.SERVICES,
            "*,service_packages!inner(*)",
            filters={"active": "eq.true"},
            order="created_at",
        )
    except BaasError as exc:
        _log("services_fetch_failed", error=str(exc))
        return error_response(500, "Failed to fetch services")
    return JSONResponse(content={"services": services})


@services_router.get("/{slug}", summary="One active service by slug")
async def get_service(request: Request, slug: str) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return error_response(503, "Service not available")

    try:
        service = await baas.select_one(
            Table.SERVICES,
            "*,service_packages(*)",
            filters={"slug": f"eq.{slug}", "active": "eq.true"},
        )
    except BaasError as exc:
        _log("service_fetch_failed", slug=slug, error=str(exc))
        service = None
    if service is None:
        return error_response(404, "Service not found")
    return JSONResponse(content={"service": service})
