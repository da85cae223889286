import asyncio
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger

from backend.app.core import API_VERSION, SERVICE_NAME
from backend.app.schemas.health import HealthResponse

READINESS_PING_TIMEOUT_DEFAULT = 5.0

health_router = APIRouter(tags=["Health"])


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


def _settings_value(request: Request, name: str, default: Any) -> Any:
    settings = getattr(request.app.state, "settings", None)
    return getattr(settings, name, None) or default


@health_router.get(
    "/health",
    summary="Liveness probe",
    description="Returns 200 while the process is running. Does not touch the database.",
    response_model=HealthResponse,
)
@health_router.get("/api/health", include_in_schema=False, response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    return HealthResponse(
        message="RemotCyberHelp API is running",
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        environment=_settings_value(request, "environment", "development"),
        version=API_VERSION,
    )


@health_router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns 200 only when the database connection answers a ping within the readiness timeout.",
    responses={
        200: {"description": "Database is ready."},
        503: {"description": "Database not connected or not answering."},
    },
)
async def ready(request: Request) -> Response:
    database = getattr(request.app.state, "database", None)
    if database is None:
        _log("readiness_failed", reason="database_not_initialized")
        return Response(status_code=503, content="Not ready")

    timeout_s = _settings_value(request, "readiness_ping_timeout_seconds", READINESS_PING_TIMEOUT_DEFAULT)
    try:
        ping_ok = await asyncio.wait_for(database.ping(), timeout=timeout_s)
    except asyncio.TimeoutError:
        _log("readiness_failed", reason="db_ping_timeout")
        return Response(status_code=503, content="Database not ready")
    if not ping_ok:
        _log("readiness_failed", reason="db_not_ready")
        return Response(status_code=503, content="Database not ready")
    return Response(status_code=200, content="OK")
