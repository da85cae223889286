from datetime import datetime, timezone

from fastapi import APIRouter

from edge.app.core import API_VERSION, SERVICE_TITLE
from edge.app.schemas.health import HealthResponse

health_router = APIRouter(tags=["Health"])


@health_router.get(
    "/health",
    summary="Liveness probe",
    description="Returns 200 whenever the process is live, whatever the schema bootstrap outcome.",
    response_model=HealthResponse,
)
async def health() -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        service=SERVICE_TITLE,
        version=API_VERSION,
    )
