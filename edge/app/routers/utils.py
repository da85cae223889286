from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from edge.app.ports.baas_client import BaasClient
from edge.app.services.access_guard import AccessGuard, AuthorizationError, InsufficientPermissions


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def authorization_error_response(exc: AuthorizationError) -> JSONResponse:
    """Unauthorized -> 401, InsufficientPermissions -> 403."""
    status_code = 403 if isinstance(exc, InsufficientPermissions) else 401
    return error_response(status_code, str(exc))


def baas_from(request: Request) -> BaasClient | None:
    return getattr(request.app.state, "baas_client", None)


def guard_from(request: Request) -> AccessGuard | None:
    return getattr(request.app.state, "access_guard", None)


__all__ = [
    "error_response",
    "authorization_error_response",
    "baas_from",
    "guard_from",
]
