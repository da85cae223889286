from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import Role, Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import authorization_error_response, baas_from, error_response, guard_from
from edge.app.schemas.auth import SignupRequest
from edge.app.services.access_guard import AuthorizationError


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.post(
    "/signup",
    summary="Create a user account",
    responses={400: {"description": "Identity provider rejected the user."}, 503: {"description": "BaaS unavailable."}},
)
async def signup(request: Request, body: SignupRequest) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return error_response(503, "Service not available")

    try:
        user = await baas.create_user(
            email=body.email,
            password=body.password,
            user_metadata={"firstName": body.first_name, "lastName": body.last_name},
        )
    except BaasError as exc:
        _log("signup_rejected", error=str(exc))
        return error_response(400, str(exc))

    _log("user_created", user_id=user.get("id"))
    return JSONResponse(
        content={
            "message": "User created successfully",
            "user": {
                "id": user.get("id"),
                "email": user.get("email", body.email),
                "firstName": body.first_name,
                "lastName": body.last_name,
                "role": Role.USER,
            },
        }
    )


@auth_router.get("/profile", summary="Current user's profile")
async def profile(request: Request) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        principal = await guard.require_auth(request)
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    try:
        row = await baas.select_one(Table.USER_PROFILES, filters={"user_id": f"eq.{principal.user_id}"})
    except BaasError as exc:
        _log("profile_fetch_failed", user_id=principal.user_id, error=str(exc))
        return error_response(500, "Failed to fetch profile")
    if row is None:
        return error_response(404, "Profile not found")
    return JSONResponse(content={"profile": row})
