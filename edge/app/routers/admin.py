from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import ADMIN_ROLES, Role, Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import authorization_error_response, baas_from, error_response, guard_from
from edge.app.services.access_guard import AuthorizationError

RECENT_CONTACTS_LIMIT = 5


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


admin_router = APIRouter(prefix="/admin", tags=["Admin"])


@admin_router.get(
    "/contact-forms",
    summary="List contact forms (admin only)",
    responses={401: {"description": "Missing or invalid token."}, 403: {"description": "Role not allowed."}},
)
async def list_contact_forms(
    request: Request,
    status: str | None = None,
    inquiry_type: str | None = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        await guard.require_role(request, ADMIN_ROLES)
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    filters: dict[str, str] = {}
    if status:
        filters["status"] = f"eq.{status}"
    if inquiry_type:
        filters["inquiry_type"] = f"eq.{inquiry_type}"
    try:
        rows = await baas.select(
            Table.CONTACT_FORMS,
            filters=filters,
            order="created_at.desc",
            limit=limit,
            offset=offset,
        )
    except BaasError as exc:
        _log("contact_forms_fetch_failed", error=str(exc))
        return error_response(500, "Failed to fetch contact forms")
    return JSONResponse(content={"contactForms": rows})


@admin_router.get(
    "/dashboard",
    summary="Dashboard statistics (admin only)",
    responses={401: {"description": "Missing or invalid token."}, 403: {"description": "Role not allowed."}},
)
async def dashboard(request: Request) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        await guard.require_role(request, (Role.ADMIN,))
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    stats: dict[str, Any] = {
        "total_users": 0,
        "total_tickets": 0,
        "total_consultations": 0,
        "recent_contacts": [],
    }
    try:
        users, tickets, consultations, contacts = await asyncio.gather(
            baas.count(Table.USER_PROFILES),
            baas.count(Table.SUPPORT_TICKETS),
            baas.count(Table.CONSULTATIONS),
            baas.select(Table.CONTACT_FORMS, order="created_at.desc", limit=RECENT_CONTACTS_LIMIT),
        )
    except BaasError as exc:
        _log("dashboard_stats_failed", error=str(exc))
    else:
        stats.update(
            total_users=users,
            total_tickets=tickets,
            total_consultations=consultations,
            recent_contacts=contacts,
        )
    return JSONResponse(content={"stats": stats})
