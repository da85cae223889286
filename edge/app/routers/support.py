from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import Table, TicketStatus
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import authorization_error_response, baas_from, error_response, guard_from
from edge.app.schemas.support import SupportTicketRequest, TicketMessageRequest
from edge.app.services.access_guard import AuthorizationError
from edge.app.services.fallback_content import sample_support_tickets

TICKET_COLUMNS = "*,services(name,slug),service_packages(name,price)"
TICKET_DETAIL_COLUMNS = (
    "*,services(name,slug),service_packages(name,price),"
    "ticket_messages(id,message,message_type,is_internal,created_at,users(first_name,last_name))"
)
TICKET_CREATED = "Support ticket created successfully"


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


def _owned(ticket_id: str, user_id: str) -> dict[str, str]:
    return {"id": f"eq.{ticket_id}", "user_id": f"eq.{user_id}"}


support_router = APIRouter(
    prefix="/support/tickets",
    tags=["Support"],
    responses={401: {"description": "Missing or invalid token."}},
)


@support_router.post(
    "",
    summary="Open a support ticket",
    description="Creates an `open` ticket owned by the caller. A datastore failure still acknowledges the ticket with a fallback id.",
)
async def create_ticket(request: Request, body: SupportTicketRequest) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        principal = await guard.require_auth(request)
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    row = {**body.to_row(), "user_id": principal.user_id, "status": TicketStatus.OPEN}
    try:
        ticket = await baas.insert(Table.SUPPORT_TICKETS, row)
    except BaasError as exc:
        _log("ticket_store_failed", user_id=principal.user_id, error=str(exc))
        stamp = int(time.time() * 1000)
        ticket = {
            "id": f"ticket-{stamp}",
            "ticket_number": f"RCH{stamp}",
            "title": body.title,
            "description": body.description,
            "category": body.category,
            "priority": body.priority,
            "status": TicketStatus.OPEN,
            "user_id": principal.user_id,
            "created_at": datetime.now(tz=timezone.utc).isoformat(),
        }
    return JSONResponse(content={"message": TICKET_CREATED, "ticket": ticket})


@support_router.get("", summary="The caller's support tickets, newest first")
async def list_tickets(request: Request) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        principal = await guard.require_auth(request)
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    try:
        tickets = await baas.select(
            Table.SUPPORT_TICKETS,
            TICKET_COLUMNS,
            filters={"user_id": f"eq.{principal.user_id}"},
            order="created_at.desc",
        )
    except BaasError as exc:
        _log("tickets_fallback", user_id=principal.user_id, error=str(exc))
        tickets = sample_support_tickets(principal.user_id)
    return JSONResponse(content={"tickets": tickets})


@support_router.get(
    "/{ticket_id}",
    summary="One of the caller's tickets with its messages",
    responses={404: {"description": "No such ticket for this user."}},
)
async def get_ticket(request: Request, ticket_id: str) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        principal = await guard.require_auth(request)
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    try:
        ticket = await baas.select_one(
            Table.SUPPORT_TICKETS,
            TICKET_DETAIL_COLUMNS,
            filters=_owned(ticket_id, principal.user_id),
        )
    except BaasError as exc:
        _log("ticket_fetch_failed", ticket_id=ticket_id, error=str(exc))
        ticket = None
    if ticket is None:
        return error_response(404, "Ticket not found")
    return JSONResponse(content={"ticket": ticket})


@support_router.post(
    "/{ticket_id}/messages",
    summary="Add a message to one of the caller's tickets",
    responses={404: {"description": "No such ticket for this user."}, 500: {"description": "Message not stored."}},
)
async def add_message(request: Request, ticket_id: str, body: TicketMessageRequest) -> JSONResponse:
    guard, baas = guard_from(request), baas_from(request)
    if guard is None or baas is None:
        return error_response(503, "Service not available")

    try:
        principal = await guard.require_auth(request)
    except AuthorizationError as exc:
        return authorization_error_response(exc)

    try:
        ticket = await baas.select_one(Table.SUPPORT_TICKETS, "id", filters=_owned(ticket_id, principal.user_id))
    except BaasError as exc:
        _log("ticket_ownership_check_failed", ticket_id=ticket_id, error=str(exc))
        ticket = None
    if ticket is None:
        return error_response(404, "Ticket not found")

    try:
        message = await baas.insert(
            Table.TICKET_MESSAGES,
            {
                "ticket_id": ticket_id,
                "user_id": principal.user_id,
                "message": body.message,
                "message_type": "message",
                "is_internal": False,
            },
        )
    except BaasError as exc:
        _log("ticket_message_store_failed", ticket_id=ticket_id, error=str(exc))
        return error_response(500, "Failed to add message")
    return JSONResponse(content={"message": "Message added successfully", "data": message})
