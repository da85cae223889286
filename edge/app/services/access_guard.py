"""Per-request authentication and role authorization.

`require_auth` validates the bearer token with the identity service;
`require_role` composes it with a profile role lookup. Results are never cached,
so call one of them at the top of every privileged handler.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping, Protocol

from loguru import logger

from edge.app.constants import Table
from edge.app.core import SERVICE_NAME
from edge.app.domain.models import Principal, RoleGrant
from edge.app.ports.baas_client import BaasClient, BaasError

BEARER_PREFIX = "Bearer "


class AuthorizationError(Exception):
    """Base for request authorization failures; rejects only the current request."""


class Unauthorized(AuthorizationError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InsufficientPermissions(AuthorizationError):
    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message)


class HasHeaders(Protocol):
    @property
    def headers(self) -> Mapping[str, str]: ...


def _reject(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


def bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AccessGuard:
    def __init__(self, client: BaasClient, *, profiles_table: str = Table.USER_PROFILES) -> None:
        self._client = client
        self._profiles_table = profiles_table

    async def require_auth(self, request: HasHeaders) -> Principal:
        token = bearer_token(request.headers.get("Authorization"))
        if token is None:
            _reject("auth_rejected", reason="missing_bearer")
            raise Unauthorized()

        try:
            user = await self._client.get_user(token)
        except BaasError as exc:
            _reject("auth_rejected", reason="token_invalid", status_code=exc.status_code)
            raise Unauthorized() from exc
        if not user or not user.get("id"):
            _reject("auth_rejected", reason="no_user")
            raise Unauthorized()

        return Principal(user_id=str(user["id"]), email=user.get("email"))

    async def require_role(self, request: HasHeaders, allowed_roles: Iterable[str]) -> RoleGrant:
        principal = await self.require_auth(request)
        allowed = set(allowed_roles)

        try:
            profile = await self._client.select_one(
                self._profiles_table,
                "role",
                filters={"user_id": f"eq.{principal.user_id}"},
            )
        except BaasError as exc:
            _reject("role_rejected", reason="lookup_failed", user_id=principal.user_id)
            raise InsufficientPermissions() from exc

        role = (profile or {}).get("role")
        if role is None or role not in allowed:
            _reject("role_rejected", reason="role_not_allowed", user_id=principal.user_id, role=role)
            raise InsufficientPermissions()

        return RoleGrant(principal=replace(principal, role=role), profile=dict(profile or {}))
