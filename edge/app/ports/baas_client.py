"""BaaS client port: contract for the secondary datastore's control plane.

Services and routers depend on this port; infrastructure (httpx against the
Supabase REST and auth APIs) implements it.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


class BaasError(Exception):
    """Any failed call to the BaaS control plane (status, network, timeout)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class BaasClient(Protocol):
    """Port: table reads/writes, RPCs and identity lookups. Raise BaasError on failure."""

    async def rpc(self, function: str, params: Mapping[str, Any] | None = None) -> Any: ...

    async def select(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """Filters are PostgREST expressions keyed by column, e.g. ``{"slug": "eq.backup"}``."""
        ...

    async def select_one(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None: ...

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]: ...

    async def upsert(self, table: str, row: Mapping[str, Any], *, on_conflict: str) -> dict[str, Any]:
        """Insert, or update the row whose ``on_conflict`` column matches."""
        ...

    async def count(self, table: str) -> int: ...

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Validate an access token with the identity service and return its user."""
        ...

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        user_metadata: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]: ...

    async def close(self) -> None: ...
