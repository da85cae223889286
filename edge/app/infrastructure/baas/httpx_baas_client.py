"""Concrete BaaS client speaking the Supabase REST (PostgREST) and auth (GoTrue) APIs over httpx."""
from __future__ import annotations

from typing import Any, Mapping

import httpx

from edge.app.ports.baas_client import BaasError

REST_PREFIX = "/rest/v1"
AUTH_PREFIX = "/auth/v1"


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"http status {response.status_code}"
    if isinstance(payload, dict):
        for key in ("message", "msg", "error_description", "error"):
            if payload.get(key):
                return str(payload[key])
    return f"http status {response.status_code}"


def _total_from_content_range(value: str | None) -> int:
    # "0-4/42" or "*/42"; "*" total means the server did not count.
    if not value or "/" not in value:
        return 0
    total = value.rpartition("/")[2]
    return int(total) if total.isdigit() else 0


def _first_row(response: httpx.Response, table: str) -> dict[str, Any]:
    payload = response.json()
    if isinstance(payload, list):
        if not payload:
            raise BaasError(f"write to {table} returned no row")
        return payload[0]
    return payload


class HttpxBaasClient:
    """BaasClient implementation using httpx.AsyncClient (base_url is the project URL)."""

    def __init__(self, client: httpx.AsyncClient, *, service_key: str) -> None:
        self._client = client
        self._service_key = service_key

    def _headers(self, *, bearer: str | None = None, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._service_key,
            "Authorization": f"Bearer {bearer or self._service_key}",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers or self._headers(),
            )
        except httpx.TimeoutException as exc:
            raise BaasError(f"timeout calling {path}") from exc
        except httpx.HTTPError as exc:
            raise BaasError(f"request to {path} failed: {exc}") from exc
        if response.is_error:
            raise BaasError(_error_message(response), status_code=response.status_code)
        return response

    async def rpc(self, function: str, params: Mapping[str, Any] | None = None) -> Any:
        response = await self._request("POST", f"{REST_PREFIX}/rpc/{function}", json=dict(params or {}))
        return response.json() if response.content else None

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
        params: dict[str, str] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        if offset is not None:
            params["offset"] = str(offset)
        response = await self._request("GET", f"{REST_PREFIX}/{table}", params=params)
        return list(response.json() or [])

    async def select_one(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        rows = await self.select(table, columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"{REST_PREFIX}/{table}",
            json=dict(row),
            headers=self._headers(extra={"Prefer": "return=representation"}),
        )
        return _first_row(response, table)

    async def upsert(self, table: str, row: Mapping[str, Any], *, on_conflict: str) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"{REST_PREFIX}/{table}",
            params={"on_conflict": on_conflict},
            json=dict(row),
            headers=self._headers(extra={"Prefer": "resolution=merge-duplicates,return=representation"}),
        )
        return _first_row(response, table)

    async def count(self, table: str) -> int:
        response = await self._request(
            "HEAD",
            f"{REST_PREFIX}/{table}",
            params={"select": "id"},
            headers=self._headers(extra={"Prefer": "count=exact"}),
        )
        return _total_from_content_range(response.headers.get("content-range"))

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        response = await self._request("GET", f"{AUTH_PREFIX}/user", headers=self._headers(bearer=access_token))
        user = response.json()
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        user_metadata: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"{AUTH_PREFIX}/admin/users",
            json={
                "email": email,
                "password": password,
                "user_metadata": dict(user_metadata or {}),
                "email_confirm": True,
            },
        )
        return response.json()

    async def close(self) -> None:
        await self._client.aclose()
