from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Mapping

import pytest
from fastapi import FastAPI

from backend.app.constants import ConnectionState
from backend.app.domain.models import ConnectionEvent, ConnectionHandle
from backend.app.main import create_app as create_backend_app
from edge.app.ports.baas_client import BaasError
from edge.app.routers.admin import admin_router
from edge.app.routers.auth import auth_router
from edge.app.routers.blog import blog_router
from edge.app.routers.consultations import consultations_router
from edge.app.routers.contact import contact_router
from edge.app.routers.government import government_router
from edge.app.routers.health import health_router
from edge.app.routers.newsletter import newsletter_router
from edge.app.routers.services import services_router
from edge.app.routers.support import support_router
from edge.app.routers.working_hours import working_hours_router
from edge.app.services.access_guard import AccessGuard

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"


# ---- backend fakes ----


class FakeDatabase:
    """Implements DatabaseConnection for tests. Full protocol so connect/close/ready won't break callers."""

    def __init__(self, ping_ok: bool = True, *, connect_error: Exception | None = None) -> None:
        self._ping_ok = ping_ok
        self._connect_error = connect_error
        self._observers: list[Callable[[ConnectionEvent], None]] = []
        self._handle = ConnectionHandle(
            host="db.example.net",
            port=27017,
            database_name="remotecyberhelp",
            max_pool_size=10,
            server_selection_timeout_ms=10_000,
            socket_timeout_ms=45_000,
        )
        self.close_calls = 0

    @property
    def ready(self) -> bool:
        return self._handle.state == ConnectionState.CONNECTED

    @property
    def handle(self) -> ConnectionHandle:
        return self._handle

    def add_observer(self, observer: Callable[[ConnectionEvent], None]) -> None:
        self._observers.append(observer)

    async def connect(self) -> ConnectionHandle:
        if self._connect_error is not None:
            raise self._connect_error
        self._handle = replace(self._handle, state=ConnectionState.CONNECTED)
        return self._handle

    async def ping(self) -> bool:
        return self._ping_ok

    async def close(self) -> None:
        self.close_calls += 1
        self._handle = replace(self._handle, state=ConnectionState.DISCONNECTED)


class FakeContactRepository:
    """Implements ContactRepository for tests; records stored submissions."""

    def __init__(self, *, raise_on_create: Exception | None = None) -> None:
        self.created: list[dict[str, Any]] = []
        self._raise_on_create = raise_on_create

    async def create(self, submission: dict[str, Any]) -> str:
        if self._raise_on_create is not None:
            raise self._raise_on_create
        self.created.append(submission)
        return f"contact-{len(self.created)}"


class _FakeAdmin:
    def __init__(self, owner: Any) -> None:
        self._owner = owner

    async def command(self, name: str) -> dict[str, Any]:
        self._owner.commands.append(name)
        if self._owner.ping_error is not None:
            raise self._owner.ping_error
        return {"ok": 1}


def fake_motor_client_class(
    *,
    ping_error: Exception | None = None,
    address: tuple[str, int] | None = ("db.example.net", 27017),
) -> type:
    """Build a stand-in for AsyncIOMotorClient; instances are recorded on `.created`."""
    created: list[Any] = []

    class _FakeMotorClient:
        def __init__(self, uri: str, **kwargs: Any) -> None:
            self.uri = uri
            self.kwargs = kwargs
            self.ping_error = ping_error
            self.address = address
            self.commands: list[str] = []
            self.closed = False
            self.admin = _FakeAdmin(self)
            created.append(self)

        def close(self) -> None:
            self.closed = True

    _FakeMotorClient.created = created
    return _FakeMotorClient


@pytest.fixture()
def backend_app() -> FastAPI:
    app = create_backend_app()
    app.state.database = FakeDatabase()
    app.state.contact_repository = FakeContactRepository()
    return app


# ---- edge fakes ----


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def _matches(row: Mapping[str, Any], filters: Mapping[str, str] | None) -> bool:
    for column, expression in (filters or {}).items():
        op, _, expected = expression.partition(".")
        actual = _as_text(row.get(column))
        if op == "eq" and actual != expected:
            return False
        if op == "gte" and actual < expected:
            return False
    return True


class FakeBaasClient:
    """Implements BaasClient over in-memory tables; records every call for assertions."""

    def __init__(
        self,
        *,
        tables: Mapping[str, list[dict[str, Any]]] | None = None,
        table_errors: Mapping[str, Exception] | None = None,
        insert_errors: Mapping[str, Exception] | None = None,
        rpc_errors: Mapping[str, Exception] | None = None,
        rpc_effects: Mapping[str, Callable[["FakeBaasClient"], None]] | None = None,
        users: Mapping[str, dict[str, Any]] | None = None,
        user_error: Exception | None = None,
        create_user_error: Exception | None = None,
    ) -> None:
        self.tables = {name: [dict(row) for row in rows] for name, rows in (tables or {}).items()}
        self.table_errors = dict(table_errors or {})
        self.insert_errors = dict(insert_errors or {})
        self.rpc_errors = dict(rpc_errors or {})
        self.rpc_effects = dict(rpc_effects or {})
        self.users = dict(users or {})
        self.user_error = user_error
        self.create_user_error = create_user_error

        self.rpc_calls: list[str] = []
        self.inserts: list[str] = []
        self.select_calls: list[tuple[str, dict[str, Any]]] = []
        self.get_user_calls: list[str] = []
        self.created_users: list[dict[str, Any]] = []
        self.closed = False

    async def rpc(self, function: str, params: Mapping[str, Any] | None = None) -> Any:
        self.rpc_calls.append(function)
        if function in self.rpc_errors:
            raise self.rpc_errors[function]
        effect = self.rpc_effects.get(function)
        if effect is not None:
            effect(self)
        return None

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
        self.select_calls.append(
            (
                table,
                {"columns": columns, "filters": dict(filters or {}), "order": order, "limit": limit, "offset": offset},
            )
        )
        if table in self.table_errors:
            raise self.table_errors[table]
        if table not in self.tables:
            raise BaasError(f'relation "{table}" does not exist', status_code=404)
        rows = [row for row in self.tables[table] if _matches(row, filters)]
        rows = rows[offset or 0:]
        if limit is not None:
            rows = rows[:limit]
        return [dict(row) for row in rows]

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
        self.inserts.append(table)
        for errors in (self.insert_errors, self.table_errors):
            if table in errors:
                raise errors[table]
        rows = self.tables.setdefault(table, [])
        stored = {"id": f"{table}-{len(rows) + 1}", **row}
        rows.append(stored)
        return dict(stored)

    async def upsert(self, table: str, row: Mapping[str, Any], *, on_conflict: str) -> dict[str, Any]:
        for errors in (self.insert_errors, self.table_errors):
            if table in errors:
                raise errors[table]
        rows = self.tables.setdefault(table, [])
        for existing in rows:
            if existing.get(on_conflict) == row.get(on_conflict):
                existing.update(row)
                return dict(existing)
        return await self.insert(table, row)

    async def count(self, table: str) -> int:
        if table in self.table_errors:
            raise self.table_errors[table]
        return len(self.tables.get(table, []))

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        self.get_user_calls.append(access_token)
        if self.user_error is not None:
            raise self.user_error
        return self.users.get(access_token)

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        user_metadata: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        if self.create_user_error is not None:
            raise self.create_user_error
        user = {"id": f"user-{len(self.created_users) + 1}", "email": email, "user_metadata": dict(user_metadata or {})}
        self.created_users.append(user)
        return user

    async def close(self) -> None:
        self.closed = True


def default_edge_tables() -> dict[str, list[dict[str, Any]]]:
    return {
        "user_profiles": [
            {"id": "p-1", "user_id": "admin-1", "role": "admin", "email": "admin@example.com"},
            {"id": "p-2", "user_id": "user-1", "role": "user", "email": "user@example.com"},
        ],
        "services": [
            {"id": "s-1", "slug": "remote-support", "name": "Remote Support", "active": True},
            {"id": "s-2", "slug": "retired", "name": "Retired Service", "active": False},
        ],
        "blog_posts": [
            {"id": "b-1", "title": "Published", "published": True},
            {"id": "b-2", "title": "Draft", "published": False},
        ],
        "contact_forms": [
            {"id": "c-1", "name": "Ann", "status": "new", "inquiry_type": "general"},
            {"id": "c-2", "name": "Ben", "status": "resolved", "inquiry_type": "billing"},
        ],
        "working_hours": [
            {"day_of_week": 1, "day_name": "Monday", "active": True},
        ],
        "consultations": [],
        "support_tickets": [{"id": "t-1", "user_id": "user-1", "title": "Printer offline", "status": "open"}],
        "ticket_messages": [],
        "newsletters": [],
        "blog_likes": [],
        "blog_views": [],
        "government_services": [
            {"id": "g-1", "name": "KRA PIN Registration", "is_active": True},
            {"id": "g-2", "name": "Retired Service", "is_active": False},
        ],
        "government_requests": [],
        "consultation_time_slots": [
            {"id": "slot-1", "date": "2030-01-15", "start_time": "09:00:00", "is_available": True, "is_blocked": False},
            {"id": "slot-2", "date": "2030-01-15", "start_time": "10:00:00", "is_available": True, "is_blocked": True},
        ],
    }


def default_edge_users() -> dict[str, dict[str, Any]]:
    return {
        ADMIN_TOKEN: {"id": "admin-1", "email": "admin@example.com"},
        USER_TOKEN: {"id": "user-1", "email": "user@example.com"},
    }


def build_edge_app(baas: FakeBaasClient | None) -> FastAPI:
    app = FastAPI()
    app.state.baas_client = baas
    app.state.access_guard = AccessGuard(baas) if baas is not None else None
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(blog_router)
    app.include_router(contact_router)
    app.include_router(working_hours_router)
    app.include_router(services_router)
    app.include_router(consultations_router)
    app.include_router(support_router)
    app.include_router(newsletter_router)
    app.include_router(government_router)
    app.include_router(admin_router)
    return app


@pytest.fixture()
def edge_baas() -> FakeBaasClient:
    return FakeBaasClient(tables=default_edge_tables(), users=default_edge_users())


@pytest.fixture()
def edge_app(edge_baas: FakeBaasClient) -> FastAPI:
    return build_edge_app(edge_baas)
