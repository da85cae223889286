"""Port: database connection for health and persistence. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Callable, Protocol

from backend.app.constants import FailureCategory
from backend.app.domain.models import ConnectionEvent, ConnectionHandle

ConnectionObserver = Callable[[ConnectionEvent], None]


class ConnectionConfigError(Exception):
    """Raised when the connection URI is missing; no network call has been made."""


class DatabaseConnectError(Exception):
    """Raised when the single initial connect attempt fails."""

    def __init__(self, category: FailureCategory, message: str) -> None:
        super().__init__(message)
        self.category = category


class DatabaseConnection(Protocol):
    """Interface for DB connection lifecycle, observers and ping."""

    @property
    def ready(self) -> bool: ...

    @property
    def handle(self) -> ConnectionHandle: ...

    def add_observer(self, observer: ConnectionObserver) -> None: ...

    async def connect(self) -> ConnectionHandle: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...
