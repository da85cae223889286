"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass

from backend.app.constants import ConnectionState


@dataclass(frozen=True)
class ConnectionHandle:
    """Snapshot of the process-owned datastore connection."""

    host: str
    port: int
    database_name: str
    max_pool_size: int
    server_selection_timeout_ms: int
    socket_timeout_ms: int
    state: ConnectionState = ConnectionState.DISCONNECTED


@dataclass(frozen=True)
class ConnectionEvent:
    """Lifecycle transition delivered to connection observers."""

    state: ConnectionState
    previous: ConnectionState
    error: str | None = None
