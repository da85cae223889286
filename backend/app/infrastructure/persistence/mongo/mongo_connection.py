import inspect
import threading
from dataclasses import replace
from typing import Any
from urllib.parse import urlsplit

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import (
    ConfigurationError,
    ConnectionFailure,
    ExecutionTimeout,
    InvalidOperation,
    NetworkTimeout,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from backend.app.config.settings import Settings
from backend.app.constants import DEFAULT_MONGO_PORT, ConnectionState, FailureCategory
from backend.app.core import SERVICE_NAME
from backend.app.domain.models import ConnectionEvent, ConnectionHandle
from backend.app.infrastructure.persistence.mongo.monitoring import TopologyStateBridge
from backend.app.ports.database_connection import (
    ConnectionConfigError,
    ConnectionObserver,
    DatabaseConnectError,
)

_AUTHENTICATION_FAILED_CODE = 18

_TRANSITION_EVENTS = {
    ConnectionState.CONNECTING: ("db_connecting", "INFO"),
    ConnectionState.CONNECTED: ("db_connection_established", "INFO"),
    ConnectionState.ERROR: ("db_connection_error", "ERROR"),
    ConnectionState.DISCONNECTED: ("db_disconnected", "WARNING"),
    ConnectionState.RECONNECTED: ("db_reconnected", "INFO"),
}


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def database_name_from_uri(uri: str) -> str:
    """Return the path segment of a MongoDB URI (``.../mydb?x=1`` -> ``mydb``), or "" if absent."""
    return urlsplit(uri).path.lstrip("/").split("/")[0]


def primary_host_from_uri(uri: str) -> tuple[str, int]:
    """First seed host and port listed in the URI."""
    hostinfo = urlsplit(uri).netloc.rpartition("@")[2].split(",")[0]
    if hostinfo.startswith("["):
        host, _, rest = hostinfo[1:].partition("]")
        port = rest.lstrip(":")
    else:
        host, _, port = hostinfo.partition(":")
    return host, int(port) if port.isdigit() else DEFAULT_MONGO_PORT


def classify_connect_failure(exc: BaseException) -> FailureCategory:
    message = str(exc).lower()
    if isinstance(exc, OperationFailure) and exc.code == _AUTHENTICATION_FAILED_CODE:
        return FailureCategory.AUTHENTICATION
    if "authentication failed" in message:
        return FailureCategory.AUTHENTICATION
    if isinstance(exc, ConfigurationError):
        return FailureCategory.CONFIGURATION
    if isinstance(exc, (ServerSelectionTimeoutError, NetworkTimeout, ExecutionTimeout)):
        return FailureCategory.TIMEOUT
    if isinstance(exc, ConnectionFailure) or "network" in message:
        return FailureCategory.NETWORK
    if "timed out" in message or "timeout" in message:
        return FailureCategory.TIMEOUT
    return FailureCategory.UNKNOWN


class MongoConnection:
    """DatabaseConnection implementation using MongoDB.

    One instance is owned by the process and shared by every request handler;
    the driver pool handles socket reuse up to ``max_pool_size``.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: AsyncIOMotorClient | None = None
        self._observers: list[ConnectionObserver] = []
        self._lock = threading.Lock()
        self._handle = ConnectionHandle(
            host="",
            port=DEFAULT_MONGO_PORT,
            database_name=settings.database_name,
            max_pool_size=settings.max_pool_size,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
            socket_timeout_ms=settings.socket_timeout_ms,
        )

    @property
    def ready(self) -> bool:
        return self._handle.state in (ConnectionState.CONNECTED, ConnectionState.RECONNECTED)

    @property
    def handle(self) -> ConnectionHandle:
        return self._handle

    @property
    def client(self) -> AsyncIOMotorClient:
        if not self._client:
            raise RuntimeError("db_not_connected")
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self._handle.database_name]

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self.database[name]

    def add_observer(self, observer: ConnectionObserver) -> None:
        """Register a callable invoked synchronously on every state transition."""
        self._observers.append(observer)

    async def connect(self) -> ConnectionHandle:
        """Single connect attempt; raises ConnectionConfigError or DatabaseConnectError."""
        uri = (self._settings.mongodb_uri or "").strip()
        if not uri:
            raise ConnectionConfigError("MONGODB_URI environment variable is not defined")

        host, port = primary_host_from_uri(uri)
        self._handle = replace(
            self._handle,
            host=host,
            port=port,
            database_name=database_name_from_uri(uri) or self._settings.database_name,
        )
        self._transition(ConnectionState.CONNECTING)
        _log("db_connect_start", database=self._handle.database_name)

        bridge = TopologyStateBridge(on_change=self._on_topology_changed)
        try:
            self._client = AsyncIOMotorClient(
                uri,
                maxPoolSize=self._settings.max_pool_size,
                serverSelectionTimeoutMS=self._settings.server_selection_timeout_ms,
                socketTimeoutMS=self._settings.socket_timeout_ms,
                event_listeners=[bridge],
            )
            await self._client.admin.command("ping")
        except Exception as exc:
            await self._discard_client()
            self._transition(ConnectionState.ERROR, error=str(exc))
            raise DatabaseConnectError(classify_connect_failure(exc), str(exc)) from exc

        host, port = self._resolve_address((host, port))
        self._handle = replace(self._handle, host=host, port=port)
        self._transition(ConnectionState.CONNECTED)
        _log(
            "db_connected",
            host=self._handle.host,
            database=self._handle.database_name,
            port=self._handle.port,
        )
        return self._handle

    async def ping(self) -> bool:
        """Return True if the database responds to ping; False if not connected or any error."""
        if not self._client:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception:
            return False

    async def close(self) -> None:
        if self._client is None:
            return
        await self._discard_client()
        self._transition(ConnectionState.DISCONNECTED)
        _log("db_closed")

    async def _discard_client(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            res = client.close()
            if inspect.isawaitable(res):
                await res

    def _resolve_address(self, fallback: tuple[str, int]) -> tuple[str, int]:
        try:
            address = self.client.address
        except InvalidOperation:
            return fallback
        return tuple(address) if address else fallback

    def _on_topology_changed(self, available: bool, error: str | None) -> None:
        if available:
            if self._client is not None and self._handle.state == ConnectionState.DISCONNECTED:
                self._transition(ConnectionState.RECONNECTED)
        elif self.ready:
            self._transition(ConnectionState.DISCONNECTED, error=error or "no reachable server")

    def _transition(self, state: ConnectionState, *, error: str | None = None) -> None:
        with self._lock:
            previous = self._handle.state
            if previous == state:
                return
            self._handle = replace(self._handle, state=state)
        event = ConnectionEvent(state=state, previous=previous, error=error)

        name, level = _TRANSITION_EVENTS[state]
        bound = logger.bind(service_name=SERVICE_NAME, event=name, previous=previous.value)
        if error:
            bound = bound.bind(error=error)
        bound.log(level, "")

        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as exc:
                logger.warning("connection observer failed: {}", exc)
