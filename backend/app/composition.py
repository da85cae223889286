"""
Composition root: single place where concrete implementations are wired.

Builds settings, database connection and contact repository from config and
owns their lifecycle. `database_session` is the scoped acquisition used by the
entrypoint: the connection is closed on every exit path, and a failed initial
connect terminates the process with exit code 1.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from loguru import logger

from backend.app.config.settings import Settings
from backend.app.constants import EXIT_FATAL_STARTUP, FAILURE_HINTS
from backend.app.core import SERVICE_NAME
from backend.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection
from backend.app.infrastructure.persistence.mongo.mongo_contact_repository import MongoContactRepository
from backend.app.ports.contact_repository import ContactRepository
from backend.app.ports.database_connection import (
    ConnectionConfigError,
    DatabaseConnectError,
    DatabaseConnection,
)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class AppDependencies:
    """Holds wired dependencies and their lifecycle. Built only in composition root."""

    def __init__(
        self,
        *,
        settings: Settings,
        database: DatabaseConnection,
        contact_repository: ContactRepository,
    ) -> None:
        self._settings = settings
        self._database = database
        self._contact_repository = contact_repository
        self._database_connected = False

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def database(self) -> DatabaseConnection:
        return self._database

    @property
    def contact_repository(self) -> ContactRepository:
        return self._contact_repository

    async def connect(self) -> None:
        await self._database.connect()
        self._database_connected = True

    async def close(self) -> None:
        if self._database_connected:
            await self._database.close()
            self._database_connected = False


def create_app_dependencies(settings: Settings | None = None) -> AppDependencies:
    """
    Composition root: build all backend dependencies in one place.
    Caller owns lifecycle (connect/close).
    """
    _settings = settings or Settings()
    database = MongoConnection(_settings)
    repository = MongoContactRepository(database, collection_name=_settings.contact_collection)

    return AppDependencies(
        settings=_settings,
        database=database,
        contact_repository=repository,
    )


@asynccontextmanager
async def database_session(
    settings: Settings | None = None,
    *,
    dependencies: AppDependencies | None = None,
) -> AsyncIterator[AppDependencies]:
    deps = dependencies or create_app_dependencies(settings)
    try:
        await deps.connect()
    except ConnectionConfigError as exc:
        logger.bind(service_name=SERVICE_NAME, event="db_config_missing").error("{}", exc)
        raise SystemExit(EXIT_FATAL_STARTUP) from exc
    except DatabaseConnectError as exc:
        logger.bind(
            service_name=SERVICE_NAME,
            event="db_connect_failed",
            category=exc.category.value,
            error=str(exc),
        ).error(FAILURE_HINTS[exc.category])
        raise SystemExit(EXIT_FATAL_STARTUP) from exc

    try:
        yield deps
    finally:
        await deps.close()
        _log("db_session_closed")
