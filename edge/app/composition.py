"""Edge composition root: build and lifecycle-manage concrete dependencies."""
from __future__ import annotations

from typing import Any

from loguru import logger

from edge.app.config.settings import Settings
from edge.app.core import SERVICE_NAME
from edge.app.infrastructure.baas.factory import create_baas_client
from edge.app.ports.baas_client import BaasClient
from edge.app.services.access_guard import AccessGuard
from edge.app.services.schema_bootstrap import SchemaBootstrapper


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class EdgeDependencies:
    """Holds wired edge dependencies and their lifecycle."""

    def __init__(self, *, settings: Settings, baas_client: BaasClient) -> None:
        self._settings = settings
        self._baas_client = baas_client
        self._access_guard = AccessGuard(baas_client)
        self._bootstrapper = SchemaBootstrapper(
            baas_client,
            schema_rpc=settings.schema_init_rpc,
            seed_rpc=settings.seed_rpc,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def baas_client(self) -> BaasClient:
        return self._baas_client

    @property
    def access_guard(self) -> AccessGuard:
        return self._access_guard

    @property
    def bootstrapper(self) -> SchemaBootstrapper:
        return self._bootstrapper

    async def close(self) -> None:
        try:
            await self._baas_client.close()
        except Exception as exc:
            logger.warning("baas client close failed: {}", exc)
        _log("edge_dependencies_closed")


def create_edge_dependencies(settings: Settings | None = None) -> EdgeDependencies:
    _settings = settings or Settings()
    return EdgeDependencies(settings=_settings, baas_client=create_baas_client(_settings))
