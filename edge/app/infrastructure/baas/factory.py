"""BaaS client factory: builds BaasClient from settings (no provider logic in composition)."""
from __future__ import annotations

import httpx

from edge.app.config.settings import Settings
from edge.app.infrastructure.baas.httpx_baas_client import HttpxBaasClient
from edge.app.ports.baas_client import BaasClient


def create_baas_client(settings: Settings) -> BaasClient:
    backend = settings.baas_backend.strip().lower()

    if backend == "supabase":
        async_client = httpx.AsyncClient(
            base_url=settings.supabase_url,
            timeout=settings.supabase_timeout_seconds,
        )
        return HttpxBaasClient(async_client, service_key=settings.supabase_service_role_key)

    raise ValueError(f"Unsupported BaaS backend: {backend}")
