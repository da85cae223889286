"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Principal:
    """Authenticated identity resolved from a bearer token. Lives for one request."""

    user_id: str
    email: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class RoleGrant:
    principal: Principal
    profile: dict[str, Any] = field(default_factory=dict)
