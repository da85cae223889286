"""Port: contact-form persistence."""
from __future__ import annotations

from typing import Any, Protocol


class ContactRepository(Protocol):
    async def create(self, submission: dict[str, Any]) -> str: ...
