"""MongoDB implementation of ContactRepository."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from backend.app.constants import ContactStatus
from backend.app.infrastructure.persistence.mongo.mongo_connection import MongoConnection


class MongoContactRepository:
    def __init__(self, database: MongoConnection, *, collection_name: str) -> None:
        self._database = database
        self._collection_name = collection_name

    async def create(self, submission: dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        document = {
            **submission,
            "status": ContactStatus.NEW,
            "created_at": now,
            "updated_at": now,
        }
        result = await self._database.collection(self._collection_name).insert_one(document)
        return str(result.inserted_id)
