"""Persistent token -> session relation."""

from typing import Protocol

import structlog

from tasklist.core.db import MongoStore, storage_errors
from tasklist.core.modules.session.models import AuthToken, Session

logger = structlog.get_logger(__name__)


class SessionLedger(Protocol):
    """Storage for sessions. Every method may raise StorageError."""

    async def on_start(self) -> None: ...

    async def on_stop(self) -> None: ...

    async def insert(self, session: Session) -> None: ...

    async def lookup(self, auth_token: AuthToken) -> Session | None: ...

    async def delete(self, auth_token: AuthToken) -> bool:
        """Remove a session. Returns False when it was already absent."""
        ...

    async def delete_by_username(self, username: str) -> int: ...


class MongoSessionLedger(MongoStore):
    collection_name = "sessions"

    async def on_start(self) -> None:
        with storage_errors("create session indexes"):
            # Unique index for auth_token (for authentication lookups)
            await self._collection.create_index([("auth_token", 1)], unique=True)
            # For revoking all sessions of a user
            await self._collection.create_index([("username", 1)])
        logger.debug("session_ledger_started")

    async def insert(self, session: Session) -> None:
        with storage_errors("insert session"):
            await self._collection.insert_one(session.to_mongo())

    async def lookup(self, auth_token: AuthToken) -> Session | None:
        with storage_errors("lookup session"):
            doc = await self._collection.find_one({"auth_token": auth_token}, {"_id": 0})
        if doc is None:
            return None
        return Session.model_validate(doc)

    async def delete(self, auth_token: AuthToken) -> bool:
        with storage_errors("delete session"):
            result = await self._collection.delete_one({"auth_token": auth_token})
        return result.deleted_count > 0

    async def delete_by_username(self, username: str) -> int:
        with storage_errors("delete user sessions"):
            result = await self._collection.delete_many({"username": username})
        return result.deleted_count
