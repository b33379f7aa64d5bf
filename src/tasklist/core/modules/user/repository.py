from typing import Protocol

from pymongo.errors import DuplicateKeyError

from tasklist.core.db import MongoStore, storage_errors
from tasklist.core.modules.user.models import User
from tasklist.errors import ValidationError


class UserRepository(Protocol):
    async def on_start(self) -> None: ...

    async def on_stop(self) -> None: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def insert(self, user: User) -> None:
        """Raises ValidationError if the username is taken."""
        ...


class MongoUserRepository(MongoStore):
    collection_name = "users"

    async def on_start(self) -> None:
        with storage_errors("create user indexes"):
            await self._collection.create_index([("username", 1)], unique=True)

    async def get_by_username(self, username: str) -> User | None:
        with storage_errors("get user"):
            doc = await self._collection.find_one({"username": username}, {"_id": 0})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def insert(self, user: User) -> None:
        with storage_errors("insert user"):
            try:
                await self._collection.insert_one(user.to_mongo())
            except DuplicateKeyError as e:
                raise ValidationError(f"User '{user.username}' already exists") from e
