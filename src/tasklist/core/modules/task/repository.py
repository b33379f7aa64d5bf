"""Persistent (id, username, description) relation."""

from typing import Protocol

from pymongo.errors import DuplicateKeyError

from tasklist.core.db import MongoStore, storage_errors
from tasklist.core.modules.task.models import Task


class DuplicateTaskIdError(Exception):
    """Raised by insert when the owner already has a task with this id."""

    def __init__(self, username: str, task_id: int) -> None:
        super().__init__(f"Task {task_id} already exists for '{username}'")
        self.username = username
        self.task_id = task_id


class TaskRepository(Protocol):
    """Storage for tasks. Every method may raise StorageError."""

    async def on_start(self) -> None: ...

    async def on_stop(self) -> None: ...

    async def list_ids(self, username: str) -> list[int]:
        """Ids owned by username, ascending."""
        ...

    async def list_tasks(self, username: str) -> list[Task]: ...

    async def insert(self, task: Task) -> None:
        """Raises DuplicateTaskIdError if (username, id) is taken."""
        ...

    async def get(self, username: str, task_id: int) -> Task | None: ...

    async def update(self, username: str, task_id: int, description: str) -> int:
        """Returns the number of matched tasks."""
        ...

    async def delete(self, username: str, task_id: int) -> int:
        """Returns the number of deleted tasks."""
        ...


class MongoTaskRepository(MongoStore):
    collection_name = "tasks"

    async def on_start(self) -> None:
        with storage_errors("create task indexes"):
            # Backstop for concurrent allocations of the same id
            await self._collection.create_index([("username", 1), ("id", 1)], unique=True)

    async def list_ids(self, username: str) -> list[int]:
        with storage_errors("list task ids"):
            cursor = self._collection.find({"username": username}, {"_id": 0, "id": 1}).sort("id", 1)
            return [int(doc["id"]) async for doc in cursor]

    async def list_tasks(self, username: str) -> list[Task]:
        with storage_errors("list tasks"):
            return await Task.list_cursor(self._collection.find({"username": username}, {"_id": 0}).sort("id", 1))

    async def insert(self, task: Task) -> None:
        with storage_errors("insert task"):
            try:
                await self._collection.insert_one(task.to_mongo())
            except DuplicateKeyError as e:
                raise DuplicateTaskIdError(task.username, task.id) from e

    async def get(self, username: str, task_id: int) -> Task | None:
        with storage_errors("get task"):
            doc = await self._collection.find_one({"username": username, "id": task_id}, {"_id": 0})
        if doc is None:
            return None
        return Task.model_validate(doc)

    async def update(self, username: str, task_id: int, description: str) -> int:
        with storage_errors("update task"):
            result = await self._collection.update_one(
                {"username": username, "id": task_id}, {"$set": {"description": description}}
            )
        return result.matched_count

    async def delete(self, username: str, task_id: int) -> int:
        with storage_errors("delete task"):
            result = await self._collection.delete_one({"username": username, "id": task_id})
        return result.deleted_count
