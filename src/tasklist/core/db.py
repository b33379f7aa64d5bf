from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pymongo.asynchronous.cursor import AsyncCursor
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from tasklist.errors import StorageError


class MongoModel(BaseModel):
    """Base for documents stored in MongoDB. Mongo's own `_id` is never exposed."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
        extra="ignore",
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage."""
        return self.model_dump()

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


class MongoStore:
    """Base class for stores backed by a single MongoDB collection."""

    collection_name: str

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._collection = database.get_collection(self.collection_name)

    async def on_start(self) -> None:
        """Create indexes on application startup."""

    async def on_stop(self) -> None:
        """Cleanup on application shutdown."""


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver failures as StorageError, keeping the original as the cause."""
    try:
        yield
    except PyMongoError as e:
        raise StorageError(f"{operation} failed: {e}") from e
