from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from tasklist.config import Config
from tasklist.utils import now

if TYPE_CHECKING:
    from tasklist.core.modules.session.ledger import SessionLedger
    from tasklist.core.modules.session.service import SessionService
    from tasklist.core.modules.task.repository import TaskRepository
    from tasklist.core.modules.task.service import TaskService
    from tasklist.core.modules.user.repository import UserRepository
    from tasklist.core.modules.user.service import UserService


class Service:
    """Base class for services. Collaborators are passed to the constructor."""

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""


@dataclass
class Stores:
    """Persistence collaborators shared by all services."""

    sessions: SessionLedger
    tasks: TaskRepository
    users: UserRepository

    @classmethod
    def from_database(cls, database: AsyncDatabase[dict[str, Any]]) -> Stores:
        from tasklist.core.modules.session.ledger import MongoSessionLedger  # noqa: PLC0415
        from tasklist.core.modules.task.repository import MongoTaskRepository  # noqa: PLC0415
        from tasklist.core.modules.user.repository import MongoUserRepository  # noqa: PLC0415

        return cls(
            sessions=MongoSessionLedger(database),
            tasks=MongoTaskRepository(database),
            users=MongoUserRepository(database),
        )

    def all(self) -> list[SessionLedger | TaskRepository | UserRepository]:
        return [self.sessions, self.tasks, self.users]


class Services:
    """Service registry wired from config and stores."""

    user: UserService
    session: SessionService
    task: TaskService

    def __init__(self, config: Config, stores: Stores, clock: Callable[[], datetime] = now) -> None:
        from tasklist.core.modules.session.service import SessionService  # noqa: PLC0415
        from tasklist.core.modules.task.allocator import IdAllocator  # noqa: PLC0415
        from tasklist.core.modules.task.service import TaskService  # noqa: PLC0415
        from tasklist.core.modules.user.service import UserService  # noqa: PLC0415

        self.user = UserService(stores.users)
        self.session = SessionService(
            stores.sessions,
            ttl=timedelta(seconds=config.session_ttl_seconds),
            single_session=config.single_session,
            clock=clock,
        )
        self.task = TaskService(stores.tasks, IdAllocator(stores.tasks), allocation_retries=config.allocation_retries)
        self._services: list[Service] = [self.user, self.session, self.task]

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, stores, and all service instances.

    Without explicit stores, MongoDB-backed ones are created from config.database_url.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    stores: Stores
    services: Services

    def __init__(self, config: Config, stores: Stores | None = None, clock: Callable[[], datetime] = now) -> None:
        self.config = config
        self.mongo_client = None
        if stores is None:
            self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
            stores = Stores.from_database(database)
        self.stores = stores
        self.services = Services(config, stores, clock)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        for store in self.stores.all():
            await store.on_start()
        await self.services.start_all()

    async def on_stop(self) -> None:
        await self.services.stop_all()
        for store in self.stores.all():
            await store.on_stop()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
