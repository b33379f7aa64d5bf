from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from tasklist.core.core import Core
from tasklist.core.modules.session.models import AuthToken
from tasklist.core.modules.task.models import TaskView
from tasklist.core.modules.user.models import UserView
from tasklist.errors import AuthenticationError


class App:
    """Facade for all application operations, authenticates the session before delegating to Core."""

    def __init__(self, core: Core) -> None:
        self._core = core

    @property
    def session_ttl_seconds(self) -> int:
        return int(self._core.services.session.ttl.total_seconds())

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def register(self, username: str, password: str) -> UserView:
        """Create a new user account."""
        user = await self._core.services.user.create_user(username, password)
        return UserView.from_domain(user)

    async def login(self, username: str, password: str) -> AuthToken:
        """Authenticate user and create session."""
        if not await self._core.services.user.verify_password(username, password):
            raise AuthenticationError("Invalid credentials")
        return await self._core.services.session.create_session(username)

    async def logout(self, auth_token: AuthToken | None) -> None:
        """Invalidate user session. Unknown or expired tokens are accepted."""
        if auth_token:
            await self._core.services.session.invalidate_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken | None) -> UserView:
        """Get current authenticated user profile."""
        username = await self._authenticate(auth_token)
        return UserView.from_domain(await self._core.services.user.get_user(username))

    async def list_tasks(self, auth_token: AuthToken | None) -> list[TaskView]:
        """List tasks of the current user, ordered by id."""
        username = await self._authenticate(auth_token)
        tasks = await self._core.services.task.list_tasks(username)
        return [TaskView.from_domain(task) for task in tasks]

    async def get_task(self, auth_token: AuthToken | None, task_id: int) -> TaskView:
        username = await self._authenticate(auth_token)
        return TaskView.from_domain(await self._core.services.task.get_task(username, task_id))

    async def create_task(self, auth_token: AuthToken | None, description: str) -> TaskView:
        """Create a task under the lowest id the current user is not using."""
        username = await self._authenticate(auth_token)
        return TaskView.from_domain(await self._core.services.task.create_task(username, description))

    async def update_task(self, auth_token: AuthToken | None, task_id: int, description: str) -> TaskView:
        username = await self._authenticate(auth_token)
        return TaskView.from_domain(await self._core.services.task.update_task(username, task_id, description))

    async def delete_task(self, auth_token: AuthToken | None, task_id: int) -> None:
        username = await self._authenticate(auth_token)
        await self._core.services.task.delete_task(username, task_id)

    async def _authenticate(self, auth_token: AuthToken | None) -> str:
        """Resolve the session token to a username. Raises AuthenticationError subclasses."""
        return await self._core.services.session.get_authenticated_username(auth_token)
