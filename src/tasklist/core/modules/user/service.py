import asyncio

import bcrypt
import structlog

from tasklist.core.core import Service
from tasklist.core.modules.user.models import User
from tasklist.core.modules.user.repository import UserRepository
from tasklist.core.modules.user.validators import MAX_PASSWORD_BYTES, validate_password, validate_username
from tasklist.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService(Service):
    """Registers users and verifies their credentials."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def get_user(self, username: str) -> User:
        user = await self._repository.get_by_username(username)
        if user is None:
            raise NotFoundError(f"User '{username}' not found")
        return user

    async def create_user(self, username: str, password: str) -> User:
        """Create user with hashed password."""
        validate_username(username)
        validate_password(password)
        if await self._repository.get_by_username(username) is not None:
            raise ValidationError(f"User '{username}' already exists")

        # bcrypt is CPU-bound
        password_hash = await asyncio.to_thread(hash_password, password)
        user = User(username=username, password_hash=password_hash)
        await self._repository.insert(user)
        logger.info("user_created", username=username)
        return user

    async def verify_password(self, username: str, password: str) -> bool:
        """Verify password against stored hash."""
        user = await self._repository.get_by_username(username)
        if user is None:
            return False
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        return await asyncio.to_thread(check_password, password, user.password_hash)
