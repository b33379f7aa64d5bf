"""Tests for user registration and credential checks."""

import pytest

from tasklist.core.modules.user.service import UserService, check_password
from tasklist.core.modules.user.validators import validate_password, validate_username
from tasklist.errors import NotFoundError, ValidationError


class TestValidators:
    @pytest.mark.parametrize("username", ["alice", "a.b-c_1", "x" * 64])
    def test_valid_username(self, username):
        validate_username(username)

    @pytest.mark.parametrize("username", ["", "has space", "x" * 65, "semi;colon"])
    def test_invalid_username(self, username):
        with pytest.raises(ValidationError):
            validate_username(username)

    def test_short_password(self):
        with pytest.raises(ValidationError, match="at least 2"):
            validate_password("a")

    def test_password_with_whitespace(self):
        with pytest.raises(ValidationError, match="whitespace"):
            validate_password("pass word")

    def test_password_over_72_bytes(self):
        """Test that passwords bcrypt cannot hash are rejected as invalid input."""
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            validate_password("x" * 73)

    def test_multibyte_password_limit_counts_bytes(self):
        validate_password("x" * 72)
        with pytest.raises(ValidationError):
            validate_password("\u00e9" * 37)


class TestUserService:
    async def test_create_user_hashes_password(self, user_repository):
        service = UserService(user_repository)

        user = await service.create_user("alice", "secret")

        stored = user_repository.users["alice"]
        assert stored == user
        assert stored.password_hash != "secret"
        assert check_password("secret", stored.password_hash)

    async def test_duplicate_username_rejected(self, user_repository):
        service = UserService(user_repository)
        await service.create_user("alice", "secret")

        with pytest.raises(ValidationError, match="already exists"):
            await service.create_user("alice", "other")

    async def test_verify_password(self, user_repository):
        service = UserService(user_repository)
        await service.create_user("alice", "secret")

        assert await service.verify_password("alice", "secret")
        assert not await service.verify_password("alice", "wrong")
        assert not await service.verify_password("nobody", "secret")

    async def test_verify_over_long_password_is_false(self, user_repository):
        """Test that a password bcrypt would refuse fails verification instead of erroring."""
        service = UserService(user_repository)
        await service.create_user("alice", "secret")

        assert not await service.verify_password("alice", "x" * 100)

    async def test_get_missing_user(self, user_repository):
        service = UserService(user_repository)

        with pytest.raises(NotFoundError):
            await service.get_user("nobody")
