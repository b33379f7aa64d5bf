"""Shared pytest fixtures."""

import pytest
from fakes import FakeClock, FakeSessionLedger, FakeTaskRepository, FakeUserRepository

from tasklist.config import Config
from tasklist.core.core import Core, Stores


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger():
    return FakeSessionLedger()


@pytest.fixture
def task_repository():
    return FakeTaskRepository()


@pytest.fixture
def user_repository():
    return FakeUserRepository()


@pytest.fixture
def config():
    """Config independent of the environment and any .env file."""
    return Config(_env_file=None, database_url="mongodb://localhost:27017/tasklist_test")


@pytest.fixture
def stores(ledger, task_repository, user_repository):
    return Stores(sessions=ledger, tasks=task_repository, users=user_repository)


@pytest.fixture
def core(config, stores, clock):
    """Core wired to in-memory stores and a controllable clock."""
    return Core(config, stores=stores, clock=clock)
