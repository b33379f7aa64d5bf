"""Session management models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import NewType

from pydantic import Field

from tasklist.core.db import MongoModel
from tasklist.utils import now

AuthToken = NewType("AuthToken", str)


class Session(MongoModel):
    """User authentication session.

    Indexed on auth_token - unique, username.
    Valid for a fixed window counted from created_at; activity never extends it.
    """

    auth_token: str
    username: str
    created_at: datetime = Field(default_factory=now)


class GateResult(StrEnum):
    """Outcome of checking a session token."""

    AUTHORIZED = "authorized"
    UNAUTHENTICATED = "unauthenticated"  # Token missing, empty, or unknown
    EXPIRED = "expired"  # Token known but past its window; already torn down


@dataclass(frozen=True, slots=True)
class Authorization:
    result: GateResult
    username: str | None = None

    @property
    def is_authorized(self) -> bool:
        return self.result is GateResult.AUTHORIZED
