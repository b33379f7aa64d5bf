import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from tasklist.core.core import Service
from tasklist.core.modules.session.ledger import SessionLedger
from tasklist.core.modules.session.models import AuthToken, Authorization, GateResult, Session
from tasklist.errors import MissingTokenError, SessionExpiredError, SessionNotFoundError
from tasklist.utils import as_utc, now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues session tokens and gates requests on them.

    A session is valid while ``now - created_at < ttl``. Nothing renews it. When a
    request presents an expired token the session is deleted before the failure is
    reported, so an EXPIRED result always means the token is gone from the ledger.
    """

    def __init__(
        self,
        ledger: SessionLedger,
        ttl: timedelta = timedelta(minutes=5),
        single_session: bool = False,
        clock: Callable[[], datetime] = now,
    ) -> None:
        self._ledger = ledger
        self._ttl = ttl
        self._single_session = single_session
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def create_session(self, username: str) -> AuthToken:
        if self._single_session:
            revoked = await self._ledger.delete_by_username(username)
            if revoked:
                logger.info("sessions_revoked", username=username, count=revoked)

        auth_token = AuthToken(secrets.token_urlsafe(32))
        await self._ledger.insert(Session(auth_token=auth_token, username=username, created_at=self._clock()))
        logger.info("session_created", username=username)
        return auth_token

    async def authorize(self, auth_token: AuthToken | None) -> Authorization:
        """Resolve a token to a username without raising on authentication failures.

        StorageError from the ledger propagates unchanged.
        """
        if not auth_token:
            return Authorization(GateResult.UNAUTHENTICATED)

        session = await self._ledger.lookup(auth_token)
        if session is None:
            return Authorization(GateResult.UNAUTHENTICATED)

        if self.is_expired(session):
            await self._ledger.delete(auth_token)
            logger.info("session_expired", username=session.username, created_at=session.created_at.isoformat())
            return Authorization(GateResult.EXPIRED)

        return Authorization(GateResult.AUTHORIZED, session.username)

    async def get_authenticated_username(self, auth_token: AuthToken | None) -> str:
        if not auth_token:
            raise MissingTokenError

        authorization = await self.authorize(auth_token)
        if authorization.result is GateResult.EXPIRED:
            raise SessionExpiredError
        if authorization.username is None:
            raise SessionNotFoundError
        return authorization.username

    def is_expired(self, session: Session) -> bool:
        return self._clock() - as_utc(session.created_at) >= self._ttl

    async def invalidate_session(self, auth_token: AuthToken) -> None:
        """Invalidate a session by removing it from the ledger. Unknown tokens are ignored."""
        if await self._ledger.delete(auth_token):
            logger.info("session_invalidated")
