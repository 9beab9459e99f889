"""TMDB credential store.

Holds the request token and session id in a :class:`SecureStore` and the
token issue timestamp plus the first-run marker in a :class:`LocalStore`.
Expiry check and eviction run under a single lock so callers never observe
a token without its timestamp or a session outliving an evicted token.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import structlog

from .endpoints import REQUEST_TOKEN_KEY, SESSION_ID_KEY
from .exceptions import missing_api_key
from .store import LocalStore, SecureStore

logger = structlog.get_logger(__name__)

REQUEST_TOKEN_TTL = timedelta(minutes=60)

REQUEST_TOKEN_DATE_KEY = "request_token_date"
FIRST_RUN_KEY = "first_run"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        issued = value
    elif isinstance(value, str):
        try:
            issued = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None
    if issued.tzinfo is None:
        issued = issued.replace(tzinfo=timezone.utc)
    return issued


class CredentialStore:
    """Request token / session id persistence with client-side token expiry."""

    def __init__(
        self,
        secure: SecureStore,
        local: LocalStore,
        api_key: str = "",
        token_ttl: timedelta = REQUEST_TOKEN_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._secure = secure
        self._local = local
        self._api_key = api_key
        self._token_ttl = token_ttl
        self._clock = clock or _utcnow
        self._lock = asyncio.Lock()

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def require_api_key(self) -> str:
        """Return the API key.

        Raises:
            TmdbError: MISSING_API_KEY if no key is configured
        """
        if not self._api_key:
            raise missing_api_key()
        return self._api_key

    async def get_request_token(self) -> str | None:
        """Return the stored request token if it is still within its TTL.

        An expired token (or one whose issue time is missing) is evicted
        together with the session id and the timestamp.
        """
        self.require_api_key()
        async with self._lock:
            token = await self._secure.get(REQUEST_TOKEN_KEY)
            if token is None:
                return None
            issued = _parse_timestamp(await self._local.get(REQUEST_TOKEN_DATE_KEY))
            if issued is not None and abs(self._clock() - issued) <= self._token_ttl:
                return token
            await self._evict()
            logger.info("request_token_expired", issued_at=issued.isoformat() if issued else None)
            return None

    async def save_request_token(self, token: str) -> None:
        self.require_api_key()
        async with self._lock:
            await self._secure.set(REQUEST_TOKEN_KEY, token)
            await self._local.set(REQUEST_TOKEN_DATE_KEY, self._clock().isoformat())
        logger.info("request_token_saved")

    async def clear_request_token(self) -> None:
        self.require_api_key()
        async with self._lock:
            await self._secure.delete(REQUEST_TOKEN_KEY)
            await self._local.delete(REQUEST_TOKEN_DATE_KEY)

    async def save_session_id(self, session_id: str) -> None:
        self.require_api_key()
        async with self._lock:
            await self._secure.set(SESSION_ID_KEY, session_id)
        logger.info("session_id_saved")

    async def get_session_id(self) -> str | None:
        self.require_api_key()
        async with self._lock:
            return await self._secure.get(SESSION_ID_KEY)

    async def has_session(self) -> bool:
        return await self.get_session_id() is not None

    async def clear(self) -> None:
        """Remove token, timestamp and session id."""
        async with self._lock:
            await self._evict()
        logger.info("credentials_cleared")

    async def check_first_run(self) -> bool:
        """Wipe credentials left by a previous install, once.

        Returns True when the migration ran, False on every later call.
        """
        async with self._lock:
            if await self._local.get(FIRST_RUN_KEY):
                return False
            await self._evict()
            await self._local.set(FIRST_RUN_KEY, True)
        logger.info("first_run_migrated")
        return True

    async def _evict(self) -> None:
        await self._secure.delete(SESSION_ID_KEY)
        await self._secure.delete(REQUEST_TOKEN_KEY)
        await self._local.delete(REQUEST_TOKEN_DATE_KEY)
