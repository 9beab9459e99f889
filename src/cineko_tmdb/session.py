"""TMDB 認証セッション管理

request token → ユーザー承認 → session の 3 段階フローを扱う。
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any
from urllib.parse import urlencode

import structlog

from .credentials import CredentialStore
from .endpoints import (
    AUTHENTICATE_URL,
    REQUEST_TOKEN_KEY,
    SESSION_ID_KEY,
    SESSION_NEW,
    SIGNUP_URL,
    TOKEN_NEW,
)
from .exceptions import TmdbError, TmdbErrorCodes
from .executor import RequestExecutor, api_params

logger = structlog.get_logger(__name__)


class SessionState(Enum):
    """認証フローの状態。"""

    UNAUTHENTICATED = auto()
    TOKEN_REQUESTED = auto()
    TOKEN_GRANTED = auto()
    SESSION_ESTABLISHED = auto()


def _require_field(data: Any, key: str, path: str) -> str:
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, str) or not value:
        raise TmdbError(
            code=TmdbErrorCodes.TRANSPORT_ERROR,
            message=f"GET {path}: response has no {key}",
        )
    return value


class SessionManager:
    """リクエストトークンの取得とセッション確立を行う。"""

    def __init__(
        self,
        credentials: CredentialStore,
        executor: RequestExecutor,
        authenticate_url: str = AUTHENTICATE_URL,
        signup_url: str = SIGNUP_URL,
    ) -> None:
        self._credentials = credentials
        self._executor = executor
        self._authenticate_url = authenticate_url.rstrip("/")
        self._signup_url = signup_url
        self._state = SessionState.UNAUTHENTICATED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def signup_url(self) -> str:
        """TMDB アカウント登録ページの URL。"""
        return self._signup_url

    async def sync_state(self) -> SessionState:
        """保存済み資格情報から状態を復元する。"""
        if await self._credentials.has_session():
            self._state = SessionState.SESSION_ESTABLISHED
        elif await self._credentials.get_request_token() is not None:
            self._state = SessionState.TOKEN_GRANTED
        else:
            self._state = SessionState.UNAUTHENTICATED
        return self._state

    async def request_new_token(self) -> str:
        """新しいリクエストトークンを取得して保存する。

        Raises:
            TmdbError: MISSING_API_KEY（通信前）、TRANSPORT_ERROR
        """
        api_key = self._credentials.require_api_key()
        self._state = SessionState.TOKEN_REQUESTED
        try:
            data = await self._executor.get(TOKEN_NEW, api_params(api_key))
            token = _require_field(data, REQUEST_TOKEN_KEY, TOKEN_NEW)
            await self._credentials.save_request_token(token)
        except TmdbError:
            self._state = SessionState.UNAUTHENTICATED
            raise
        # 既存セッションは新しいトークンで無効にならない
        if await self._credentials.has_session():
            self._state = SessionState.SESSION_ESTABLISHED
        else:
            self._state = SessionState.TOKEN_GRANTED
        return token

    def authorization_url(self, request_token: str, redirect_to: str | None = None) -> str:
        """ユーザーがリクエストトークンを承認するための URL を返す。"""
        url = f"{self._authenticate_url}/{request_token}"
        if redirect_to:
            url = f"{url}?{urlencode({'redirect_to': redirect_to})}"
        return url

    async def establish_session(self) -> str:
        """承認済みリクエストトークンからセッションを作成する。

        Raises:
            TmdbError: MISSING_API_KEY / NO_REQUEST_TOKEN（通信前）、TRANSPORT_ERROR
        """
        api_key = self._credentials.require_api_key()
        request_token = await self._credentials.get_request_token()
        if request_token is None:
            self._state = SessionState.UNAUTHENTICATED
            raise TmdbError(
                code=TmdbErrorCodes.NO_REQUEST_TOKEN,
                message="No request token available",
            )
        data = await self._executor.get(
            SESSION_NEW, api_params(api_key, **{REQUEST_TOKEN_KEY: request_token})
        )
        session_id = _require_field(data, SESSION_ID_KEY, SESSION_NEW)
        await self._credentials.save_session_id(session_id)
        self._state = SessionState.SESSION_ESTABLISHED
        logger.info("session_established")
        return session_id

    async def logout(self) -> None:
        await self._credentials.clear()
        self._state = SessionState.UNAUTHENTICATED
