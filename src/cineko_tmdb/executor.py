"""リクエスト実行器"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from .endpoints import API_KEY_PARAM, API_URL
from .exceptions import TmdbError, TmdbErrorCodes

logger = structlog.get_logger(__name__)


class RequestExecutor(ABC):
    """GET リクエストを発行し、デコード済み JSON を返す実行器。"""

    @abstractmethod
    async def get(self, path: str, params: dict[str, str]) -> Any:
        """path に params を付けて GET し、レスポンス JSON を返す。

        Raises:
            TmdbError: TRANSPORT_ERROR（通信・HTTP・デコード失敗）
        """
        ...


class HttpRequestExecutor(RequestExecutor):
    """httpx を使った TMDB REST 実行器。"""

    def __init__(self, base_url: str = API_URL, timeout_seconds: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._headers = {"Accept": "application/json"}

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout_seconds,
        )

    def _handle_error(self, resp: httpx.Response, path: str) -> None:
        if resp.status_code < 400:
            return
        # TMDB のエラーボディは {"status_code": n, "status_message": "..."}
        try:
            body = resp.json()
        except ValueError:
            body = None
        detail = body.get("status_message") if isinstance(body, dict) else None
        raise TmdbError(
            code=TmdbErrorCodes.TRANSPORT_ERROR,
            message=f"GET {path}: HTTP {resp.status_code}: {detail or resp.text}",
        )

    async def get(self, path: str, params: dict[str, str]) -> Any:
        try:
            async with self._make_client() as client:
                resp = await client.get(path, params=params)
            self._handle_error(resp, path)
            return resp.json()
        except TmdbError as e:
            logger.warning("tmdb_request_failed", path=path, error=str(e))
            raise
        except Exception as e:
            logger.warning("tmdb_request_failed", path=path, error=repr(e))
            raise TmdbError(
                code=TmdbErrorCodes.TRANSPORT_ERROR,
                message=f"GET {path} failed: {e}",
                cause=e,
            ) from e


def api_params(api_key: str, **extra: str) -> dict[str, str]:
    """api_key を含むクエリパラメータを組み立てる。"""
    return {API_KEY_PARAM: api_key, **extra}
