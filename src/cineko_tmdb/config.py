"""設定型定義（pydantic BaseModel）"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .endpoints import API_URL, AUTHENTICATE_URL, IMAGE_URL


class ApiSection(BaseModel):
    """TMDB API 接続設定。"""

    api_key: str = ""
    base_url: str = API_URL
    image_base_url: str = IMAGE_URL
    authenticate_url: str = AUTHENTICATE_URL
    timeout_seconds: float = Field(default=10.0, gt=0)


class AuthSection(BaseModel):
    """認証フロー設定。"""

    request_token_ttl_minutes: int = Field(default=60, ge=1)


class StorageSection(BaseModel):
    """資格情報ストア設定。path が空ならインメモリ。"""

    path: str = ""
    key_file: str = ""


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class TmdbConfig(BaseModel):
    """cineko_tmdb 全体設定。"""

    api: ApiSection = Field(default_factory=ApiSection)
    auth: AuthSection = Field(default_factory=AuthSection)
    storage: StorageSection = Field(default_factory=StorageSection)
    log: LogSection = Field(default_factory=LogSection)
