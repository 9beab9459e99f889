"""設定ファイル読み込み"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import TmdbConfig
from .exceptions import TmdbError, TmdbErrorCodes

API_KEY_ENV = "TMDB_API_KEY"


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TmdbError(
            code=TmdbErrorCodes.CONFIG_READ,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise TmdbError(
            code=TmdbErrorCodes.CONFIG_PARSE,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise TmdbError(
            code=TmdbErrorCodes.CONFIG_PARSE,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def _overlay(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """override を base に再帰的に重ねた新しい辞書を返す。"""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _overlay(current, value)
        else:
            merged[key] = value
    return merged


def load(base_path: Path, env_path: Path | None = None) -> TmdbConfig:
    """設定ファイルを読み込んで TmdbConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースに重ねる。
    環境変数 TMDB_API_KEY が設定されていれば api.api_key を上書きする。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = _overlay(data, _read_yaml(env_path))
    api_key = os.environ.get(API_KEY_ENV)
    if api_key:
        data = _overlay(data, {"api": {"api_key": api_key}})
    try:
        return TmdbConfig.model_validate(data)
    except ValidationError as e:
        raise TmdbError(
            code=TmdbErrorCodes.CONFIG_VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
