"""ファイルベースのストア実装"""

from __future__ import annotations

import asyncio
import contextlib
import os
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
import yaml

from .crypto import load_or_create_key, seal, unseal
from .exceptions import TmdbError, TmdbErrorCodes
from .store import LocalStore, SecureStore


async def _read_mapping(path: Path) -> dict[str, Any]:
    """YAML マッピングを読み込む。ファイルが無ければ空辞書。"""
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            text = await f.read()
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise TmdbError(
            code=TmdbErrorCodes.STORE_ERROR,
            message=f"Failed to read store file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise TmdbError(
            code=TmdbErrorCodes.STORE_ERROR,
            message=f"Failed to parse store file: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise TmdbError(
            code=TmdbErrorCodes.STORE_ERROR,
            message=f"Store file is not a mapping: {path}",
        )
    return data


async def _write_mapping(path: Path, data: dict[str, Any], mode: int) -> None:
    """一時ファイル経由で置き換え、途中状態を残さない。

    一時ファイルは毎回 O_EXCL で作り直すので mode が必ず適用される。
    """
    text = yaml.safe_dump(data, default_flow_style=False, sort_keys=True)
    tmp = path.with_name(f".{path.name}.tmp")

    def opener(name: str, flags: int) -> int:
        return os.open(name, flags | os.O_EXCL, mode)

    try:
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        with contextlib.suppress(FileNotFoundError):
            await aiofiles.os.remove(tmp)
        async with aiofiles.open(tmp, "w", encoding="utf-8", opener=opener) as f:
            await f.write(text)
        await aiofiles.os.replace(tmp, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            await aiofiles.os.remove(tmp)
        raise TmdbError(
            code=TmdbErrorCodes.STORE_ERROR,
            message=f"Failed to write store file: {path}",
            cause=e,
        ) from e


class _YamlFile:
    """1 ファイルへの読み書きを直列化する。"""

    def __init__(self, path: Path, mode: int) -> None:
        self.path = path
        self._mode = mode
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            return (await _read_mapping(self.path)).get(key)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            data = await _read_mapping(self.path)
            data[key] = value
            await _write_mapping(self.path, data, self._mode)

    async def delete(self, key: str) -> bool:
        async with self._lock:
            data = await _read_mapping(self.path)
            if key not in data:
                return False
            del data[key]
            await _write_mapping(self.path, data, self._mode)
            return True


class EncryptedFileSecureStore(SecureStore):
    """AES-GCM で値を暗号化して YAML ファイルに保存するセキュアストア。"""

    def __init__(self, path: Path, key_file: Path) -> None:
        self._file = _YamlFile(path, 0o600)
        self._key = load_or_create_key(key_file)

    async def get(self, key: str) -> str | None:
        sealed = await self._file.get(key)
        if sealed is None:
            return None
        return unseal(self._key, key, str(sealed))

    async def set(self, key: str, value: str) -> None:
        await self._file.set(key, seal(self._key, key, value))

    async def delete(self, key: str) -> bool:
        return await self._file.delete(key)


class YamlFileLocalStore(LocalStore):
    """YAML ファイルに保存するローカルストア。"""

    def __init__(self, path: Path) -> None:
        self._file = _YamlFile(path, 0o644)

    async def get(self, key: str) -> Any | None:
        return await self._file.get(key)

    async def set(self, key: str, value: Any) -> None:
        await self._file.set(key, value)

    async def delete(self, key: str) -> bool:
        return await self._file.delete(key)
