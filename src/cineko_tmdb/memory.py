"""インメモリストア実装"""

from __future__ import annotations

from typing import Any

from .store import LocalStore, SecureStore


class InMemorySecureStore(SecureStore):
    """テスト用インメモリセキュアストア。"""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None


class InMemoryLocalStore(LocalStore):
    """テスト用インメモリローカルストア。"""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Any | None:
        return self._values.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> bool:
        if key in self._values:
            del self._values[key]
            return True
        return False
