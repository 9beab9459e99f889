"""キーバリューストア抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class SecureStore(ABC):
    """機密値（リクエストトークン、セッション ID）用のセキュアストア。"""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """キーに対応する値を取得する。存在しなければ None。"""
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """キーと値を保存する。"""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """キーを削除する。削除できたら True。"""
        ...


class LocalStore(ABC):
    """非機密の設定値（発行時刻、初回起動フラグ）用のローカルストア。"""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """キーに対応する値を取得する。存在しなければ None。"""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """キーと値を保存する。値は YAML で表現可能なスカラーに限る。"""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """キーを削除する。削除できたら True。"""
        ...
