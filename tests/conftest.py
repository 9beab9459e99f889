"""Shared fakes and fixtures for cineko_tmdb tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from cineko_tmdb.credentials import CredentialStore
from cineko_tmdb.exceptions import TmdbError, TmdbErrorCodes
from cineko_tmdb.executor import RequestExecutor
from cineko_tmdb.mapper import InMemoryObjectMapper
from cineko_tmdb.memory import InMemoryLocalStore, InMemorySecureStore

API_KEY = "test-api-key"
T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingExecutor(RequestExecutor):
    """Returns canned payloads per path and records every call."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def get(self, path: str, params: dict[str, str]) -> Any:
        self.calls.append((path, dict(params)))
        response = self.responses.get(path)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise TmdbError(
                code=TmdbErrorCodes.TRANSPORT_ERROR,
                message=f"GET {path}: HTTP 404: not found",
            )
        return response


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def secure_store() -> InMemorySecureStore:
    return InMemorySecureStore()


@pytest.fixture
def local_store() -> InMemoryLocalStore:
    return InMemoryLocalStore()


@pytest.fixture
def credentials(
    secure_store: InMemorySecureStore, local_store: InMemoryLocalStore, clock: FakeClock
) -> CredentialStore:
    return CredentialStore(secure_store, local_store, api_key=API_KEY, clock=clock)


@pytest.fixture
def no_key_credentials(
    secure_store: InMemorySecureStore, local_store: InMemoryLocalStore, clock: FakeClock
) -> CredentialStore:
    return CredentialStore(secure_store, local_store, api_key="", clock=clock)


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def mapper() -> InMemoryObjectMapper:
    return InMemoryObjectMapper()
