"""TmdbManager: composes stores, executor, session and resource clients."""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import structlog

from .config import TmdbConfig
from .credentials import CredentialStore
from .executor import HttpRequestExecutor, RequestExecutor
from .file_store import EncryptedFileSecureStore, YamlFileLocalStore
from .images import ImageClass, image_url
from .loader import load
from .logger import new_logger
from .mapper import InMemoryObjectMapper, ObjectMapper
from .memory import InMemoryLocalStore, InMemorySecureStore
from .resources import ResourceClient
from .session import SessionManager
from .store import LocalStore, SecureStore

logger = structlog.get_logger(__name__)

SECURE_FILE = "credentials.yaml"
LOCAL_FILE = "settings.yaml"
KEY_FILE = "credentials.key"


def _default_stores(config: TmdbConfig) -> tuple[SecureStore, LocalStore]:
    if not config.storage.path:
        return InMemorySecureStore(), InMemoryLocalStore()
    root = Path(config.storage.path).expanduser()
    key_file = root / KEY_FILE
    if config.storage.key_file:
        key_file = Path(config.storage.key_file).expanduser()
    return (
        EncryptedFileSecureStore(root / SECURE_FILE, key_file),
        YamlFileLocalStore(root / LOCAL_FILE),
    )


class TmdbManager:
    """Entry point wiring every collaborator from a :class:`TmdbConfig`.

    Any collaborator may be injected to replace the one built from config.
    Call :meth:`setup` once before use to run the first-run migration.
    """

    def __init__(
        self,
        config: TmdbConfig,
        secure_store: SecureStore | None = None,
        local_store: LocalStore | None = None,
        executor: RequestExecutor | None = None,
        mapper: ObjectMapper | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        if secure_store is None or local_store is None:
            default_secure, default_local = _default_stores(config)
            secure_store = secure_store or default_secure
            local_store = local_store or default_local
        self.credentials = CredentialStore(
            secure_store,
            local_store,
            api_key=config.api.api_key,
            token_ttl=timedelta(minutes=config.auth.request_token_ttl_minutes),
            clock=clock,
        )
        self.executor = executor or HttpRequestExecutor(
            base_url=config.api.base_url,
            timeout_seconds=config.api.timeout_seconds,
        )
        self.mapper = mapper or InMemoryObjectMapper()
        self.session = SessionManager(
            self.credentials, self.executor, authenticate_url=config.api.authenticate_url
        )
        self.resources = ResourceClient(self.credentials, self.executor, self.mapper)

    @classmethod
    def from_file(cls, base_path: Path, env_path: Path | None = None) -> TmdbManager:
        """Load config from YAML, configure logging and build a manager."""
        config = load(base_path, env_path)
        new_logger(config.log.level, config.log.format)
        return cls(config)

    @property
    def config(self) -> TmdbConfig:
        return self._config

    async def setup(self) -> None:
        migrated = await self.credentials.check_first_run()
        if self.credentials.has_api_key:
            await self.session.sync_state()
        logger.info(
            "tmdb_manager_ready",
            first_run=migrated,
            api_key_configured=self.credentials.has_api_key,
            state=self.session.state.name,
        )

    def image_url(self, path: str, image_class: ImageClass, size_index: int = 0) -> str:
        return image_url(path, image_class, size_index, base_url=self._config.api.image_base_url)
