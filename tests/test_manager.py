"""TmdbManager の結合テスト"""

from pathlib import Path

import httpx
import respx
from cineko_tmdb.config import ApiSection, StorageSection, TmdbConfig
from cineko_tmdb.file_store import EncryptedFileSecureStore
from cineko_tmdb.images import ImageClass
from cineko_tmdb.manager import TmdbManager
from cineko_tmdb.memory import InMemoryLocalStore, InMemorySecureStore
from cineko_tmdb.session import SessionState

from .conftest import API_KEY, RecordingExecutor

BASE_URL = "https://api.themoviedb.org/3"


def make_config(**storage: str) -> TmdbConfig:
    return TmdbConfig(api=ApiSection(api_key=API_KEY), storage=StorageSection(**storage))


async def test_setup_runs_first_run_migration() -> None:
    """setup で前回インストールの資格情報が消去されること。"""
    secure = InMemorySecureStore({"session_id": "stale"})
    manager = TmdbManager(make_config(), secure_store=secure, local_store=InMemoryLocalStore())

    await manager.setup()

    assert await secure.get("session_id") is None
    assert manager.session.state == SessionState.UNAUTHENTICATED


async def test_setup_restores_session_after_first_run() -> None:
    secure = InMemorySecureStore({"session_id": "sess"})
    local = InMemoryLocalStore({"first_run": True})
    manager = TmdbManager(make_config(), secure_store=secure, local_store=local)

    await manager.setup()

    assert manager.session.state == SessionState.SESSION_ESTABLISHED


async def test_file_storage_from_config(tmp_path: Path) -> None:
    """storage.path 指定時は暗号化ファイルストアが使われること。"""
    executor = RecordingExecutor({"/authentication/token/new": {"request_token": "tok-123"}})
    manager = TmdbManager(make_config(path=str(tmp_path)), executor=executor)
    await manager.setup()

    await manager.session.request_new_token()

    assert (tmp_path / "credentials.key").exists()
    assert "tok-123" not in (tmp_path / "credentials.yaml").read_text()
    reopened = EncryptedFileSecureStore(tmp_path / "credentials.yaml", tmp_path / "credentials.key")
    assert await reopened.get("request_token") == "tok-123"


@respx.mock
async def test_end_to_end_over_http() -> None:
    """HTTP 実行器経由で一覧取得からマッピングまで通ること。"""
    respx.get(f"{BASE_URL}/movie/now_playing").mock(
        return_value=httpx.Response(200, json={"results": [{"id": 550}, {"title": "x"}]})
    )
    manager = TmdbManager(make_config())
    await manager.setup()

    result = await manager.resources.movies_now_playing()

    assert result.ids == [550]
    assert result.skipped == 1


def test_from_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "api:\n  api_key: file-key\n  image_base_url: https://img.example/t/p\nlog:\n  format: text\n"
    )
    manager = TmdbManager.from_file(config_file)
    assert manager.credentials.has_api_key
    assert manager.image_url("/a.jpg", ImageClass.PROFILE, 1) == "https://img.example/t/p/w92/a.jpg"
