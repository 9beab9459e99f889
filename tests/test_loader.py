"""設定ローダーのユニットテスト"""

from pathlib import Path

import pytest
from cineko_tmdb.exceptions import TmdbError, TmdbErrorCodes
from cineko_tmdb.loader import API_KEY_ENV, load


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(API_KEY_ENV, raising=False)


def test_load_defaults(tmp_path: Path) -> None:
    """空の設定ファイルではデフォルト値になること。"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    config = load(config_file)
    assert config.api.api_key == ""
    assert config.api.base_url == "https://api.themoviedb.org/3"
    assert config.auth.request_token_ttl_minutes == 60
    assert config.storage.path == ""
    assert config.log.format == "json"


def test_load_with_env_override(tmp_path: Path) -> None:
    """環境別設定のマージ確認。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("api:\n  api_key: base-key\n  timeout_seconds: 5\n")
    env_file = tmp_path / "prod.yaml"
    env_file.write_text("api:\n  timeout_seconds: 20\n")
    config = load(base_file, env_file)
    assert config.api.api_key == "base-key"
    assert config.api.timeout_seconds == 20


def test_load_api_key_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """環境変数 TMDB_API_KEY が優先されること。"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("api:\n  api_key: file-key\n")
    monkeypatch.setenv(API_KEY_ENV, "env-key")
    assert load(config_file).api.api_key == "env-key"


def test_load_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(TmdbError) as exc_info:
        load(tmp_path / "missing.yaml")
    assert exc_info.value.code == TmdbErrorCodes.CONFIG_READ


def test_load_invalid_yaml(tmp_path: Path) -> None:
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("api: {invalid: yaml: content:\n")
    with pytest.raises(TmdbError) as exc_info:
        load(bad_file)
    assert exc_info.value.code == TmdbErrorCodes.CONFIG_PARSE


def test_load_validation_error(tmp_path: Path) -> None:
    """TTL が 0 の場合は CONFIG_VALIDATION_ERROR になること。"""
    bad_config = tmp_path / "bad_config.yaml"
    bad_config.write_text("auth:\n  request_token_ttl_minutes: 0\n")
    with pytest.raises(TmdbError) as exc_info:
        load(bad_config)
    assert exc_info.value.code == TmdbErrorCodes.CONFIG_VALIDATION
    assert str(exc_info.value).startswith("CONFIG_VALIDATION_ERROR: ")
