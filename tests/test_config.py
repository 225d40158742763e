"""Tests for movieservice.config -- XDG paths, config file, precedence, credentials."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from movieservice.config import (
    _atomic_write,
    config_path,
    get_cache_dir,
    get_config_dir,
    load_config_file,
    load_service_config,
    resolve_credential,
    save_service_config,
)
from movieservice.exceptions import ConfigError, ErrorKind
from movieservice.models import CacheConfig, ServiceConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_uses_xdg_config_home(self, isolated_config: Path) -> None:
        path = get_config_dir()
        assert path == isolated_config / "config" / "movieservice"
        assert path.is_dir()

    def test_cache_dir_uses_xdg_cache_home(self, isolated_config: Path) -> None:
        path = get_cache_dir()
        assert path == isolated_config / "cache" / "movieservice"
        assert path.is_dir()

    def test_fallback_on_non_xdg_platform(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("movieservice.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".movieservice"
        assert get_cache_dir() == tmp_path / ".movieservice" / "cache"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "file.json"
        _atomic_write(target, '{"a": 1}\n')
        assert target.read_text(encoding="utf-8") == '{"a": 1}\n'

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "x")
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


class TestConfigFile:
    def test_missing_file_is_empty(self, isolated_config: Path) -> None:
        assert load_config_file() == {}

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        config_path().write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file()
        assert exc_info.value.kind is ErrorKind.CONFIG
        assert exc_info.value.cause is not None

    def test_non_object_raises(self, isolated_config: Path) -> None:
        config_path().write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file()

    def test_save_and_load_round_trip(self, isolated_config: Path) -> None:
        config = ServiceConfig(
            base_url="https://api.example.com/3/",
            api_key="literal-key",
            cache=CacheConfig(enabled=False),
        )
        path = save_service_config(config)
        assert path == config_path()
        assert load_service_config() == config

    def test_save_with_api_key_source_omits_secret(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TMDB_TEST_KEY", "from-env")
        config = ServiceConfig(base_url="https://api.example.com/3/", api_key="from-env")
        save_service_config(config, api_key_source="env:TMDB_TEST_KEY")

        raw = json.loads(config_path().read_text(encoding="utf-8"))
        assert "api_key" not in raw
        assert raw["api_key_source"] == "env:TMDB_TEST_KEY"
        assert load_service_config().api_key == "from-env"


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestPrecedence:
    def test_file_values(self, isolated_config: Path) -> None:
        _write_json(
            config_path(),
            {"base_url": "https://file.example.com/3/", "api_key": "file-key"},
        )
        config = load_service_config()
        assert config.base_url == "https://file.example.com/3/"
        assert config.api_key == "file-key"

    def test_env_overrides_file(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(
            config_path(),
            {"base_url": "https://file.example.com/3/", "api_key": "file-key"},
        )
        monkeypatch.setenv("MOVIESERVICE_BASE_URL", "https://env.example.com/3/")
        monkeypatch.setenv("MOVIESERVICE_API_KEY", "env-key")
        monkeypatch.setenv("MOVIESERVICE_IMAGE_BASE_URL", "https://img.example.com/")
        config = load_service_config()
        assert config.base_url == "https://env.example.com/3/"
        assert config.api_key == "env-key"
        assert config.image_base_url == "https://img.example.com/"

    def test_overrides_win(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MOVIESERVICE_BASE_URL", "https://env.example.com/3/")
        monkeypatch.setenv("MOVIESERVICE_API_KEY", "env-key")
        config = load_service_config(api_key="explicit", base_url=None)
        assert config.api_key == "explicit"
        assert config.base_url == "https://env.example.com/3/"

    def test_explicit_path(self, tmp_path: Path, isolated_config: Path) -> None:
        path = tmp_path / "elsewhere.json"
        _write_json(path, {"base_url": "https://x.example.com/", "api_key": "k"})
        assert load_service_config(path).base_url == "https://x.example.com/"

    def test_missing_required_values_raise(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError):
            load_service_config()

    def test_literal_api_key_beats_source(self, isolated_config: Path) -> None:
        _write_json(
            config_path(),
            {
                "base_url": "https://file.example.com/3/",
                "api_key": "literal",
                "api_key_source": "env:UNSET_VARIABLE_FOR_TEST",
            },
        )
        assert load_service_config().api_key == "literal"

    def test_env_key_skips_unresolvable_source(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_VARIABLE_FOR_TEST", raising=False)
        _write_json(
            config_path(),
            {
                "base_url": "https://file.example.com/3/",
                "api_key_source": "env:UNSET_VARIABLE_FOR_TEST",
            },
        )
        monkeypatch.setenv("MOVIESERVICE_API_KEY", "env-key")
        assert load_service_config().api_key == "env-key"

    def test_override_key_skips_unresolvable_source(
        self, isolated_config: Path, tmp_path: Path
    ) -> None:
        _write_json(
            config_path(),
            {
                "base_url": "https://file.example.com/3/",
                "api_key_source": f"file:{tmp_path / 'missing-key.txt'}",
            },
        )
        assert load_service_config(api_key="explicit").api_key == "explicit"

    def test_source_used_when_nothing_else_supplies_key(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FILE_SOURCE_KEY", "from-source")
        _write_json(
            config_path(),
            {
                "base_url": "https://file.example.com/3/",
                "api_key_source": "env:FILE_SOURCE_KEY",
            },
        )
        assert load_service_config().api_key == "from-source"

    def test_unresolvable_source_without_fallback_raises(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_VARIABLE_FOR_TEST", raising=False)
        _write_json(
            config_path(),
            {
                "base_url": "https://file.example.com/3/",
                "api_key_source": "env:UNSET_VARIABLE_FOR_TEST",
            },
        )
        with pytest.raises(ConfigError, match="UNSET_VARIABLE_FOR_TEST"):
            load_service_config()


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------


class TestResolveCredential:
    def test_env_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_TMDB_KEY", "abc")
        assert resolve_credential("env:MY_TMDB_KEY") == "abc"

    def test_env_source_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MY_TMDB_KEY", raising=False)
        with pytest.raises(ConfigError, match="MY_TMDB_KEY"):
            resolve_credential("env:MY_TMDB_KEY")

    def test_file_source_strips_whitespace(self, tmp_path: Path) -> None:
        key_file = tmp_path / "key.txt"
        key_file.write_text("  file-key\n", encoding="utf-8")
        assert resolve_credential(f"file:{key_file}") == "file-key"

    def test_file_source_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            resolve_credential(f"file:{tmp_path / 'nope.txt'}")

    def test_literal_source(self) -> None:
        assert resolve_credential("plain-key") == "plain-key"
