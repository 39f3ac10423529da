from __future__ import annotations

from pathlib import Path

import pytest

from csscompat.config import debug_enabled, load_settings
from csscompat.constants import DEFAULT_DATA_URL, DEFAULT_TIMEOUT_SECONDS
from csscompat.exceptions import ConfigError


def test_defaults() -> None:
    settings = load_settings({"XDG_CACHE_HOME": "/tmp/xdg"})

    assert settings.data_path is None
    assert settings.data_url == DEFAULT_DATA_URL
    assert settings.cache_dir == Path("/tmp/xdg/pycsscompat")
    assert settings.cache_file == Path("/tmp/xdg/pycsscompat/data.json")
    assert settings.timeout == DEFAULT_TIMEOUT_SECONDS
    assert settings.debug is False


def test_default_cache_dir_without_xdg() -> None:
    settings = load_settings({})

    assert settings.cache_dir == Path.home() / ".cache" / "pycsscompat"


def test_environment_overrides() -> None:
    settings = load_settings(
        {
            "CSSCOMPAT_DATA": "/data/bcd.json",
            "CSSCOMPAT_DATA_URL": "https://mirror.test/data.json",
            "CSSCOMPAT_CACHE_DIR": "/var/cache/css",
            "CSSCOMPAT_TIMEOUT": "2.5",
            "CSSCOMPAT_DEBUG": "1",
        }
    )

    assert settings.data_path == Path("/data/bcd.json")
    assert settings.data_url == "https://mirror.test/data.json"
    assert settings.cache_dir == Path("/var/cache/css")
    assert settings.timeout == 2.5
    assert settings.debug is True


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout(raw: str) -> None:
    with pytest.raises(ConfigError):
        load_settings({"CSSCOMPAT_TIMEOUT": raw})


def test_with_data_path() -> None:
    settings = load_settings({})

    assert settings.with_data_path(None) is settings
    assert settings.with_data_path(Path("x.json")).data_path == Path("x.json")


def test_debug_enabled_reads_process_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert debug_enabled() is False
    monkeypatch.setenv("CSSCOMPAT_DEBUG", " 1 ")
    assert debug_enabled() is True
    assert debug_enabled({"CSSCOMPAT_DEBUG": "0"}) is False
