"""Environment-driven settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import os
from pathlib import Path

from .constants import (
    CACHE_DIR_NAME,
    CACHE_FILE_NAME,
    DEFAULT_DATA_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_CACHE_DIR,
    ENV_DATA_PATH,
    ENV_DATA_URL,
    ENV_DEBUG,
    ENV_TIMEOUT,
)
from .exceptions import ConfigError


@dataclass(frozen=True)
class Settings:
    data_path: Path | None
    data_url: str
    cache_dir: Path
    timeout: float
    debug: bool

    @property
    def cache_file(self) -> Path:
        return self.cache_dir / CACHE_FILE_NAME

    def with_data_path(self, data_path: Path | None) -> Settings:
        if data_path is None:
            return self
        return replace(self, data_path=data_path)


def debug_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """Check debug mode env flag."""
    env = os.environ if environ is None else environ
    return env.get(ENV_DEBUG, "").strip() == "1"


def _default_cache_dir(env: Mapping[str, str]) -> Path:
    xdg_cache = env.get("XDG_CACHE_HOME", "").strip()
    base = Path(xdg_cache) if xdg_cache else Path.home() / ".cache"
    return base / CACHE_DIR_NAME


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(ENV_TIMEOUT, raw) from exc
    if timeout <= 0:
        raise ConfigError(ENV_TIMEOUT, raw)
    return timeout


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from environment variables."""
    env = os.environ if environ is None else environ

    raw_path = env.get(ENV_DATA_PATH, "").strip()
    raw_cache = env.get(ENV_CACHE_DIR, "").strip()
    return Settings(
        data_path=Path(raw_path).expanduser() if raw_path else None,
        data_url=env.get(ENV_DATA_URL, "").strip() or DEFAULT_DATA_URL,
        cache_dir=Path(raw_cache).expanduser() if raw_cache else _default_cache_dir(env),
        timeout=_parse_timeout(env.get(ENV_TIMEOUT)),
        debug=debug_enabled(env),
    )
