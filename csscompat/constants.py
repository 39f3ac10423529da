"""Constants used across pycsscompat."""

from __future__ import annotations

from typing import Final

DEFAULT_DATA_URL: Final[str] = "https://unpkg.com/@mdn/browser-compat-data/data.json"
CACHE_DIR_NAME: Final[str] = "pycsscompat"
CACHE_FILE_NAME: Final[str] = "data.json"

ENV_DATA_PATH: Final[str] = "CSSCOMPAT_DATA"
ENV_DATA_URL: Final[str] = "CSSCOMPAT_DATA_URL"
ENV_CACHE_DIR: Final[str] = "CSSCOMPAT_CACHE_DIR"
ENV_TIMEOUT: Final[str] = "CSSCOMPAT_TIMEOUT"
ENV_DEBUG: Final[str] = "CSSCOMPAT_DEBUG"

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

BROWSER_NAMES: Final[dict[str, str]] = {
    "chrome": "Chrome",
    "firefox": "Firefox",
    "safari": "Safari",
}

ALL_VERSIONS: Final[str] = "all"
NESTING_FEATURE_KEY: Final[str] = "selector:nesting"
NESTING_FEATURE_LABEL: Final[str] = "CSS nesting"
FEATURE_LIST_LIMIT: Final[int] = 200

EMPTY_INPUT_PROMPT: Final[str] = "Add CSS code to analyze"
NO_LIMITING_FEATURE: Final[str] = "No limiting features found"
ANALYSIS_FAILED_REASON: Final[str] = "Reason unavailable because the analysis failed"
EDITOR_PLACEHOLDER: Final[str] = "/* Paste your CSS here */"
