"""Loading and shape validation for MDN browser-compat-data."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any

from .config import Settings
from .exceptions import CompatDataError
from .http import fetch_json, parse_json_payload
from .model import (
    Browser,
    BrowserRelease,
    CompatEntry,
    CompatNode,
    SupportStatement,
    VersionToken,
)
from .util.css import debug_log

LOGGER = logging.getLogger(__name__)
_COMPAT_KEY = "__compat"


def _require_mapping(value: object, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise CompatDataError(f"expected an object at {path}")
    return value


def _version_token(value: object, path: str) -> VersionToken:
    if value is None or isinstance(value, (str, bool)):
        return value
    raise CompatDataError(f"unexpected version value at {path}")


def _optional_text(value: object, path: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise CompatDataError(f"expected a string at {path}")


def _build_statement(raw: object, path: str) -> SupportStatement:
    statement = _require_mapping(raw, path)
    flags = statement.get("flags")
    if flags is not None and not isinstance(flags, list):
        raise CompatDataError(f"expected a list at {path}.flags")
    return SupportStatement(
        version_added=_version_token(statement.get("version_added"), f"{path}.version_added"),
        version_removed=_version_token(
            statement.get("version_removed"), f"{path}.version_removed"
        ),
        flags=tuple(flags or ()),
        prefix=_optional_text(statement.get("prefix"), f"{path}.prefix"),
        alternative_name=_optional_text(
            statement.get("alternative_name"), f"{path}.alternative_name"
        ),
    )


def _build_entry(raw: object, path: str) -> CompatEntry | None:
    compat = _require_mapping(raw, path)
    raw_support = compat.get("support")
    if raw_support is None:
        return None
    support_map = _require_mapping(raw_support, f"{path}.support")

    support: dict[Browser, tuple[SupportStatement, ...]] = {}
    for browser in Browser:
        browser_path = f"{path}.support.{browser.value}"
        raw_statements = support_map.get(browser.value)
        if raw_statements is None:
            continue
        if isinstance(raw_statements, list):
            support[browser] = tuple(
                _build_statement(item, f"{browser_path}[{index}]")
                for index, item in enumerate(raw_statements)
            )
        else:
            support[browser] = (_build_statement(raw_statements, browser_path),)
    return CompatEntry(support=support)


def _build_node(raw: Mapping[str, Any], path: str) -> CompatNode:
    compat = None
    if raw.get(_COMPAT_KEY) is not None:
        compat = _build_entry(raw[_COMPAT_KEY], f"{path}.{_COMPAT_KEY}")

    children = {
        key: _build_node(value, f"{path}.{key}")
        for key, value in raw.items()
        if key != _COMPAT_KEY and isinstance(value, Mapping)
    }
    return CompatNode(compat=compat, children=children)


def _build_releases(raw: object, path: str) -> dict[str, BrowserRelease]:
    if raw is None:
        return {}
    browser = _require_mapping(raw, path)
    raw_releases = browser.get("releases")
    if raw_releases is None:
        return {}

    releases: dict[str, BrowserRelease] = {}
    for release_id, raw_release in _require_mapping(raw_releases, f"{path}.releases").items():
        release_path = f"{path}.releases.{release_id}"
        release = _require_mapping(raw_release, release_path)
        releases[str(release_id)] = BrowserRelease(
            status=_optional_text(release.get("status"), f"{release_path}.status"),
            release_date=_optional_text(
                release.get("release_date"), f"{release_path}.release_date"
            ),
        )
    return releases


@dataclass(frozen=True)
class KnowledgeBase:
    """Read-only view of the CSS and browser sections of browser-compat-data."""

    properties: dict[str, CompatNode]
    selectors: dict[str, CompatNode]
    releases_by_browser: dict[Browser, dict[str, BrowserRelease]]

    @classmethod
    def from_bcd(cls, document: object) -> KnowledgeBase:
        """Validate a browser-compat-data document and convert the parts we use."""
        root = _require_mapping(document, "<root>")
        css = _require_mapping(root.get("css"), "css")
        properties = _require_mapping(css.get("properties"), "css.properties")
        selectors = _require_mapping(css.get("selectors"), "css.selectors")
        browsers = _require_mapping(root.get("browsers"), "browsers")

        return cls(
            properties={
                name: _build_node(raw, f"css.properties.{name}")
                for name, raw in properties.items()
                if isinstance(raw, Mapping)
            },
            selectors={
                name: _build_node(raw, f"css.selectors.{name}")
                for name, raw in selectors.items()
                if isinstance(raw, Mapping)
            },
            releases_by_browser={
                browser: _build_releases(browsers.get(browser.value), f"browsers.{browser.value}")
                for browser in Browser
            },
        )

    def property_node(self, name: str) -> CompatNode | None:
        return self.properties.get(name)

    def selector_node(self, name: str) -> CompatNode | None:
        return self.selectors.get(name)

    def releases(self, browser: Browser) -> dict[str, BrowserRelease]:
        return self.releases_by_browser.get(browser, {})


def _read_json_file(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CompatDataError(
            f"cannot read file ({exc.__class__.__name__})", source=str(path)
        ) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CompatDataError("file is not valid JSON", source=str(path)) from exc


def _write_cache(path: Path, raw: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw, encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Could not cache compatibility data at %s: %s", path, exc)


def load_knowledge_base(settings: Settings, *, refresh: bool = False) -> KnowledgeBase:
    """Load the dataset from an explicit path, the local cache, or the network."""
    if settings.data_path is not None:
        debug_log(f"loading compatibility data from {settings.data_path}")
        return KnowledgeBase.from_bcd(_read_json_file(settings.data_path))

    cache_file = settings.cache_file
    if not refresh and cache_file.is_file():
        debug_log(f"loading cached compatibility data from {cache_file}")
        return KnowledgeBase.from_bcd(_read_json_file(cache_file))

    debug_log(f"downloading compatibility data from {settings.data_url}")
    raw = fetch_json(settings.data_url, timeout=settings.timeout)
    knowledge_base = KnowledgeBase.from_bcd(parse_json_payload(raw, settings.data_url))
    _write_cache(cache_file, raw)
    return knowledge_base
