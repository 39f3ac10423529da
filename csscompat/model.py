"""Data models for feature extraction, compatibility data and analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

FeatureType = Literal["property", "property-value", "selector"]
ValueKind = Literal["identifier", "function-call"]
VersionToken = str | bool | None


class Browser(str, Enum):
    """The browsers every analysis reports on."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    SAFARI = "safari"


@dataclass(frozen=True)
class FeatureUsage:
    key: str
    type: FeatureType
    label: str
    property: str | None = None
    value: str | None = None
    value_kind: ValueKind | None = None


@dataclass(frozen=True)
class SupportStatement:
    version_added: VersionToken
    version_removed: VersionToken = None
    flags: tuple[object, ...] = ()
    prefix: str | None = None
    alternative_name: str | None = None


@dataclass(frozen=True)
class CompatEntry:
    """Support statements of one knowledge-base node, in dataset order."""

    support: dict[Browser, tuple[SupportStatement, ...]]

    def statements(self, browser: Browser) -> tuple[SupportStatement, ...]:
        return self.support.get(browser, ())


@dataclass(frozen=True)
class CompatNode:
    """A knowledge-base node: its own compat block plus named sub-features."""

    compat: CompatEntry | None = None
    children: dict[str, CompatNode] = field(default_factory=dict)


@dataclass(frozen=True)
class BrowserRelease:
    status: str | None = None
    release_date: str | None = None


@dataclass(frozen=True)
class LimitingFeature:
    label: str
    version: float


@dataclass(frozen=True)
class AnalysisResult:
    features: tuple[FeatureUsage, ...]
    minimum_versions: dict[Browser, str | None]
    latest_versions: dict[Browser, str | None]
    unsupported: dict[Browser, tuple[str, ...]]
    reasons: dict[Browser, str]
    limiting: dict[Browser, LimitingFeature | None] = field(default_factory=dict)
