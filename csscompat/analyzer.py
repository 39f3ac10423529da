"""Aggregation of per-feature support into per-browser minimum versions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key

from .compat_data import KnowledgeBase
from .constants import ALL_VERSIONS, EMPTY_INPUT_PROMPT, NO_LIMITING_FEATURE
from .extract import collect_features
from .model import AnalysisResult, Browser, BrowserRelease, FeatureUsage, LimitingFeature
from .resolve import pick_support_statement, resolve_feature_compat
from .util.version import compare_versions, format_version, parse_version


@dataclass
class BrowserTally:
    minimum: float = 0.0
    limiting: LimitingFeature | None = None
    unsupported: list[str] = field(default_factory=list)


def aggregate(
    features: Iterable[FeatureUsage], knowledge_base: KnowledgeBase
) -> dict[Browser, BrowserTally]:
    """Fold every resolvable feature into a running tally per browser."""
    tallies = {browser: BrowserTally() for browser in Browser}

    for feature in features:
        node = resolve_feature_compat(feature, knowledge_base)
        if node is None or node.compat is None:
            continue

        for browser in Browser:
            statement = pick_support_statement(node.compat.statements(browser))
            if statement is None:
                continue

            tally = tallies[browser]
            version = parse_version(statement.version_added)
            if version is None:
                tally.unsupported.append(feature.label)
                continue

            # Equal versions hand the limiting slot to the later feature.
            if version >= tally.minimum:
                tally.minimum = version
                if version > 0:
                    tally.limiting = LimitingFeature(label=feature.label, version=version)

    return tallies


def format_minimum(tally: BrowserTally) -> str | None:
    if tally.unsupported:
        return None
    if tally.minimum == 0:
        return ALL_VERSIONS
    return format_version(tally.minimum)


def build_reason(unsupported: Sequence[str], limiting: LimitingFeature | None) -> str:
    """Explain in one line what decides a browser's minimum version."""
    if unsupported:
        if len(unsupported) == 1:
            return f"Not supported: {unsupported[0]}"
        return f"Not supported: {unsupported[0]} (+{len(unsupported) - 1} more)"

    if limiting is not None:
        return f"Limited by: {limiting.label} (since version {format_version(limiting.version)})"

    return NO_LIMITING_FEATURE


_Release = tuple[str, str]


def _compare_dates(left: str, right: str) -> int:
    return (left > right) - (left < right)


def _by_version_then_date(left: _Release, right: _Release) -> float:
    return compare_versions(left[0], right[0]) or _compare_dates(left[1], right[1])


def _by_date_then_version(left: _Release, right: _Release) -> float:
    return _compare_dates(left[1], right[1]) or compare_versions(left[0], right[0])


def latest_release(releases: Mapping[str, BrowserRelease]) -> str | None:
    """Pick a browser's current stable release.

    Releases flagged ``current`` win, highest version first and newest date on
    ties. Some datasets never flag the newest release, so without a flag the
    newest date wins and the version breaks ties.
    """
    if not releases:
        return None

    entries = [(version, release.release_date or "") for version, release in releases.items()]
    stable = [
        (version, release.release_date or "")
        for version, release in releases.items()
        if release.status == "current"
    ]

    if stable:
        ordered = sorted(stable, key=cmp_to_key(_by_version_then_date))
    else:
        ordered = sorted(entries, key=cmp_to_key(_by_date_then_version))
    return ordered[-1][0]


def latest_versions(knowledge_base: KnowledgeBase) -> dict[Browser, str | None]:
    return {browser: latest_release(knowledge_base.releases(browser)) for browser in Browser}


def _empty_result(latest: dict[Browser, str | None]) -> AnalysisResult:
    return AnalysisResult(
        features=(),
        minimum_versions={browser: None for browser in Browser},
        latest_versions=latest,
        unsupported={browser: () for browser in Browser},
        reasons={browser: EMPTY_INPUT_PROMPT for browser in Browser},
        limiting={browser: None for browser in Browser},
    )


def analyze_css_support(css: str, knowledge_base: KnowledgeBase) -> AnalysisResult:
    """Report the minimum browser versions able to render a CSS snippet."""
    latest = latest_versions(knowledge_base)
    if not css.strip():
        return _empty_result(latest)

    features = collect_features(css)
    tallies = aggregate(features.values(), knowledge_base)

    return AnalysisResult(
        features=tuple(features.values()),
        minimum_versions={browser: format_minimum(tallies[browser]) for browser in Browser},
        latest_versions=latest,
        unsupported={browser: tuple(tallies[browser].unsupported) for browser in Browser},
        reasons={
            browser: build_reason(tallies[browser].unsupported, tallies[browser].limiting)
            for browser in Browser
        },
        limiting={browser: tallies[browser].limiting for browser in Browser},
    )
