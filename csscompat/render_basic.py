"""Basic mode renderer."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .constants import (
    ALL_VERSIONS,
    ANALYSIS_FAILED_REASON,
    BROWSER_NAMES,
    EMPTY_INPUT_PROMPT,
    FEATURE_LIST_LIMIT,
)
from .model import AnalysisResult, Browser
from .util.text import ellipsize


def _status_line(result: AnalysisResult) -> str:
    if result.features:
        return f"Analyzed CSS features: {len(result.features)}"
    return EMPTY_INPUT_PROMPT


def version_display(version: str | None, unsupported_count: int) -> str:
    """Describe a minimum version the way the browser cards show it."""
    if version is None:
        return "not fully supported" if unsupported_count else "n/a"
    if version == ALL_VERSIONS:
        return ALL_VERSIONS
    return f">= {version}"


def feature_labels(result: AnalysisResult) -> list[str]:
    """Labels for the feature list: the first entries found, sorted for display."""
    return sorted(feature.label for feature in result.features[:FEATURE_LIST_LIMIT])


def render_result(result: AnalysisResult, width: int = 80) -> Group:
    """Render an analysis result as a Rich renderable group."""
    lines: list[Text] = [Text(_status_line(result), style="bold"), Text("")]

    for browser in Browser:
        unsupported = result.unsupported.get(browser, ())
        version = result.minimum_versions.get(browser)
        style = "bold red" if version is None and unsupported else "bold green"
        if version is None and not unsupported:
            style = "dim"

        header = Text(f"{BROWSER_NAMES[browser.value]}: ", style="bold cyan")
        header.append(version_display(version, len(unsupported)), style=style)
        lines.append(header)
        lines.append(Text(f"  Latest: {result.latest_versions.get(browser) or 'n/a'}", style="dim"))
        lines.append(Text(f"  {ellipsize(result.reasons[browser], max(width - 4, 20))}"))

    labels = feature_labels(result)
    if labels:
        lines.append(Text(""))
        lines.append(Text("Features", style="bold"))
        lines.extend(Text(f"- {label}") for label in labels)

    return Group(Panel(Group(*lines), border_style="blue", title="CSS support"))


def render_failure(message: str) -> Group:
    """Render the generic state shown when an analysis raises unexpectedly."""
    lines: list[Text] = [Text(f"Analysis failed: {message}", style="bold red"), Text("")]
    for browser in Browser:
        lines.append(Text(f"{BROWSER_NAMES[browser.value]}: n/a", style="bold cyan"))
        lines.append(Text("  Latest: n/a", style="dim"))
        lines.append(Text(f"  {ANALYSIS_FAILED_REASON}"))
    return Group(Panel(Group(*lines), border_style="red", title="CSS support"))
