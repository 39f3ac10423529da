"""Text utility helpers."""

from __future__ import annotations


def ellipsize(value: str, width: int) -> str:
    """Shorten long strings while preserving suffix visibility."""
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 1:
        return "…"
    return f"{value[: width - 1]}…"


def join_sources(sources: list[str]) -> str:
    """Join several style-sheet sources into one analysis input."""
    return "\n".join(source.rstrip("\n") for source in sources)
