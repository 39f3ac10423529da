"""Version token helpers."""

from __future__ import annotations

import re

from ..model import VersionToken

_NON_VERSION_RE = re.compile(r"[^\d.]")
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_version(token: VersionToken) -> float | None:
    """Turn a version token into a comparable number.

    ``True`` means supported since an unknown early release and maps to ``0``.
    ``False``, ``None`` and strings without a usable number mean "never".
    Multi-part strings keep only their leading decimal (``"1.2.3"`` -> ``1.2``).
    """
    if token is True:
        return 0.0
    if token is False or token is None:
        return None

    cleaned = _NON_VERSION_RE.sub("", token)
    if not cleaned:
        return None
    match = _LEADING_NUMBER_RE.match(cleaned)
    if match is None:
        return None
    return float(match.group(0))


def compare_versions(left: VersionToken, right: VersionToken) -> float:
    """Order two tokens numerically; unparsable tokens sort as ``-1``."""
    left_value = parse_version(left)
    right_value = parse_version(right)
    return (-1.0 if left_value is None else left_value) - (
        -1.0 if right_value is None else right_value
    )


def format_version(value: float) -> str:
    """Format a version number as an integer string or with one decimal."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"
