"""Mapping of observed features onto compatibility-data entries."""

from __future__ import annotations

from collections.abc import Sequence
import re

from .compat_data import KnowledgeBase
from .constants import NESTING_FEATURE_KEY
from .model import CompatNode, FeatureUsage, SupportStatement, ValueKind

_WHITESPACE_RE = re.compile(r"\s+")
_INVALID_KEY_CHAR_RE = re.compile(r"[^a-z0-9\-_%().]", re.IGNORECASE)
_UNDERSCORE_RUN_RE = re.compile(r"_+")


def to_compat_key(value: str) -> str:
    """Normalize a value the way browser-compat-data names its sub-features."""
    key = _WHITESPACE_RE.sub("_", value)
    key = _INVALID_KEY_CHAR_RE.sub("_", key)
    key = _UNDERSCORE_RUN_RE.sub("_", key)
    return key.strip("_")


def build_value_candidates(value: str, kind: ValueKind | None) -> list[str]:
    """List lookup keys for a value; function calls try the ``()`` form first."""
    normalized = to_compat_key(value)
    candidates = [f"{normalized}()", normalized] if kind == "function-call" else [normalized]
    return list(dict.fromkeys(candidates))


def resolve_feature_compat(
    feature: FeatureUsage, knowledge_base: KnowledgeBase
) -> CompatNode | None:
    """Find the knowledge-base node describing a feature, or None if it is unknown."""
    if feature.type == "property" and feature.property:
        return knowledge_base.property_node(feature.property)

    if feature.type == "property-value" and feature.property and feature.value:
        property_node = knowledge_base.property_node(feature.property)
        if property_node is None:
            return None
        for key in build_value_candidates(feature.value, feature.value_kind):
            child = property_node.children.get(key)
            if child is not None:
                return child
        return None

    if feature.type == "selector" and feature.key == NESTING_FEATURE_KEY:
        return knowledge_base.selector_node("nesting")

    return None


def _is_unconditional(statement: SupportStatement) -> bool:
    return (
        not statement.flags
        and not statement.prefix
        and not statement.alternative_name
        and bool(statement.version_added)
    )


def pick_support_statement(statements: Sequence[SupportStatement]) -> SupportStatement | None:
    """Choose the statement that represents a browser's support for one feature.

    A plain, unconditional statement wins; then any statement with a known
    ``version_added``; then whatever comes first.
    """
    if not statements:
        return None

    for statement in statements:
        if _is_unconditional(statement):
            return statement
    for statement in statements:
        if statement.version_added is not None:
            return statement
    return statements[0]
