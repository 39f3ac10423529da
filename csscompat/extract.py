"""Feature inventory extraction from style-sheet source."""

from __future__ import annotations

from collections.abc import Iterator
import re

from tree_sitter import Node

from .constants import NESTING_FEATURE_KEY, NESTING_FEATURE_LABEL
from .exceptions import StylesheetParseError
from .model import FeatureUsage
from .util.css import debug_log, first_child, node_text, parse_stylesheet, walk

_IDENT_RE = re.compile(r"-?-?[a-z_][a-z0-9_-]*", re.IGNORECASE)
# Resource locators, not functions; their arguments are never identifiers.
_OPAQUE_FUNCTIONS = frozenset({"url"})
_NAME_NODE_TYPES = {"declaration": "property_name", "feature_query": "feature_name"}


def _add_feature(features: dict[str, FeatureUsage], feature: FeatureUsage) -> None:
    if feature.key not in features:
        features[feature.key] = feature


def _value_nodes(declaration: Node) -> Iterator[Node]:
    """Yield the value children of a declaration, after the colon."""
    seen_colon = False
    for child in declaration.children:
        if not seen_colon:
            seen_colon = child.type == ":"
            continue
        if child.is_named and child.type != "important":
            yield child


def _function_name(call: Node) -> str:
    return node_text(first_child(call, "function_name")).strip().lower()


def _value_tokens(value_root: Node) -> Iterator[Node]:
    """Yield ``plain_value`` and ``call_expression`` nodes in document order.

    The arguments of ``url()`` are not descended into.
    """
    stack = [value_root]
    while stack:
        current = stack.pop()
        if current.type == "call_expression":
            if _function_name(current) in _OPAQUE_FUNCTIONS:
                continue
            yield current
        elif current.type == "plain_value":
            yield current
        stack.extend(reversed(current.children))


def _in_supports_condition(node: Node) -> bool:
    parent = node.parent
    while parent is not None and parent.type != "block":
        if parent.type == "supports_statement":
            return True
        parent = parent.parent
    return False


def _property_feature(prop: str) -> FeatureUsage:
    return FeatureUsage(key=f"property:{prop}", type="property", property=prop, label=prop)


def _identifier_feature(prop: str, value: str) -> FeatureUsage:
    return FeatureUsage(
        key=f"property-value:{prop}:{value}",
        type="property-value",
        property=prop,
        value=value,
        value_kind="identifier",
        label=f"{prop}: {value}",
    )


def _function_feature(prop: str, name: str) -> FeatureUsage:
    return FeatureUsage(
        key=f"property-value:{prop}:{name}()",
        type="property-value",
        property=prop,
        value=name,
        value_kind="function-call",
        label=f"{prop}: {name}()",
    )


def _collect_declaration(features: dict[str, FeatureUsage], declaration: Node) -> None:
    name_node = first_child(declaration, _NAME_NODE_TYPES[declaration.type])
    prop = node_text(name_node).strip().lower()
    if not prop:
        return

    _add_feature(features, _property_feature(prop))

    for value_root in _value_nodes(declaration):
        for value_node in _value_tokens(value_root):
            if value_node.type == "plain_value":
                value = node_text(value_node).strip().lower()
                # Fragments such as "px/1.5" in "12px/1.5" are not keywords.
                if _IDENT_RE.fullmatch(value):
                    _add_feature(features, _identifier_feature(prop, value))
                continue

            name = _function_name(value_node)
            if name:
                _add_feature(features, _function_feature(prop, name))


def _collect_tree(features: dict[str, FeatureUsage], root: Node) -> None:
    for node in walk(root, _NAME_NODE_TYPES):
        if node.type == "feature_query" and not _in_supports_condition(node):
            continue
        _collect_declaration(features, node)

    if next(walk(root, {"nesting_selector"}), None) is not None:
        _add_feature(
            features,
            FeatureUsage(key=NESTING_FEATURE_KEY, type="selector", label=NESTING_FEATURE_LABEL),
        )


def _closed_source(css: str) -> str:
    """Terminate a trailing open declaration and close any open blocks."""
    depth = css.count("{") - css.count("}")
    return css + ";" + "}" * max(depth, 1)


def collect_features(css: str) -> dict[str, FeatureUsage]:
    """Build the deduplicated feature inventory for a style sheet.

    Parse failures degrade to an empty inventory: half-typed input is an
    ordinary state while editing, not an error. When the tree has syntax
    errors, the source is parsed a second time with its trailing declaration
    and blocks closed, so the declaration being typed still counts.
    """
    features: dict[str, FeatureUsage] = {}

    try:
        tree = parse_stylesheet(css)
    except StylesheetParseError as exc:
        debug_log(f"stylesheet parse failed: {exc}")
        return features

    _collect_tree(features, tree.root_node)

    if tree.root_node.has_error:
        try:
            recovered = parse_stylesheet(_closed_source(css))
        except StylesheetParseError as exc:
            debug_log(f"recovery parse failed: {exc}")
        else:
            _collect_tree(features, recovered.root_node)

    debug_log(f"collected {len(features)} features")
    return features
