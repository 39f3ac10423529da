"""Style-sheet parsing helpers built around tree-sitter."""

from __future__ import annotations

from collections.abc import Container, Iterator
from functools import lru_cache
import logging

import tree_sitter_css
from tree_sitter import Language, Node, Parser, Tree

from ..config import debug_enabled
from ..exceptions import StylesheetParseError

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def css_language() -> Language:
    """Load the CSS grammar once per process."""
    return Language(tree_sitter_css.language())


def parse_stylesheet(source: str) -> Tree:
    """Parse style-sheet source, raising StylesheetParseError if no tree is produced."""
    try:
        encoded = source.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise StylesheetParseError("source is not encodable as UTF-8") from exc

    try:
        tree = Parser(css_language()).parse(encoded)
    except (TypeError, ValueError) as exc:
        raise StylesheetParseError(str(exc)) from exc
    if tree is None:
        raise StylesheetParseError("parser returned no tree")
    return tree


def walk(node: Node, node_types: Container[str] | None = None) -> Iterator[Node]:
    """Yield ``node`` and its descendants in document order, optionally filtered by type."""
    stack = [node]
    while stack:
        current = stack.pop()
        if node_types is None or current.type in node_types:
            yield current
        stack.extend(reversed(current.children))


def node_text(node: Node | None) -> str:
    """Decode the source text covered by a node."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def first_child(node: Node, node_type: str) -> Node | None:
    """Return the first direct child of the given type or None."""
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def debug_log(message: str) -> None:
    """Emit debug logs to stderr in debug mode only."""
    if debug_enabled():
        LOGGER.debug("%s", message)
