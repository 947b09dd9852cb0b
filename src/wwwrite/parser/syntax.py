"""
Tree helpers shared by the rewrite engine and the output validator.
"""

from typing import Dict, Iterator, List, Optional

from tree_sitter import Node, Tree

from .config import (
    CLOSING_DELIMITERS,
    COMMENT_NODE_TYPE,
    HASH_BANG_NODE_TYPE,
    IMPORT_NODE_TYPES,
    OPENING_DELIMITERS,
)
from .language_manager import create_parser


def parse_bytes(source: bytes, dialect: str) -> Tree:
    """Parse UTF-8 source bytes with a fresh parser for the dialect."""
    return create_parser(dialect).parse(source)


def iter_nodes(root: Node) -> Iterator[Node]:
    """
    Yield every node of the tree in document order.

    Iterative, so deeply nested declarations cannot hit the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_error_nodes(root: Node) -> List[Node]:
    """Find all ERROR and MISSING nodes under root."""
    if not root.has_error:
        return []
    return [node for node in iter_nodes(root) if node.type == "ERROR" or node.is_missing]


def find_import_statements(root: Node) -> List[Node]:
    """Find every import statement, at any depth."""
    return [node for node in iter_nodes(root) if node.type in IMPORT_NODE_TYPES]


def import_source_node(statement: Node) -> Optional[Node]:
    """
    Return the string literal naming the imported module.

    `import x = require("y")` keeps its source on the require clause.
    """
    source = statement.child_by_field_name("source")
    if source is not None:
        return source
    for child in statement.named_children:
        if child.type == "import_require_clause":
            return child.child_by_field_name("source")
    return None


def find_docblock(root: Node) -> Optional[Node]:
    """
    Return the leading block comment of the file, if the file starts with one.

    A `#!` line may precede it; any other token before it means there is no
    docblock.
    """
    for child in root.children:
        if child.type == HASH_BANG_NODE_TYPE:
            continue
        if child.type == COMMENT_NODE_TYPE and child.text.startswith(b"/*"):
            return child
        return None
    return None


def error_position(node: Node) -> tuple:
    """1-based (line, column) of a node."""
    return node.start_point[0] + 1, node.start_point[1] + 1


def has_unbalanced_delimiters(root: Node) -> bool:
    """
    Tell whether some bracket of the source is never closed (or never opened).

    Every token stays in the tree, including the ones recovery wraps in ERROR
    nodes, so the leaves can be counted. Tokens inserted by recovery
    (MISSING nodes) are not in the source and are ignored.
    """
    depth: Dict[str, int] = {}
    for node in iter_nodes(root):
        if node.child_count or node.is_missing:
            continue
        if node.type in OPENING_DELIMITERS:
            pair = OPENING_DELIMITERS[node.type]
            depth[pair] = depth.get(pair, 0) + 1
        elif node.type in CLOSING_DELIMITERS:
            pair = CLOSING_DELIMITERS[node.type]
            depth[pair] = depth.get(pair, 0) - 1
    return any(depth.values())
