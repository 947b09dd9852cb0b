"""
Reading and writing module-reference string literals.
"""

import re

from tree_sitter import Node

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_HEX_ESCAPE = re.compile(r"^\\(?:x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})|u\{([0-9a-fA-F]+)\})$")


def _unescape(sequence: str) -> str:
    match = _HEX_ESCAPE.match(sequence)
    if match:
        return chr(int(next(g for g in match.groups() if g), 16))
    body = sequence[1:]
    if body in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        return ""  # line continuation
    return _SIMPLE_ESCAPES.get(body, body)


def string_value(node: Node) -> str:
    """
    Cooked value of a string literal node (quotes removed, escapes decoded).
    """
    children = node.named_children
    if not children:
        return node.text.decode("utf-8")[1:-1]

    parts = []
    for child in children:
        text = child.text.decode("utf-8")
        if child.type == "escape_sequence":
            parts.append(_unescape(text))
        else:
            parts.append(text)
    return "".join(parts)


def quote_char(node: Node) -> str:
    """The quote character the literal was written with."""
    first = node.text[:1].decode("utf-8")
    return first if first in ("'", '"') else '"'


def render_string(value: str, quote: str) -> str:
    """Render value as a string literal delimited by quote."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace(quote, "\\" + quote)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"{quote}{escaped}{quote}"
