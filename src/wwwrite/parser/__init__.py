"""
This facade exposes the public API for the parser module.
"""
from .config import DIALECT_GRAMMARS, validate_dialect
from .language_manager import create_parser, get_language
from .syntax import (
    error_position,
    find_docblock,
    find_error_nodes,
    find_import_statements,
    has_unbalanced_delimiters,
    import_source_node,
    iter_nodes,
    parse_bytes,
)

__all__ = [
    "DIALECT_GRAMMARS",
    "create_parser",
    "error_position",
    "find_docblock",
    "find_error_nodes",
    "find_import_statements",
    "get_language",
    "has_unbalanced_delimiters",
    "import_source_node",
    "iter_nodes",
    "parse_bytes",
    "validate_dialect",
]
