from typing import Dict, Tuple

from wwwrite.exceptions import ConfigError

# Dialect name -> (python module, language function, pip distribution)
# Flow declaration files are parsed with the TypeScript grammar, which accepts
# `import type` / `import typeof` and ambient declarations.
DIALECT_GRAMMARS: Dict[str, Tuple[str, str, str]] = {
    "typescript": ("tree_sitter_typescript", "language_typescript", "tree-sitter-typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx", "tree-sitter-typescript"),
    "javascript": ("tree_sitter_javascript", "language", "tree-sitter-javascript"),
}

# Delimiter tokens -> the bracket pair they belong to. `{|` and `|}` are Flow
# exact object types; `${` opens a template substitution.
OPENING_DELIMITERS = {"{": "{}", "{|": "{}", "${": "{}", "(": "()", "[": "[]"}
CLOSING_DELIMITERS = {"}": "{}", "|}": "{}", ")": "()", "]": "[]"}

# Node types the rewrite engine cares about
IMPORT_NODE_TYPES = frozenset({"import_statement"})
STRING_NODE_TYPE = "string"
COMMENT_NODE_TYPE = "comment"
HASH_BANG_NODE_TYPE = "hash_bang_line"


def validate_dialect(dialect: str) -> str:
    """
    Validate that a dialect is supported.

    Raises:
        ConfigError: If the dialect has no grammar configured.
    """
    if dialect not in DIALECT_GRAMMARS:
        supported = ", ".join(DIALECT_GRAMMARS.keys())
        raise ConfigError(
            f"Dialect '{dialect}' is not supported. Supported dialects: {supported}"
        )
    return dialect
