"""
Configuration for the rewrite engine.

All values configurable via WWWRITE_* environment variables, and overridable
per instance.
"""

import os
from dataclasses import dataclass, field

from wwwrite.parser.config import validate_dialect

DEFAULT_DIALECT = "typescript"
STRICT_MARKER = "@flow strict"
GENERATED_MARKER = "@generated"
DEFAULT_ONCALL = "lexical_web_text_editor"


def _env_str(key: str, default: str) -> str:
    """Read string from environment variable."""
    value = os.getenv(key)
    return value if value else default


def _env_bool(key: str, default: bool) -> bool:
    """Read boolean from environment variable."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


@dataclass(frozen=True)
class RewriteConfig:
    """
    Rewrite engine configuration.

    Environment Variables:
        WWWRITE_DIALECT: Grammar used to parse sources (default: typescript)
        WWWRITE_TOLERATE_SYNTAX_ERRORS: Rewrite around every recovered syntax
            error, including the ones that touch imports or the docblock,
            instead of raising ParseError (default: false)
        WWWRITE_VERIFY_OUTPUT: Re-parse output and check the edits (default: true)
        WWWRITE_ONCALL: Ownership tag written into annotated docblocks
            (default: lexical_web_text_editor)
    """

    dialect: str = field(default_factory=lambda: _env_str(
        "WWWRITE_DIALECT", DEFAULT_DIALECT
    ))
    tolerate_syntax_errors: bool = field(default_factory=lambda: _env_bool(
        "WWWRITE_TOLERATE_SYNTAX_ERRORS", False
    ))
    verify_output: bool = field(default_factory=lambda: _env_bool(
        "WWWRITE_VERIFY_OUTPUT", True
    ))
    oncall: str = field(default_factory=lambda: _env_str(
        "WWWRITE_ONCALL", DEFAULT_ONCALL
    ))
    strict_marker: str = STRICT_MARKER
    generated_marker: str = GENERATED_MARKER

    def __post_init__(self):
        validate_dialect(self.dialect)

    @property
    def inserted_annotations(self):
        """Annotations added after the strict marker line, in order."""
        return (self.generated_marker, f"@oncall {self.oncall}")
