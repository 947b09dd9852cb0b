"""
Rewrite package: the syntax-aware rewrite engine for declaration files.

Maps module references of import statements through a name mapping and
annotates strict docblocks, leaving every other byte of the source untouched.
"""

from .config import RewriteConfig
from .docblock import annotate_docblock
from .engine import RewriteEngine, apply_splices, rewrite
from .literals import render_string, string_value
from .validator import verify_output

__all__ = [
    "RewriteConfig",
    "RewriteEngine",
    "annotate_docblock",
    "apply_splices",
    "render_string",
    "rewrite",
    "string_value",
    "verify_output",
]
