"""
wwwrite - prepares public Flow declaration files for the www build.

Rewrites npm module references of import statements to www module names and
marks strict declaration files as generated.
"""

__version__ = "0.1.0"

from wwwrite.exceptions import (
    ConfigError,
    ParseError,
    SerializationError,
    WwwriteError,
)
from wwwrite.mapping import NameMapping, build_name_mapping, discover_packages
from wwwrite.pipeline import rewrite_packages
from wwwrite.rewrite import RewriteConfig, RewriteEngine, rewrite
from wwwrite.schemas import RewriteReport, RewriteResult

__all__ = [
    "__version__",
    "ConfigError",
    "NameMapping",
    "ParseError",
    "RewriteConfig",
    "RewriteEngine",
    "RewriteReport",
    "RewriteResult",
    "SerializationError",
    "WwwriteError",
    "build_name_mapping",
    "discover_packages",
    "rewrite",
    "rewrite_packages",
]
