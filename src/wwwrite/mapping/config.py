"""
Configuration for the name mapper.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_CORE_PACKAGE = "lexical"
DEFAULT_SCOPE = "@lexical"
DEFAULT_WWW_PREFIX = "Lexical"
DEFAULT_PACKAGES_DIR = "packages"
# Scoped packages whose subpath exports already carry their www name
DEFAULT_BARE_SUBPATH_PACKAGES = ("react",)


@dataclass(frozen=True)
class MapperConfig:
    """
    How npm module names translate to www module names, and where packages live.

    Environment Variables:
        WWWRITE_PACKAGES_DIR: Directory holding one folder per package (default: packages)
    """

    core_package: str = DEFAULT_CORE_PACKAGE
    scope: str = DEFAULT_SCOPE
    www_prefix: str = DEFAULT_WWW_PREFIX
    bare_subpath_packages: Tuple[str, ...] = DEFAULT_BARE_SUBPATH_PACKAGES
    packages_dir: str = field(default_factory=lambda: os.getenv(
        "WWWRITE_PACKAGES_DIR", DEFAULT_PACKAGES_DIR
    ))
