"""
npm module name -> www module name.

    lexical                          -> Lexical
    lexical/Foo                      -> LexicalFoo
    @lexical/list                    -> LexicalList
    @lexical/code-shiki              -> LexicalCodeShiki
    @lexical/react/LexicalComposer   -> LexicalComposer
    @lexical/list/Foo                -> LexicalListFoo
"""

import re
from typing import Optional

from wwwrite.exceptions import ConfigError
from .config import MapperConfig

_WORD_SEPARATORS = re.compile(r"[-_.]+")


def pascal_case(name: str) -> str:
    """code-shiki -> CodeShiki; already-capitalized parts are kept."""
    return "".join(part[:1].upper() + part[1:] for part in _WORD_SEPARATORS.split(name) if part)


def npm_to_www_name(name: str, config: Optional[MapperConfig] = None) -> str:
    """
    Derive the www module name of an npm module name.

    Subpath exports of the packages in `bare_subpath_packages` (e.g.
    @lexical/react/LexicalComposer) are already named the www way and are
    used as they are. Other subpaths are appended to the package name, the
    same way `lexical/Foo` becomes `LexicalFoo`.

    Raises:
        ConfigError: If the name belongs neither to the core package nor to the scope.
    """
    config = config or MapperConfig()
    parts = name.split("/")

    if parts[0] == config.core_package:
        return config.www_prefix + "".join(parts[1:])

    if parts[0] == config.scope and len(parts) >= 2 and parts[1]:
        if len(parts) > 2 and parts[1] in config.bare_subpath_packages:
            return "".join(parts[2:])
        return config.www_prefix + pascal_case(parts[1]) + "".join(parts[2:])

    raise ConfigError(
        f"Module '{name}' is not part of '{config.core_package}' or '{config.scope}/*'"
    )
