import importlib
import threading
from typing import Dict

from tree_sitter import Language, Parser

from wwwrite.exceptions import GrammarNotFoundError
from wwwrite.logging_config import logger
from .config import DIALECT_GRAMMARS, validate_dialect

# Global cache for loaded languages to avoid repeated loading.
# Language objects are read-only once built; parsers are not, so they are
# never cached.
_language_cache: Dict[str, Language] = {}
_cache_lock = threading.Lock()


def get_language(dialect: str) -> Language:
    """
    Loads the tree-sitter language for a dialect from its grammar wheel.

    Caches the loaded language object for efficiency.

    Raises:
        ConfigError: Unknown dialect.
        GrammarNotFoundError: The grammar package is not installed.
    """
    validate_dialect(dialect)

    with _cache_lock:
        if dialect in _language_cache:
            return _language_cache[dialect]

        module_name, function_name, distribution = DIALECT_GRAMMARS[dialect]
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to import grammar module '{module_name}': {e}")
            raise GrammarNotFoundError(dialect, f"pip install {distribution}") from e

        lang = Language(getattr(module, function_name)())
        _language_cache[dialect] = lang
        logger.debug(f"Successfully loaded language '{dialect}'")
        return lang


def create_parser(dialect: str) -> Parser:
    """Create a fresh parser for a dialect. One parser per parse keeps calls independent."""
    parser = Parser()
    parser.language = get_language(dialect)
    return parser
