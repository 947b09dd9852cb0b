"""
Build the NameMapping shared by every rewrite of a run.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from wwwrite.exceptions import ConfigError
from wwwrite.logging_config import logger
from wwwrite.schemas import PackageInfo
from wwwrite.tracing import trace
from .config import MapperConfig
from .names import npm_to_www_name
from .packages import exported_module_names

# Public reference -> internal reference. Read-only once built.
NameMapping = Mapping[str, str]


def freeze_mapping(entries: Dict[str, str]) -> NameMapping:
    """Wrap a dict in a read-only view after checking it for chained entries."""
    chained = sorted(set(entries.values()) & set(entries.keys()))
    if chained:
        logger.warning(
            f"Mapped values are also keys, rewrites will not be idempotent: {', '.join(chained)}"
        )
    return MappingProxyType(dict(entries))


@trace
def build_name_mapping(
    packages: Iterable[PackageInfo], config: Optional[MapperConfig] = None
) -> NameMapping:
    """
    Map every module exported by a public package to its www name.
    """
    config = config or MapperConfig()
    entries: Dict[str, str] = {}
    owners: Dict[str, str] = {}

    for package in packages:
        if package.private:
            logger.debug(f"Skipping private package {package.name}")
            continue
        for npm_name in exported_module_names(package):
            www_name = npm_to_www_name(npm_name, config)
            owner = owners.setdefault(www_name, npm_name)
            if owner != npm_name:
                logger.warning(f"{owner} and {npm_name} both map to {www_name}")
            entries[npm_name] = www_name

    logger.info(f"Built name mapping with {len(entries)} entries")
    return freeze_mapping(entries)


def load_mapping_file(path: Path) -> NameMapping:
    """
    Load a precomputed mapping from a JSON object of strings.

    Raises:
        ConfigError: If the file is unreadable or not a string-to-string object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read mapping file {path}: {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigError(f"Mapping file {path} must be a JSON object of strings")

    return freeze_mapping(data)
