"""
Package discovery: read package.json files of the source tree.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from wwwrite.exceptions import PackageMetadataError
from wwwrite.logging_config import logger
from wwwrite.schemas import PackageInfo
from .config import MapperConfig


def _export_paths(exports: Any) -> List[str]:
    """
    Subpath keys of an "exports" field.

    A string, or an object of conditions only ("import", "require", ...),
    exports the package root alone.
    """
    if isinstance(exports, dict) and exports and all(key.startswith(".") for key in exports):
        return list(exports.keys())
    return ["."]


def load_package(directory: Path) -> PackageInfo:
    """
    Load the metadata of the package in directory.

    Raises:
        PackageMetadataError: If package.json is missing, unreadable, or has no name.
    """
    manifest = directory / "package.json"
    try:
        with open(manifest, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = json.load(f)
    except (OSError, ValueError) as e:
        raise PackageMetadataError(str(manifest), str(e)) from e

    if not isinstance(data, dict) or not isinstance(data.get("name"), str) or not data["name"]:
        raise PackageMetadataError(str(manifest), "missing 'name'")

    return PackageInfo(
        name=data["name"],
        directory=str(directory),
        private=bool(data.get("private", False)),
        export_paths=_export_paths(data.get("exports")),
    )


def discover_packages(root: Path, config: Optional[MapperConfig] = None) -> List[PackageInfo]:
    """
    Load every package under <root>/<packages_dir>, sorted by directory name.

    Directories without a package.json are skipped.
    """
    config = config or MapperConfig()
    packages_root = Path(root) / config.packages_dir
    if not packages_root.is_dir():
        raise PackageMetadataError(str(packages_root), "packages directory not found")

    packages = []
    for directory in sorted(p for p in packages_root.iterdir() if p.is_dir()):
        if not (directory / "package.json").exists():
            logger.debug(f"Skipping {directory}: no package.json")
            continue
        packages.append(load_package(directory))

    logger.info(f"Discovered {len(packages)} packages in {packages_root}")
    return packages


def exported_module_names(package: PackageInfo) -> List[str]:
    """
    npm module names a package exports: "." is the package itself, "./X" is
    "<name>/X". Wildcard patterns and ./package.json are not modules.
    """
    names = []
    for key in package.export_paths:
        if key == ".":
            names.append(package.name)
        elif key == "./package.json" or "*" in key:
            continue
        elif key.startswith("./"):
            names.append(f"{package.name}/{key[2:]}")
    return names
