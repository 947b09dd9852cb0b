"""
Name mapping: npm module names of public packages -> www module names.
"""

from .builder import NameMapping, build_name_mapping, freeze_mapping, load_mapping_file
from .config import MapperConfig
from .names import npm_to_www_name, pascal_case
from .packages import discover_packages, exported_module_names, load_package

__all__ = [
    "MapperConfig",
    "NameMapping",
    "build_name_mapping",
    "discover_packages",
    "exported_module_names",
    "freeze_mapping",
    "load_mapping_file",
    "load_package",
    "npm_to_www_name",
    "pascal_case",
]
