"""
Pipeline package: find declaration files per package, rewrite them, and
persist the changed ones.
"""

from .config import PipelineConfig
from .discovery import find_declaration_files, output_path_for
from .runner import process_file, rewrite_packages
from .writer import atomic_write, read_source

__all__ = [
    "PipelineConfig",
    "atomic_write",
    "find_declaration_files",
    "output_path_for",
    "process_file",
    "read_source",
    "rewrite_packages",
]
