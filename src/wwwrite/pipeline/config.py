"""
Configuration for declaration file discovery and output.
"""

import os
from dataclasses import dataclass, field

DEFAULT_FLOW_DIR = "flow"
DEFAULT_FLOW_GLOB = "*.flow"
DEFAULT_OUTPUT_DIR = "dist"


def _env_int(key: str, default: int) -> int:
    """Read integer from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class PipelineConfig:
    """
    Where declaration files are read from and written to, per package.

    Environment Variables:
        WWWRITE_FLOW_DIR: Input subdirectory of each package (default: flow)
        WWWRITE_FLOW_GLOB: Input file pattern (default: *.flow)
        WWWRITE_OUTPUT_DIR: Output subdirectory of each package (default: dist)
        WWWRITE_JOBS: Files rewritten in parallel (default: 1)
    """

    flow_dir: str = field(default_factory=lambda: os.getenv("WWWRITE_FLOW_DIR", DEFAULT_FLOW_DIR))
    flow_glob: str = field(default_factory=lambda: os.getenv("WWWRITE_FLOW_GLOB", DEFAULT_FLOW_GLOB))
    output_dir: str = field(default_factory=lambda: os.getenv("WWWRITE_OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
    jobs: int = field(default_factory=lambda: max(1, _env_int("WWWRITE_JOBS", 1)))
