"""
Text file I/O that preserves line endings and never leaves partial output.
"""

import os
import tempfile
from pathlib import Path

from wwwrite.logging_config import logger


def read_source(path: Path) -> str:
    """Read a UTF-8 file without newline translation (CRLF stays CRLF)."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def atomic_write(path: Path, content: str) -> None:
    """
    Write content to path atomically (temp file + rename).

    Creates the parent directory. On failure the temp file is removed and the
    error propagates; the target is either fully written or untouched.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the target directory keeps the rename on one filesystem
    fd, temp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(temp_path, str(path))
    except BaseException:
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        raise

    logger.debug(f"Atomic write completed: {path}")
