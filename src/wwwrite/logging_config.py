import sys
import os
from pathlib import Path
from typing import Optional, Union
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False


def setup_logging(
    level="INFO",
    suppress_console=None,
    log_file: Optional[Union[str, Path]] = None,
    force: bool = False,
):
    """
    Configures the global logger.

    By default, only console logging is enabled. File logging is opt-in via
    the WWWRITE_LOG_FILE environment variable or the log_file argument.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check WWWRITE_MACHINE_MODE env var.
        log_file: Path of a log file to append to. If None, check WWWRITE_LOG_FILE env var.
        force: Reconfigure even if logging was already set up (used by the CLI --verbose flag).
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = os.getenv("WWWRITE_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    # Stream 1: Human-readable console output (only if not suppressed)
    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    # Stream 2: File logging is OPT-IN only
    if log_file is None:
        log_file = os.getenv("WWWRITE_LOG_FILE") or None

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level="DEBUG" if level == "DEBUG" else "INFO",
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            catch=True,
            serialize=False
        )


# Configure the logger on import (will check env var for machine mode)
setup_logging()
