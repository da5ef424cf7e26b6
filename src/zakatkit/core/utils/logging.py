"""
Logging setup for applications built on zakatkit.

Library modules only emit through ``loguru.logger`` and never add sinks on
import. An application (or the ``zakatkit`` CLI) calls one of the setup
functions below once at startup.
"""

import sys

from loguru import logger

from zakatkit.core.config import Config

CONSOLE_FORMAT = "<level>{level: <8}</level> <cyan>{name}</cyan> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    console_format: str = CONSOLE_FORMAT,
) -> None:
    """
    Replace loguru's sinks with stderr and, optionally, a rotating file.

    Args:
        level: Minimum level for both sinks (DEBUG, INFO, WARNING, ERROR).
        log_file: File sink path; None logs to stderr only.
        rotation: Size or interval at which the file rotates.
        retention: How long rotated files are kept.
        console_format: Loguru format for the stderr sink.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=console_format)

    if log_file:
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)


def setup_logging_from_config(config: Config, verbose: bool = False) -> None:
    """Apply the ``logging`` config section; ``verbose`` forces DEBUG."""
    section = config.section("logging")
    setup_logging(
        level="DEBUG" if verbose else str(section.get("level") or "WARNING"),
        log_file=section.get("file"),
        rotation=str(section.get("rotation") or "10 MB"),
        retention=str(section.get("retention") or "7 days"),
    )
