"""
================================================================================
Global Logging Configuration
================================================================================

Centralized Loguru logging setup for the harness and its tests.

Features:
    - One-time sink configuration per process
    - Level, format and file sink from arguments or environment
    - Rotating file sink when a log file is configured

Environment variables:
    - LOG_LEVEL: Console and file log level (default INFO)
    - LOG_FILE: Optional log file path

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Subsequent calls are ignored until reset_logger() is called.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.
        format_string: Log format string. Uses DEFAULT_LOG_FORMAT if not provided.
        log_file: Optional file path to write logs to. Defaults to LOG_FILE.
        rotation: File rotation policy
        retention: File retention policy
    """
    global _logger_initialized

    if _logger_initialized:
        return

    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    format_string = format_string or DEFAULT_LOG_FORMAT

    # Remove default handler and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = log_file or os.getenv("LOG_FILE")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string.replace("{level: <8}", "{level}"),
            level=level,
            rotation=rotation,
            retention=retention,
            colorize=False,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def reset_logger() -> None:
    """Allow init_logger() to reconfigure sinks (used by tests)."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "init_logger",
    "reset_logger",
]
