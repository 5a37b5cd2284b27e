"""
================================================================================
Harness Tools Common Utilities
================================================================================

Usage:
    from harness_tools.common import init_logger

    init_logger(level="DEBUG", log_file="logs/harness.log")

================================================================================
"""

from .global_config import DEFAULT_LOG_FORMAT, init_logger, reset_logger

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "init_logger",
    "reset_logger",
]
