"""
================================================================================
Harness Tools
================================================================================

Shared utilities for the browser harness.

Modules:
    - common: Loguru logging setup
    - report_tools: Allure attachment helpers

Example:
    from harness_tools.common import init_logger
    from harness_tools.report_tools.allure_utils import attach_text

    init_logger(level="DEBUG")
    attach_text("https://example.com/login", name="Current URL")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
