"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by page objects and the failure hook.

================================================================================
"""

import allure


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_html(html: str, name: str = "HTML"):
    """Attach HTML content (e.g. page source) to Allure report."""
    allure.attach(
        html,
        name=name,
        attachment_type=allure.attachment_type.HTML
    )


def attach_png(data: bytes, name: str = "Screenshot"):
    """Attach PNG image bytes to Allure report."""
    allure.attach(
        data,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


__all__ = [
    "attach_text",
    "attach_html",
    "attach_png",
]
