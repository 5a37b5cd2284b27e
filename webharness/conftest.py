"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers project-wide markers and tags tests by location.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Tests that run against in-memory fakes, no browser"
    )
    config.addinivalue_line(
        "markers", "ui: Tests that drive a real browser session"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by directory so they can be selected with -m."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path.split("webharness")[-1]:
            item.add_marker(pytest.mark.unit)
        elif "browser_session" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.ui)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Browser Automation Harness",
        "=" * 60,
        "",
    ]
