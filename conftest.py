"""
Repository-level pytest configuration.

Why this exists:
  - Register the browser session fixtures for every suite
  - Provide safe defaults for local runs (no secrets embedded)
  - Keep behavior explicit and discoverable
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


pytest_plugins = [
    "pytester",
    "webharness.framework.fixtures",
]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set local defaults if not already provided by the user/CI.

    Browser parameters are deliberately left alone so that
    config/parameters.yaml stays the single source for them.
    """
    defaults = {
        "UI_BASE_URL": "http://localhost:3000",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
