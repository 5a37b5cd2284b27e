"""
================================================================================
Parameter Reader
================================================================================

YAML-based browser parameters with environment variable override support.

Features:
    - Browser profile, headless, fullscreen and window geometry
    - Open-ended ``custom`` namespace for page-specific values
    - Environment variable override (BROWSER_HEADLESS overrides browser.headless)
    - Sentinel defaults instead of load failures

Expected layout (config/parameters.yaml):

    browser:
      profile: chrome
      headless: false
      fullscreen: false
      window_width: 1280
      window_height: 720
    custom:
      base_url: http://localhost:3000

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .locator import DEFAULT_TIMEOUT_MS
from .session_config import SessionConfig


# Default parameters file, relative to the repository root
DEFAULT_PARAMETERS_PATH = Path(__file__).parent.parent.parent / "config" / "parameters.yaml"

# Environment variable that points at an alternative parameters file
PARAMETERS_PATH_ENV = "HARNESS_PARAMETERS"

_MISSING = object()


class ParameterReader:
    """
    Reads browser session parameters once per process.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (BROWSER_PROFILE)
        2. YAML parameters file
        3. Sentinel defaults (False, -1, None)

    Missing or malformed values never abort loading; each one is logged
    and replaced by its sentinel.

    Usage:
        >>> reader = ParameterReader()
        >>> reader.get_profile()
        'chrome'
        >>> reader.get_custom_int("retry_limit")
        -1  # not configured
    """

    _instance: Optional["ParameterReader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ParameterReader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize parameter reader.

        Args:
            config_path: Path to YAML parameters file. Falls back to the
                HARNESS_PARAMETERS env var, then DEFAULT_PARAMETERS_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        env_path = os.environ.get(PARAMETERS_PATH_ENV)
        self._config_path = Path(config_path or env_path or DEFAULT_PARAMETERS_PATH)
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load parameters from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Parameters file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(
                f"There was an issue parsing {self._config_path}, "
                f"using defaults. Error: {e}"
            )
            self._config = {}
            return

        if loaded is not None and not isinstance(loaded, dict):
            logger.warning(
                f"Parameters file {self._config_path} must contain a mapping, "
                f"got {type(loaded).__name__}. Using defaults."
            )
            loaded = None

        self._config = loaded or {}
        logger.debug(f"Loaded parameters from: {self._config_path}")

    def reload(self) -> None:
        """Reload parameters from file."""
        self._load_config()
        logger.info(f"Parameters reloaded from: {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next reader loads from scratch."""
        cls._instance = None
        cls._config = {}

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get parameter by dot-notation path.

        Environment variables take precedence: ``browser.window_width``
        is overridden by ``BROWSER_WINDOW_WIDTH``.

        Args:
            key: Dot-notation path (e.g., "browser.profile")
            default: Value returned when the key is not configured
        """
        value = self._lookup(key)
        return default if value is _MISSING else value

    def _lookup(self, key: str) -> Any:
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        value: Any = self._config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return _MISSING
            value = value[part]

        if value is None:
            return _MISSING
        return value

    # =========================================================================
    # Typed Access
    # =========================================================================

    def get_boolean(self, key: str) -> bool:
        """
        Read a boolean parameter.

        Only a case-insensitive "true" (or a YAML true) yields True.
        Anything missing yields False with a warning.
        """
        value = self._lookup(key)
        if value is _MISSING:
            logger.warning(f"Parameter not configured: {key}. Using False")
            return False
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    def get_int(self, key: str) -> int:
        """Read an integer parameter; missing or malformed values yield -1."""
        value = self._lookup(key)
        if value is _MISSING:
            logger.warning(f"Parameter not configured: {key}. Using -1")
            return -1
        if isinstance(value, bool):
            logger.warning(f"There was an issue parsing {key}: boolean {value!r} is not an int. Using -1")
            return -1
        try:
            return int(str(value).strip())
        except ValueError as e:
            logger.warning(f"There was an issue parsing {key}: {e}. Using -1")
            return -1

    def get_string(self, key: str) -> Optional[str]:
        """Read a string parameter; missing values yield None."""
        value = self._lookup(key)
        if value is _MISSING:
            logger.warning(f"Parameter not configured: {key}")
            return None
        return str(value)

    def get_profile(self) -> Optional[str]:
        return self.get_string("browser.profile")

    def get_headless(self) -> bool:
        return self.get_boolean("browser.headless")

    def get_fullscreen(self) -> bool:
        return self.get_boolean("browser.fullscreen")

    def get_width(self) -> int:
        return self.get_int("browser.window_width")

    def get_height(self) -> int:
        return self.get_int("browser.window_height")

    def get_custom_boolean(self, tag: str) -> bool:
        return self.get_boolean(f"custom.{tag}")

    def get_custom_int(self, tag: str) -> int:
        return self.get_int(f"custom.{tag}")

    def get_custom_string(self, tag: str) -> Optional[str]:
        return self.get_string(f"custom.{tag}")

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire parameters section, or an empty dict."""
        value = self._config.get(section, {})
        return value if isinstance(value, dict) else {}

    def get_custom_section(self) -> Dict[str, Any]:
        """
        Get the custom section with ``CUSTOM_*`` environment overrides applied.

        Environment-only tags are added under their lower-cased name
        (``CUSTOM_BASE_URL`` becomes ``base_url``).
        """
        custom = dict(self.get_section("custom"))
        for tag in list(custom):
            value = self._lookup(f"custom.{tag}")
            if value is not _MISSING:
                custom[tag] = value

        known = {f"CUSTOM_{tag}".upper() for tag in custom}
        for env_key, env_value in os.environ.items():
            tag = env_key[len("CUSTOM_"):].lower()
            if env_key.startswith("CUSTOM_") and tag and env_key not in known:
                custom[tag] = env_value
        return custom

    # =========================================================================
    # Session Config
    # =========================================================================

    def session_config(self) -> SessionConfig:
        """
        Build the immutable SessionConfig for this run.

        Optional keys (executable_path, channel, wait_timeout) are read
        without warnings since their absence is the normal case.
        """
        wait_timeout = self.get("browser.wait_timeout", DEFAULT_TIMEOUT_MS)
        try:
            wait_timeout = int(wait_timeout)
        except (TypeError, ValueError):
            logger.warning(
                f"There was an issue parsing browser.wait_timeout: {wait_timeout!r}. "
                f"Using {DEFAULT_TIMEOUT_MS}"
            )
            wait_timeout = DEFAULT_TIMEOUT_MS

        executable_path = self.get("browser.executable_path")
        channel = self.get("browser.channel")

        return SessionConfig(
            profile=self.get_profile(),
            headless=self.get_headless(),
            fullscreen=self.get_fullscreen(),
            width=self.get_width(),
            height=self.get_height(),
            custom=self.get_custom_section(),
            executable_path=str(executable_path) if executable_path else None,
            channel=str(channel) if channel else None,
            wait_timeout=wait_timeout,
        )


def load_session_config(config_path: Optional[Path] = None) -> SessionConfig:
    """Convenience wrapper returning the SessionConfig for this process."""
    return ParameterReader(config_path).session_config()


__all__ = [
    "ParameterReader",
    "load_session_config",
    "DEFAULT_PARAMETERS_PATH",
    "PARAMETERS_PATH_ENV",
]
