"""
Configuration settings for utctimestamp.

**Conceptual**: The library has three knobs, all read from environment
variables (optionally via a `.env` file at the project root):

    UTCTIMESTAMP_OVERFLOW_POLICY          raise | wrap | saturate (default: raise)
    UTCTIMESTAMP_STRICT_RANGE_DIRECTION   true/false (default: false)
    UTCTIMESTAMP_LOG_LEVEL                logging level name (default: WARNING)

Settings are validated when loaded, so a typo in the policy name fails
immediately instead of silently falling back to a default.

This module uses python-dotenv to load .env files and frozen dataclasses for
type safety.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from utctimestamp.utils.math import OVERFLOW_POLICIES, OVERFLOW_RAISE

log = logging.getLogger(__name__)

# Project root .env (dev/local environments); variables already set in the
# environment take precedence.
ENV_PATH = Path(__file__).resolve().parent.parent.parent / ".env"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(
        f"{name} must be a boolean (one of {sorted(_TRUE_VALUES | _FALSE_VALUES - {''})}), got: {raw!r}"
    )


@dataclass(frozen=True)
class Settings:
    """
    Global settings for utctimestamp.

    Attributes:
        overflow_policy: What arithmetic does when a millisecond result leaves
                         the signed 64-bit range. "raise" (TimeOverflowError),
                         "wrap" (two's complement) or "saturate" (clamp).
        strict_range_direction: If True, TimeRange refuses to construct a
                                non-empty range whose step can never reach
                                the end bound (RangeDirectionError).
        log_level: Level applied by utctimestamp.utils.logging_setup.configure_logging.
    """
    overflow_policy: str = OVERFLOW_RAISE
    strict_range_direction: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.overflow_policy not in OVERFLOW_POLICIES:
            raise ValueError(
                f"UTCTIMESTAMP_OVERFLOW_POLICY must be one of {list(OVERFLOW_POLICIES)}, "
                f"got: {self.overflow_policy!r}"
            )
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"UTCTIMESTAMP_LOG_LEVEL must be one of {list(_LOG_LEVELS)}, "
                f"got: {self.log_level!r}"
            )

    @classmethod
    def from_env(cls, env_file: Path | str | None = ENV_PATH) -> "Settings":
        """
        Load settings from environment variables.

        Args:
            env_file: Optional .env file to load first. Existing environment
                      variables are not overridden. Pass None to skip.

        Returns:
            Validated Settings.

        Raises:
            ValueError: If any variable holds an invalid value.

        Usage example:
            >>> # In .env file:
            >>> # UTCTIMESTAMP_OVERFLOW_POLICY=saturate
            >>> settings = Settings.from_env()
            >>> settings.overflow_policy
            'saturate'
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(dotenv_path=env_file, override=False)

        overflow_policy = os.getenv("UTCTIMESTAMP_OVERFLOW_POLICY", OVERFLOW_RAISE).strip().lower()
        strict_range_direction = _parse_bool(
            "UTCTIMESTAMP_STRICT_RANGE_DIRECTION",
            os.getenv("UTCTIMESTAMP_STRICT_RANGE_DIRECTION", "false"),
        )
        log_level = os.getenv("UTCTIMESTAMP_LOG_LEVEL", "WARNING").strip().upper()

        settings = cls(
            overflow_policy=overflow_policy,
            strict_range_direction=strict_range_direction,
            log_level=log_level,
        )
        log.debug("Loaded settings: %s", settings)
        return settings


_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached.
    Tests can bypass the cache with `set_settings` or clear it with
    `reset_settings`.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def set_settings(settings: Settings) -> None:
    """Install an explicit Settings object as the global singleton."""
    global _default_settings
    _default_settings = settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    The next get_settings() call reloads from the environment.
    """
    global _default_settings
    _default_settings = None
