"""Centralized environment configuration for patchlens.

All environment variables are read through this module using the PATCHLENS_
prefix for consistency.

Usage:
    from patchlens.settings import settings

    width = settings.stat_width()
"""

from __future__ import annotations

import os


def _get(name: str, default: str = "") -> str:
    """Get an environment variable value."""
    return os.environ.get(name, "").strip() or default


def _get_bool(name: str, default: bool = False) -> bool:
    """Get a boolean environment variable."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    return value.lower() in ("1", "true", "yes")


def _get_int(name: str, default: int = 0) -> int:
    """Get an integer environment variable."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float = 0.0) -> float:
    """Get a float environment variable."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


class Settings:
    """Centralized settings for patchlens.

    Environment variables use the PATCHLENS_ prefix.
    """

    # -------------------------------------------------------------------------
    # Git Settings
    # -------------------------------------------------------------------------

    @staticmethod
    def git_timeout() -> float:
        """Seconds to wait for ``git diff`` before giving up.

        Env: PATCHLENS_GIT_TIMEOUT (default: 30)
        """
        value = _get_float("PATCHLENS_GIT_TIMEOUT", default=30.0)
        return value if value > 0 else 30.0

    @staticmethod
    def context_lines() -> int:
        """Context lines requested from git (``--unified``).

        Env: PATCHLENS_CONTEXT_LINES (default: 3)
        """
        return max(0, _get_int("PATCHLENS_CONTEXT_LINES", default=3))

    # -------------------------------------------------------------------------
    # Rendering Settings
    # -------------------------------------------------------------------------

    @staticmethod
    def stat_width() -> int:
        """Maximum width of the +/- bar in the stat view.

        Env: PATCHLENS_STAT_WIDTH (default: 40)
        """
        value = _get_int("PATCHLENS_STAT_WIDTH", default=40)
        return value if value > 0 else 40

    @staticmethod
    def path_width() -> int:
        """Column width reserved for file paths in the stat view.

        Env: PATCHLENS_PATH_WIDTH (default: 50)
        """
        value = _get_int("PATCHLENS_PATH_WIDTH", default=50)
        return value if value > 0 else 50

    @staticmethod
    def color() -> bool | None:
        """Force color on or off. None means decide from the terminal.

        Env: PATCHLENS_COLOR (unset by default)
        """
        if not _get("PATCHLENS_COLOR"):
            return None
        return _get_bool("PATCHLENS_COLOR")

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------

    @staticmethod
    def log_level() -> str:
        """Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

        Env: PATCHLENS_LOG_LEVEL (default: WARNING)
        """
        return _get("PATCHLENS_LOG_LEVEL", default="WARNING").upper()

    @staticmethod
    def log_format() -> str:
        """Log format: "console" for dev-friendly, "json" for structured.

        Env: PATCHLENS_LOG_FORMAT (default: console)
        """
        return _get("PATCHLENS_LOG_FORMAT", default="console").lower()


# Singleton instance for convenient access
settings = Settings()
