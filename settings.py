"""Environment configuration for git-patch-view.

All environment variables are read through this module using the PATCH_VIEW_
prefix.

Usage:
    from settings import settings

    level = settings.log_level()
"""

import os

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")


def _get(name: str, default: str = "") -> str:
    """Get an environment variable value."""
    return os.environ.get(name, "").strip() or default


def _get_choice(name: str, choices, default: str) -> str:
    """Get an environment variable restricted to ``choices``."""
    value = _get(name).lower()
    for choice in choices:
        if value == choice.lower():
            return choice
    return default


class Settings:
    """Settings read from PATCH_VIEW_* environment variables."""

    @staticmethod
    def log_level() -> str:
        """Logging level name.

        Env: PATCH_VIEW_LOG_LEVEL (default: WARNING)
        """
        return _get_choice("PATCH_VIEW_LOG_LEVEL", LOG_LEVELS, default="WARNING")

    @staticmethod
    def log_format() -> str:
        """Log renderer: ``console`` or ``json``.

        Env: PATCH_VIEW_LOG_FORMAT (default: console)
        """
        return _get_choice("PATCH_VIEW_LOG_FORMAT", LOG_FORMATS, default="console")


settings = Settings()
