"""Shared utilities and configuration."""

from danmaku_help.lib.config import HelpSettings, get_settings, reset_settings
from danmaku_help.lib.exceptions import (
    HelpError,
    NotFoundError,
    ValidationError,
    PersistenceError,
    ConfigError,
)

__all__ = [
    "HelpSettings",
    "get_settings",
    "reset_settings",
    "HelpError",
    "NotFoundError",
    "ValidationError",
    "PersistenceError",
    "ConfigError",
]
