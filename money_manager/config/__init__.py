"""Configuration package."""

from money_manager.config.settings import (
    LedgerSettings,
    LoggingSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LedgerSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
