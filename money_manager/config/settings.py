"""
Configuration Management for Money Manager

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger rules themselves (sign conventions, repayment categories) are
NOT configurable; only where things are stored and how they are shown.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from money_manager.models.ledger import Theme


class LedgerSettings(BaseSettings):
    """Where the state document lives and how it is presented."""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    state_file_path: str = Field(
        default="money_manager_state.json",
        description="Path of the JSON file holding the state document"
    )
    default_theme: Theme = Field(
        default=Theme.DARK,
        description="Theme for a brand-new document"
    )
    recent_transactions_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="How many transactions the feed shows by default"
    )
    backup_filename_prefix: str = Field(
        default="money_manager_backup",
        min_length=1,
        description="Prefix of exported backup file names"
    )


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_MANAGER_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    `<name>_error` entry for each failure. Useful for startup checks.
    """
    results = {}
    settings = get_settings()

    for name in ("ledger", "logging"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
