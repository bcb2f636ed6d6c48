"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The tracker has no external services, so the only knobs are where the
data file lives and how chatty the audit log is. Both are validated once
at startup, before any command touches the data file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_FILENAME = ".expenses_data.json"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _default_data_path() -> Path:
    return Path.home() / DEFAULT_DATA_FILENAME


class ExpenseSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from EXPENSES_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: Path = Field(
        default_factory=_default_data_path,
        description="JSON file holding all expenses and budgets"
    )
    log_level: str = Field(
        default="ERROR",
        description="Level for structured audit logs written to stderr"
    )
    csv_encoding: str = Field(
        default="utf-8",
        description="Encoding used when writing CSV exports"
    )

    @field_validator('data_path')
    @classmethod
    def expand_data_path(cls, v: Path) -> Path:
        """Allow ~ in the configured path."""
        return v.expanduser()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> ExpenseSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return ExpenseSettings()
