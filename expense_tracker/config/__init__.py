"""Configuration package."""

from expense_tracker.config.settings import (
    DEFAULT_DATA_FILENAME,
    ExpenseSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_DATA_FILENAME",
    "ExpenseSettings",
    "get_settings",
]
