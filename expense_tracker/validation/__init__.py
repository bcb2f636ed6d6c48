"""Input validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidationError,
    parse_amount,
    parse_category,
    parse_date,
    parse_expense_id,
    parse_month,
    parse_year,
)

__all__ = [
    "ExpenseValidationError",
    "parse_amount",
    "parse_category",
    "parse_date",
    "parse_expense_id",
    "parse_month",
    "parse_year",
]
