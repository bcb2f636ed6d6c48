"""
Input Validation

DESIGN DECISION: Command-line text is turned into typed values in exactly
one place. The option models in expense_tracker.cli.options call these
parsers from their field validators, so by the time a command reaches the
ledger every value is already a Decimal, date or in-range int.

IMPORTANT: Validation NEVER silently fixes input. A bad amount or date is
reported and the command stops before the data file is touched. The one
normalization we do apply is rounding amounts to cents, which is part of
the data model rather than a correction.
"""

import math
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.models.expense import parse_iso_date, round_to_cents


MIN_YEAR = 1
MAX_YEAR = 9999
# Amounts below this survive the JSON float round-trip to the cent.
MAX_AMOUNT = Decimal("1e13")


class ExpenseValidationError(ValueError):
    """User input failed validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


def parse_amount(text: str, field: str = "amount") -> Decimal:
    """
    Parse a currency amount and round it to cents.

    Accepts anything that reads as a finite decimal number ("3.5", "-2", "1e2").
    """
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        raise ExpenseValidationError(field, f"{field} must be a number")

    if not value.is_finite():
        raise ExpenseValidationError(field, f"{field} must be a finite number")

    try:
        rounded = round_to_cents(value)
    except InvalidOperation:
        raise ExpenseValidationError(field, f"{field} is out of range")
    if abs(rounded) >= MAX_AMOUNT:
        raise ExpenseValidationError(field, f"{field} is out of range")
    return rounded


def parse_date(text: str, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string naming a real calendar date."""
    try:
        return parse_iso_date(text)
    except ValueError as e:
        raise ExpenseValidationError(field, str(e))


def _parse_int(text: str, field: str, message: str) -> int:
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise ExpenseValidationError(field, message)
    if not math.isfinite(value) or not value.is_integer():
        raise ExpenseValidationError(field, message)
    return int(value)


def parse_month(text: str, field: str = "month") -> int:
    """Parse a month number 1-12."""
    message = f"{field} must be 1-12"
    month = _parse_int(text, field, message)
    if not 1 <= month <= 12:
        raise ExpenseValidationError(field, message)
    return month


def parse_year(text: str, field: str = "year") -> int:
    """Parse a four-digit-or-less calendar year."""
    message = f"{field} must be a year between {MIN_YEAR} and {MAX_YEAR}"
    year = _parse_int(text, field, message)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ExpenseValidationError(field, message)
    return year


def parse_expense_id(text: str, field: str = "id") -> int:
    """Parse an expense id; ids are positive integers."""
    message = f"{field} must be a positive integer"
    expense_id = _parse_int(text, field, message)
    if expense_id < 1:
        raise ExpenseValidationError(field, message)
    return expense_id


def parse_category(text: str, field: str = "category") -> Optional[str]:
    """
    Parse a category name.

    The literal text "null" means "no category" and yields None.
    """
    value = text.strip()
    if value == "null":
        return None
    if not value:
        raise ExpenseValidationError(field, f"{field} cannot be empty")
    return value
