"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and PURE.
Every function here takes expenses (or a whole Dataset) and returns a
result model. Nothing reads the data file, nothing prints, nothing
mutates its input. The ledger and the CLI decide what to do with the
results.

"Current year" is the only ambient input: month-only filters and budget
keys resolve against date.today().year unless a year is passed in.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from expense_tracker.models.expense import (
    BudgetStatus,
    CategoryBreakdown,
    Dataset,
    Expense,
    MonthlySummary,
)


ZERO = Decimal("0.00")


def current_year() -> int:
    return date.today().year


def month_key(year: int, month: int) -> str:
    """Budget key for a year-month, e.g. (2024, 3) -> "2024-03"."""
    _check_month(month)
    return f"{year:04d}-{month:02d}"


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")


def total_and_by_category(expenses: Iterable[Expense]) -> CategoryBreakdown:
    """
    Sum all amounts, overall and per category.

    Expenses without a category are grouped under "Uncategorized".
    Categories appear in the order they are first seen, not sorted.
    """
    total = ZERO
    by_category: dict[str, Decimal] = {}

    for expense in expenses:
        total += expense.amount
        key = expense.category_label
        by_category[key] = by_category.get(key, ZERO) + expense.amount

    return CategoryBreakdown(total=total, by_category=by_category)


def filter_by_month(
    expenses: Iterable[Expense],
    month: int,
    year: Optional[int] = None,
) -> list[Expense]:
    """
    Expenses dated in the given month.

    Args:
        month: 1-12
        year: Defaults to the current year at the time of the call

    Raises:
        ValueError: If month is outside 1-12
    """
    _check_month(month)
    if year is None:
        year = current_year()
    return [
        expense for expense in expenses
        if expense.date.year == year and expense.date.month == month
    ]


def filter_by_category(expenses: Iterable[Expense], category: str) -> list[Expense]:
    """Expenses whose category matches exactly."""
    return [expense for expense in expenses if expense.category == category]


def sort_by_date(expenses: Iterable[Expense]) -> list[Expense]:
    """Oldest first; expenses on the same day keep their stored order."""
    return sorted(expenses, key=lambda expense: expense.date)


def budget_status(dataset: Dataset, year: int, month: int) -> BudgetStatus:
    """Compare a month's spend against its budget, if one is set."""
    key = month_key(year, month)
    spent = total_and_by_category(
        filter_by_month(dataset.expenses, month, year)
    ).total
    budget = dataset.budgets.get(key)

    return BudgetStatus(
        key=key,
        budget=budget,
        spent=spent,
        exceeded=budget is not None and spent > budget,
    )


def check_budget_warning(dataset: Dataset, expense: Expense) -> Optional[BudgetStatus]:
    """
    Re-check the budget for the month a new expense landed in.

    Uses the expense's own year, not the current one.

    Returns:
        The status when that month is now over budget, None otherwise
    """
    status = budget_status(dataset, expense.date.year, expense.date.month)
    return status if status.exceeded else None


def monthly_summary(
    dataset: Dataset,
    month: int,
    year: Optional[int] = None,
) -> MonthlySummary:
    """Totals, per-category breakdown and budget status for one month."""
    if year is None:
        year = current_year()
    items = filter_by_month(dataset.expenses, month, year)

    return MonthlySummary(
        key=month_key(year, month),
        year=year,
        month=month,
        expenses=items,
        breakdown=total_and_by_category(items),
        budget_status=budget_status(dataset, year, month),
    )
