"""Aggregation package."""

from expense_tracker.queries.aggregation import (
    budget_status,
    check_budget_warning,
    current_year,
    filter_by_category,
    filter_by_month,
    month_key,
    monthly_summary,
    sort_by_date,
    total_and_by_category,
)

__all__ = [
    "budget_status",
    "check_budget_warning",
    "current_year",
    "filter_by_category",
    "filter_by_month",
    "month_key",
    "monthly_summary",
    "sort_by_date",
    "total_and_by_category",
]
