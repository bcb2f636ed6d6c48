"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data read from or written to the data file must conform to these schemas.
"""

from expense_tracker.models.expense import (
    UNCATEGORIZED,
    BudgetStatus,
    CategoryBreakdown,
    Dataset,
    Expense,
    ExpenseUpdate,
    MonthlySummary,
    parse_iso_date,
    round_to_cents,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "UNCATEGORIZED",
    "BudgetStatus",
    "CategoryBreakdown",
    "Dataset",
    "Expense",
    "ExpenseUpdate",
    "MonthlySummary",
    "parse_iso_date",
    "round_to_cents",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
