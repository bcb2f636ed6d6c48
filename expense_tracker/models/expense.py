"""
Core Data Models for Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the dataset invariants at runtime (unique ids, cents, real dates)
2. Provide clear validation error messages
3. Serialize to the same JSON shape the data file has always used

DESIGN DECISION: Money is a Decimal quantized to cents everywhere in memory,
but a plain JSON number on disk. Floats read back from the file are converted
through their string form so 3.5 stays 3.50 rather than picking up binary noise.
"""

import re
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
    model_validator,
)


CENTS = Decimal("0.01")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
UNCATEGORIZED = "Uncategorized"


# =============================================================================
# FIELD TYPES
# =============================================================================

def round_to_cents(value: Decimal) -> Decimal:
    """Round a decimal amount half-up to 2 fraction digits."""
    if not value.is_finite():
        raise ValueError("amount must be a finite number")
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _coerce_decimal(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def parse_iso_date(value: Any) -> Any:
    """
    Accept only strict YYYY-MM-DD strings that name a real calendar date.

    Non-string values (already a date) pass through untouched.
    """
    if isinstance(value, str):
        if not DATE_PATTERN.match(value):
            raise ValueError("date must be YYYY-MM-DD")
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValueError(f"{value} is not a valid calendar date")
    return value


Money = Annotated[
    Decimal,
    BeforeValidator(_coerce_decimal),
    AfterValidator(round_to_cents),
    PlainSerializer(float, return_type=float, when_used="json"),
]

ExpenseDate = Annotated[date, BeforeValidator(parse_iso_date)]

BudgetKey = Annotated[str, StringConstraints(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")]


# =============================================================================
# PERSISTED MODELS
# =============================================================================

class Expense(BaseModel):
    """
    One recorded spending entry.

    Ids are assigned by the ledger, never by the user.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int = Field(
        ...,
        gt=0,
        description="Unique, positive identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    amount: Money = Field(
        ...,
        description="Amount spent, rounded to cents"
    )
    category: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Free-text category; None means uncategorized"
    )
    date: ExpenseDate = Field(
        ...,
        description="Calendar date of the expense"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the expense was recorded"
    )

    @property
    def category_label(self) -> str:
        """Category name used for grouping."""
        return self.category or UNCATEGORIZED


class ExpenseUpdate(BaseModel):
    """
    Partial update for an existing expense.

    Only fields explicitly set are applied. Setting category to None
    clears it; leaving it unset keeps the current value.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Money] = None
    category: Optional[str] = Field(default=None, min_length=1)
    date: Optional[ExpenseDate] = None

    @model_validator(mode='after')
    def reject_null_required_fields(self) -> 'ExpenseUpdate':
        """Description, amount and date can change but never be removed."""
        for name in ("description", "amount", "date"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields to apply, keyed by Expense field name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class Dataset(BaseModel):
    """
    The full persisted collection of expenses and budgets.

    CRITICAL: This is the unit of persistence. Every mutation loads the
    whole dataset, changes it in memory and writes the whole thing back.
    """

    expenses: list[Expense] = Field(default_factory=list)
    budgets: dict[BudgetKey, Money] = Field(default_factory=dict)

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'Dataset':
        """Expense ids must be unique within the dataset."""
        seen = set()
        for expense in self.expenses:
            if expense.id in seen:
                raise ValueError(f"Duplicate expense id: {expense.id}")
            seen.add(expense.id)
        return self

    def next_id(self) -> int:
        """max(existing ids) + 1, or 1 for an empty dataset."""
        if not self.expenses:
            return 1
        return max(expense.id for expense in self.expenses) + 1

    def find(self, expense_id: int) -> Optional[Expense]:
        """Linear lookup by id."""
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        return None


# =============================================================================
# AGGREGATION RESULTS
# =============================================================================

class CategoryBreakdown(BaseModel):
    """Grand total plus per-category subtotals, in first-seen order."""

    total: Decimal = Field(default=Decimal("0.00"))
    by_category: dict[str, Decimal] = Field(default_factory=dict)


class BudgetStatus(BaseModel):
    """
    Spend for one year-month compared against its budget.

    exceeded is only ever True when a budget is set and spend is
    strictly greater than it.
    """

    key: str
    budget: Optional[Decimal] = None
    spent: Decimal = Field(default=Decimal("0.00"))
    exceeded: bool = False


class MonthlySummary(BaseModel):
    """Everything the monthly-summary command reports."""

    key: str
    year: int
    month: int = Field(ge=1, le=12)
    expenses: list[Expense] = Field(default_factory=list)
    breakdown: CategoryBreakdown
    budget_status: BudgetStatus
