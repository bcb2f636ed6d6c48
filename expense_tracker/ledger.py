"""
Expense Ledger

This module ties storage, aggregation and auditing together and defines
every operation the CLI can run against the dataset:
1. Expense CRUD (add, update, delete)
2. Budgets (set, show)
3. Read-only reporting (list, summary, monthly summary, export)

DESIGN DECISION: Each mutation is a whole-file read-modify-write.
load() -> change in memory -> save(). Inputs arrive already validated
(see expense_tracker.cli.options), and any remaining check such as "does
this id exist" happens before save(), so a failed command never changes
the data file.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional, Union

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import (
    BudgetStatus,
    CategoryBreakdown,
    Expense,
    ExpenseUpdate,
    MonthlySummary,
    round_to_cents,
)
from expense_tracker.queries import aggregation
from expense_tracker.services.export import export_expenses
from expense_tracker.services.storage import (
    DatasetStorageInterface,
    JsonFileStorage,
    NotFoundError,
    StorageError,
)


class ExpenseLedger:
    """
    Runs expense and budget operations against a storage backend.

    Args:
        storage: Where the dataset lives. Defaults to the configured JSON file.
        audit_logger: Receives one event per successful mutation.
        today: Clock used for default dates and the "current year".
    """

    def __init__(
        self,
        storage: Optional[DatasetStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Callable[[], date] = date.today,
    ):
        self._storage = storage or JsonFileStorage()
        self._audit_logger = audit_logger or AuditLogger()
        self._today = today

    def current_year(self) -> int:
        return self._today().year

    def _year(self, year: Optional[int]) -> int:
        return self.current_year() if year is None else year

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def add_expense(
        self,
        description: str,
        amount: Decimal,
        category: Optional[str] = None,
        expense_date: Optional[date] = None,
    ) -> tuple[Expense, Optional[BudgetStatus]]:
        """
        Record a new expense and re-check that month's budget.

        Returns:
            (the stored expense, the exceeded BudgetStatus or None)
        """
        dataset = self._storage.load()
        expense = Expense(
            id=dataset.next_id(),
            description=description,
            amount=amount,
            category=category,
            date=expense_date or self._today(),
            created_at=datetime.now(timezone.utc),
        )
        dataset.expenses.append(expense)
        self._storage.save(dataset)

        self._audit_logger.log_expense_added(
            expense_id=expense.id,
            description=expense.description,
            amount=f"{expense.amount:.2f}",
            expense_date=expense.date.isoformat(),
        )

        exceeded = aggregation.check_budget_warning(dataset, expense)
        if exceeded is not None:
            self._audit_logger.log_budget_exceeded(
                key=exceeded.key,
                budget=f"{exceeded.budget:.2f}",
                spent=f"{exceeded.spent:.2f}",
            )
        return expense, exceeded

    def update_expense(self, expense_id: int, changes: ExpenseUpdate) -> Expense:
        """
        Overwrite the fields set on `changes`.

        Raises:
            NotFoundError: If no expense has this id
        """
        dataset = self._storage.load()
        current = dataset.find(expense_id)
        if current is None:
            raise NotFoundError(expense_id)

        updated = current.model_copy(update=changes.changes())
        index = dataset.expenses.index(current)
        dataset.expenses[index] = updated
        self._storage.save(dataset)

        self._audit_logger.log_expense_updated(
            expense_id, sorted(changes.model_fields_set)
        )
        return updated

    def delete_expense(self, expense_id: int) -> Expense:
        """
        Remove an expense.

        Raises:
            NotFoundError: If no expense has this id
        """
        dataset = self._storage.load()
        removed = dataset.find(expense_id)
        if removed is None:
            raise NotFoundError(expense_id)

        dataset.expenses = [e for e in dataset.expenses if e.id != expense_id]
        self._storage.save(dataset)

        self._audit_logger.log_expense_deleted(expense_id)
        return removed

    def list_expenses(
        self,
        category: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[Expense]:
        """Expenses sorted by date, optionally filtered by category and month."""
        expenses = aggregation.sort_by_date(self._storage.load().expenses)
        if category is not None:
            expenses = aggregation.filter_by_category(expenses, category)
        if month is not None:
            expenses = aggregation.filter_by_month(expenses, month, self._year(year))
        return expenses

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def summary(self) -> CategoryBreakdown:
        """All-time total and per-category totals."""
        return aggregation.total_and_by_category(self._storage.load().expenses)

    def monthly_summary(self, month: int, year: Optional[int] = None) -> MonthlySummary:
        return aggregation.monthly_summary(
            self._storage.load(), month, self._year(year)
        )

    def export(
        self,
        path: Union[str, Path],
        month: Optional[int] = None,
        category: Optional[str] = None,
        year: Optional[int] = None,
        encoding: str = "utf-8",
    ) -> int:
        """
        Write the filtered expenses to a CSV file.

        Returns:
            Number of rows exported

        Raises:
            StorageError: If the file cannot be written
        """
        expenses = aggregation.sort_by_date(self._storage.load().expenses)
        if month is not None:
            expenses = aggregation.filter_by_month(expenses, month, self._year(year))
        if category is not None:
            expenses = aggregation.filter_by_category(expenses, category)

        try:
            count = export_expenses(path, expenses, encoding=encoding)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        self._audit_logger.log_export_completed(str(path), count)
        return count

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    def set_budget(
        self,
        month: int,
        amount: Decimal,
        year: Optional[int] = None,
    ) -> tuple[str, Decimal]:
        """Create or overwrite the budget for a month."""
        key = aggregation.month_key(self._year(year), month)
        dataset = self._storage.load()
        stored = round_to_cents(amount)
        dataset.budgets[key] = stored
        self._storage.save(dataset)

        self._audit_logger.log_budget_set(key, f"{stored:.2f}")
        return key, stored

    def get_budget(
        self,
        month: int,
        year: Optional[int] = None,
    ) -> tuple[str, Optional[Decimal]]:
        key = aggregation.month_key(self._year(year), month)
        return key, self._storage.load().budgets.get(key)
