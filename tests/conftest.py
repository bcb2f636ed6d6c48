"""Shared fixtures: an isolated data file and a ledger with a fixed clock."""

from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from expense_tracker.config import get_settings
from expense_tracker.ledger import ExpenseLedger
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import JsonFileStorage


FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the default data file into tmp_path and keep .env out of reach."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("EXPENSES_DATA_PATH", str(tmp_path / "default_data.json"))
    monkeypatch.delenv("EXPENSES_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "expenses.json"


@pytest.fixture
def storage(data_file):
    return JsonFileStorage(data_file)


@pytest.fixture
def ledger(storage):
    return ExpenseLedger(storage, today=lambda: FIXED_TODAY)


@pytest.fixture
def make_expense():
    """Factory for expenses with sensible defaults."""
    def _make(
        expense_id: int = 1,
        description: str = "Coffee",
        amount: str = "3.50",
        category: Optional[str] = None,
        expense_date: str = "2024-06-01",
    ) -> Expense:
        return Expense(
            id=expense_id,
            description=description,
            amount=Decimal(amount),
            category=category,
            date=expense_date,
        )
    return _make
