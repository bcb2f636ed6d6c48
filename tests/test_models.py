"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, aggregation)
2. Ledger tests against a real JSON file in tmp_path
3. End-to-end CLI tests through main(argv)
"""

import json
import logging
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import (
    UNCATEGORIZED,
    Dataset,
    Expense,
    ExpenseUpdate,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_creation(self):
        """Test Expense model creation from plain strings."""
        expense = Expense(id=1, description="Coffee", amount="3.5", date="2024-06-01")
        assert expense.id == 1
        assert expense.date == date(2024, 6, 1)
        assert str(expense.amount) == "3.50"
        assert expense.category is None
        assert expense.created_at.tzinfo is not None

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        expense = Expense(
            id=1, description="  Coffee  ", amount="1", category=" Food ", date="2024-06-01"
        )
        assert expense.description == "Coffee"
        assert expense.category == "Food"

    def test_amount_rounds_half_up_to_cents(self):
        """Test amounts are always stored rounded to cents."""
        assert str(Expense(id=1, description="x", amount="2.345", date="2024-06-01").amount) == "2.35"
        assert str(Expense(id=1, description="x", amount="2.344", date="2024-06-01").amount) == "2.34"

    def test_float_amount_goes_through_its_string_form(self):
        """Test 0.1 read from JSON becomes exactly 0.10."""
        expense = Expense(id=1, description="x", amount=0.1, date="2024-06-01")
        assert expense.amount == Decimal("0.10")

    def test_rejects_invalid_calendar_date(self):
        """Test that impossible dates are rejected."""
        with pytest.raises(ValidationError, match="not a valid calendar date"):
            Expense(id=1, description="x", amount="1", date="2024-13-40")

    def test_rejects_loose_date_format(self):
        """Test that only YYYY-MM-DD is accepted."""
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            Expense(id=1, description="x", amount="1", date="2024-6-1")

    def test_rejects_non_positive_id(self):
        """Test ids must be positive."""
        with pytest.raises(ValidationError):
            Expense(id=0, description="x", amount="1", date="2024-06-01")

    def test_rejects_empty_category(self):
        """Test category is either absent or non-empty."""
        with pytest.raises(ValidationError):
            Expense(id=1, description="x", amount="1", category="   ", date="2024-06-01")

    def test_category_label(self, make_expense):
        """Test missing categories group as Uncategorized."""
        assert make_expense(category=None).category_label == UNCATEGORIZED
        assert make_expense(category="Food").category_label == "Food"


class TestExpenseUpdate:
    """Tests for partial updates."""

    def test_only_set_fields_are_changes(self):
        """Test unset fields are not reported as changes."""
        update = ExpenseUpdate(amount="4")
        assert update.changes() == {"amount": Decimal("4.00")}

    def test_explicit_none_category_clears(self):
        """Test category=None is a change, not an omission."""
        assert ExpenseUpdate(category=None).changes() == {"category": None}

    def test_required_fields_cannot_be_cleared(self):
        """Test description, amount and date cannot be set to None."""
        with pytest.raises(ValidationError, match="amount cannot be cleared"):
            ExpenseUpdate(amount=None)


class TestDataset:
    """Tests for the Dataset model."""

    def test_empty_dataset(self):
        """Test the empty dataset shape."""
        dataset = Dataset()
        assert dataset.expenses == []
        assert dataset.budgets == {}
        assert dataset.next_id() == 1

    def test_next_id_is_max_plus_one(self, make_expense):
        """Test ids continue from the highest existing one."""
        dataset = Dataset(expenses=[make_expense(expense_id=3), make_expense(expense_id=7)])
        assert dataset.next_id() == 8

    def test_rejects_duplicate_ids(self, make_expense):
        """Test expense ids must be unique."""
        with pytest.raises(ValidationError, match="Duplicate expense id: 2"):
            Dataset(expenses=[make_expense(expense_id=2), make_expense(expense_id=2)])

    def test_rejects_bad_budget_key(self):
        """Test budget keys must be YYYY-MM with a real month."""
        with pytest.raises(ValidationError):
            Dataset(budgets={"2024-13": "100"})

    def test_find(self, make_expense):
        """Test lookup by id."""
        dataset = Dataset(expenses=[make_expense(expense_id=1), make_expense(expense_id=2)])
        assert dataset.find(2).id == 2
        assert dataset.find(3) is None

    def test_json_amounts_are_numbers(self, make_expense):
        """Test amounts and budgets serialize as JSON numbers."""
        dataset = Dataset(
            expenses=[make_expense(amount="3.50", category="Food")],
            budgets={"2024-06": Decimal("100")},
        )
        raw = json.loads(dataset.model_dump_json())
        assert raw["expenses"][0]["amount"] == 3.5
        assert raw["expenses"][0]["date"] == "2024-06-01"
        assert raw["budgets"] == {"2024-06": 100.0}

    def test_json_round_trip(self, make_expense):
        """Test save-shaped JSON loads back to an identical dataset."""
        dataset = Dataset(
            expenses=[
                make_expense(expense_id=1, amount="10", category="Food"),
                make_expense(expense_id=4, amount="0.1", expense_date="2024-02-29"),
            ],
            budgets={"2024-06": Decimal("150.25")},
        )
        restored = Dataset.model_validate_json(dataset.model_dump_json())
        assert restored.model_dump() == dataset.model_dump()


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_added(
            expense_id=5, description="Coffee", amount="3.50", expense_date="2024-06-01"
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == "5"
        assert log_dict["details"]["amount"] == "3.50"

    def test_expense_added_keeps_user_text_in_details(self):
        """Test long descriptions go to details, not the capped summary line."""
        description = "x" * 1000
        event = AuditEventBuilder.expense_added(
            expense_id=1, description=description, amount="3.50", expense_date="2024-06-01"
        )
        assert event.description == "Expense 1 added: 3.50"
        assert event.details["description"] == description

    def test_failure_events_are_not_info(self):
        """Test failure builders carry warning or error severity."""
        assert AuditEventBuilder.expense_not_found("delete", 9).severity == AuditSeverity.WARNING
        assert AuditEventBuilder.validation_failed("add", "bad").severity == AuditSeverity.WARNING
        assert AuditEventBuilder.storage_error("add", "disk full").severity == AuditSeverity.ERROR

    def test_budget_set_event(self):
        """Test AuditEventBuilder.budget_set."""
        event = AuditEventBuilder.budget_set("2024-06", "100.00")
        assert event.entity_type == "budget"
        assert event.entity_id == "2024-06"


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_event_that_fails_to_build_is_logged_not_raised(self, caplog):
        """Test a broken audit event never escapes into the caller."""
        def oversized_event() -> AuditEvent:
            return AuditEvent(event_type=AuditEventType.EXPENSE_ADDED, description="x" * 600)

        with caplog.at_level(logging.ERROR):
            AuditLogger()._emit(oversized_event)

        assert "audit_event_invalid" in caplog.text
        assert "oversized_event" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
