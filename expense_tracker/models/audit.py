"""
Audit Models for Expense Tracker

Every mutation of the dataset, and every command failure, is described by
an audit event. Events are written to the structured log only; they are
never stored in the data file.

DESIGN DECISION: Events are built through AuditEventBuilder so that the
same action always produces the same event shape, whichever command
triggered it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Dataset mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    BUDGET_SET = "budget_set"

    # Derived
    BUDGET_EXCEEDED = "budget_exceeded"
    EXPORT_COMPLETED = "export_completed"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    EXPENSE_NOT_FOUND = "expense_not_found"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_id is the expense id for expense events, or the budget key
    ("YYYY-MM") for budget events.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'budget', 'export')"
    )
    entity_id: Optional[str] = None
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Coffee", "3.50")
        event = AuditEventBuilder.expense_not_found("delete", 42)
    """

    @staticmethod
    def expense_added(
        expense_id: int,
        description: str,
        amount: str,
        expense_date: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense {expense_id} added: {amount}",
            details={
                "description": description,
                "amount": amount,
                "date": expense_date,
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        fields: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense updated: {', '.join(fields) or 'no fields'}",
            details={"fields": fields},
        )

    @staticmethod
    def expense_deleted(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=str(expense_id),
            description="Expense deleted",
        )

    @staticmethod
    def budget_set(key: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=key,
            description=f"Budget for {key} set to {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def budget_exceeded(key: str, budget: str, spent: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EXCEEDED,
            entity_type="budget",
            entity_id=key,
            description=f"Monthly budget exceeded for {key}",
            details={
                "budget": budget,
                "spent": spent,
            },
        )

    @staticmethod
    def export_completed(filename: str, row_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_COMPLETED,
            entity_type="export",
            description=f"Exported {row_count} rows",
            details={
                "filename": filename,
                "row_count": row_count,
            },
        )

    @staticmethod
    def validation_failed(command: str, message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Validation failed for {command}",
            error_message=message,
            details={"command": command},
        )

    @staticmethod
    def expense_not_found(command: str, expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"No expense with id {expense_id}",
            details={"command": command},
        )

    @staticmethod
    def storage_error(command: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {command}",
            error_message=error_message,
            details={"command": command},
        )
