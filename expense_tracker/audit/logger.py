"""
Audit Logger

DESIGN DECISION: Every mutation and every failed command is logged as a
structured JSON event on stderr. This provides:
1. Traceability of what changed in the data file and when
2. Debugging capability without touching normal command output

The audit logger:
- Writes through stdlib logging under the "expense_tracker" logger
- Defaults to ERROR so everyday commands print nothing extra
- Set EXPENSES_LOG_LEVEL=INFO to see every event
"""

import logging
import sys
from typing import Any, Callable

import structlog
from pydantic import ValidationError

from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


LOGGER_NAME = "expense_tracker"


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time, not at creation."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "ERROR") -> None:
    """
    Route audit logs to stderr at the given level.

    Safe to call more than once; only one handler is ever attached.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, _StderrHandler) for h in logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


class AuditLogger:
    """
    Central audit logging service.

    Thin wrapper that maps event severity to a log level and offers one
    helper per event the ledger and CLI emit.
    """

    def __init__(self, logger_name: str = f"{LOGGER_NAME}.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def _emit(self, build: Callable[..., AuditEvent], *args: Any, **kwargs: Any) -> None:
        """Build and log an event. An event that fails to build is logged, not raised."""
        try:
            event = build(*args, **kwargs)
        except ValidationError as e:
            self._logger.error(
                "audit_event_invalid",
                builder=build.__name__,
                error=str(e),
            )
            return
        self.log(event)

    def log_expense_added(
        self,
        expense_id: int,
        description: str,
        amount: str,
        expense_date: str,
    ) -> None:
        self._emit(
            AuditEventBuilder.expense_added,
            expense_id=expense_id,
            description=description,
            amount=amount,
            expense_date=expense_date,
        )

    def log_expense_updated(self, expense_id: int, fields: list[str]) -> None:
        self._emit(AuditEventBuilder.expense_updated, expense_id, fields)

    def log_expense_deleted(self, expense_id: int) -> None:
        self._emit(AuditEventBuilder.expense_deleted, expense_id)

    def log_budget_set(self, key: str, amount: str) -> None:
        self._emit(AuditEventBuilder.budget_set, key, amount)

    def log_budget_exceeded(self, key: str, budget: str, spent: str) -> None:
        self._emit(AuditEventBuilder.budget_exceeded, key, budget, spent)

    def log_export_completed(self, filename: str, row_count: int) -> None:
        self._emit(AuditEventBuilder.export_completed, filename, row_count)

    def log_validation_failed(self, command: str, message: str) -> None:
        self._emit(AuditEventBuilder.validation_failed, command, message)

    def log_expense_not_found(self, command: str, expense_id: int) -> None:
        self._emit(AuditEventBuilder.expense_not_found, command, expense_id)

    def log_storage_error(self, command: str, error_message: str) -> None:
        self._emit(AuditEventBuilder.storage_error, command, error_message)
