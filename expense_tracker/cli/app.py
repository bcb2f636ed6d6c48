"""
Command Dispatcher

Entry point for the `expenses` command. Routes the first positional
argument to a handler, prints results to stdout and diagnostics to stderr.

Exit status:
    0  success, help, or no arguments at all
    1  unknown command, invalid input, unknown expense id, or I/O failure

Every failure is terminal for the invocation; nothing is retried.
"""

import sys
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.cli.formatting import (
    USAGE,
    format_budget_warning,
    format_expense,
    format_monthly_summary,
    format_summary,
    money,
)
from expense_tracker.cli.options import (
    AddOptions,
    DeleteOptions,
    ExportOptions,
    ListOptions,
    MonthOptions,
    SetBudgetOptions,
    UpdateOptions,
)
from expense_tracker.cli.parser import ParsedArgs, parse_argv
from expense_tracker.config import ExpenseSettings, get_settings
from expense_tracker.ledger import ExpenseLedger
from expense_tracker.services.storage import (
    JsonFileStorage,
    NotFoundError,
    StorageError,
)
from expense_tracker.validation import ExpenseValidationError


Handler = Callable[[ExpenseLedger, ParsedArgs, ExpenseSettings], int]


# =============================================================================
# COMMAND HANDLERS
# =============================================================================

def cmd_add(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = AddOptions.from_args(args)
    expense, exceeded = ledger.add_expense(
        description=options.description,
        amount=options.amount,
        category=options.category,
        expense_date=options.expense_date,
    )
    print(f"Added expense id={expense.id}")
    if exceeded is not None:
        print(format_budget_warning(exceeded))
    return 0


def cmd_update(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = UpdateOptions.from_args(args)
    ledger.update_expense(options.expense_id, options.to_update())
    print(f"Updated expense id={options.expense_id}")
    return 0


def cmd_delete(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = DeleteOptions.from_args(args)
    ledger.delete_expense(options.expense_id)
    print(f"Deleted expense id={options.expense_id}")
    return 0


def cmd_list(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = ListOptions.from_args(args)
    expenses = ledger.list_expenses(
        category=options.category,
        month=options.month,
        year=options.year,
    )
    if not expenses:
        print("No expenses found.")
        return 0
    for expense in expenses:
        print(format_expense(expense))
    return 0


def cmd_summary(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    print("\n".join(format_summary(ledger.summary())))
    return 0


def cmd_monthly_summary(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = MonthOptions.from_args(args)
    summary = ledger.monthly_summary(options.month, year=options.year)
    print("\n".join(format_monthly_summary(summary)))
    return 0


def cmd_set_budget(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = SetBudgetOptions.from_args(args)
    key, amount = ledger.set_budget(options.month, options.amount, year=options.year)
    print(f"Set budget for {key} = {money(amount)}")
    return 0


def cmd_show_budget(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = MonthOptions.from_args(args)
    key, budget = ledger.get_budget(options.month, year=options.year)
    if budget is None:
        print(f"No budget set for {key}")
    else:
        print(f"{key} budget: {money(budget)}")
    return 0


def cmd_export(ledger: ExpenseLedger, args: ParsedArgs, settings: ExpenseSettings) -> int:
    options = ExportOptions.from_args(args)
    count = ledger.export(
        options.filename,
        month=options.month,
        category=options.category,
        year=options.year,
        encoding=settings.csv_encoding,
    )
    print(f"Exported {count} rows to {options.filename}")
    return 0


COMMANDS: dict[str, Handler] = {
    "add": cmd_add,
    "update": cmd_update,
    "delete": cmd_delete,
    "list": cmd_list,
    "summary": cmd_summary,
    "monthly-summary": cmd_monthly_summary,
    "set-budget": cmd_set_budget,
    "show-budget": cmd_show_budget,
    "export": cmd_export,
}


# =============================================================================
# DISPATCH
# =============================================================================

def validation_message(error: ValidationError) -> str:
    """
    Flatten a pydantic ValidationError into plain lines.

    Errors raised by our own parsers keep their message verbatim.
    """
    messages: list[str] = []
    for detail in error.errors():
        original = detail.get("ctx", {}).get("error")
        if original is not None:
            message = str(original)
        else:
            location = ".".join(str(part) for part in detail["loc"])
            message = f"{location}: {detail['msg']}" if location else detail["msg"]
        if message not in messages:
            messages.append(message)
    return "\n".join(messages)


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(
    argv: Optional[Sequence[str]] = None,
    ledger: Optional[ExpenseLedger] = None,
) -> int:
    """
    Run one command.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].
        ledger: Ledger to run against. Defaults to the configured data file.

    Returns:
        Process exit status
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv:
        print(USAGE)
        return 0

    args = parse_argv(argv)
    command = args.command
    if command == "help":
        print(USAGE)
        return 0

    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(USAGE)
        return 1

    try:
        settings = get_settings()
    except ValidationError as e:
        return _fail(f"Invalid configuration:\n{validation_message(e)}")

    configure_logging(settings.log_level)
    audit_logger = AuditLogger()
    if ledger is None:
        ledger = ExpenseLedger(JsonFileStorage(settings.data_path), audit_logger)

    try:
        return handler(ledger, args, settings)
    except ValidationError as e:
        message = validation_message(e)
        audit_logger.log_validation_failed(command, message)
        return _fail(message)
    except ExpenseValidationError as e:
        audit_logger.log_validation_failed(command, e.message)
        return _fail(e.message)
    except NotFoundError as e:
        audit_logger.log_expense_not_found(command, e.expense_id)
        return _fail(str(e))
    except StorageError as e:
        audit_logger.log_storage_error(command, str(e))
        return _fail(str(e))


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
