"""Human-readable rendering of ledger results for the terminal."""

from decimal import Decimal

from expense_tracker.models.expense import (
    BudgetStatus,
    CategoryBreakdown,
    Expense,
    MonthlySummary,
)


USAGE = """Usage:
  add <description> <amount> [--category <cat>] [--date YYYY-MM-DD]
  update <id> [--description <desc>] [--amount <amt>] [--category <cat>] [--date YYYY-MM-DD]
  delete <id>
  list [--category <cat>] [--month <1-12>] [--year YYYY]
  summary
  monthly-summary <month> [--year YYYY]
  set-budget <month> <amount> [--year YYYY]
  show-budget <month> [--year YYYY]
  export <filename> [--month <1-12>] [--category <cat>] [--year YYYY]
  help
"""


def money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def format_expense(expense: Expense) -> str:
    """`id: date | category | description | amount`, with "-" for no category."""
    return " | ".join([
        f"{expense.id}: {expense.date.isoformat()}",
        expense.category or "-",
        expense.description,
        money(expense.amount),
    ])


def format_breakdown(breakdown: CategoryBreakdown, indent: str = "  ") -> list[str]:
    return [
        f"{indent}{category}: {money(amount)}"
        for category, amount in breakdown.by_category.items()
    ]


def format_summary(breakdown: CategoryBreakdown) -> list[str]:
    return [
        f"Total expenses: {money(breakdown.total)}",
        "By category:",
        *format_breakdown(breakdown),
    ]


def format_monthly_summary(summary: MonthlySummary) -> list[str]:
    lines = [
        f"Summary for {summary.key}:",
        f"  Total: {money(summary.breakdown.total)}",
        "  By category:",
        *format_breakdown(summary.breakdown, indent="    "),
    ]
    status = summary.budget_status
    if status.budget is not None:
        lines.append(f"  Budget: {money(status.budget)}")
        if status.exceeded:
            lines.append("  ⚠️  You have exceeded this month's budget!")
    return lines


def format_budget_warning(status: BudgetStatus) -> str:
    return (
        f"⚠️  Warning: monthly budget exceeded for {status.key} "
        f"(budget {money(status.budget)}, spent {money(status.spent)})"
    )
