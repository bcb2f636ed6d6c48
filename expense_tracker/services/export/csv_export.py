"""
CSV Export

Renders expenses as comma-separated values:

    id,date,category,description,amount
    1,"2024-03-02","Food","Lunch",12.50

id and amount are bare numbers; every text field is double-quoted with
embedded quotes doubled. A missing category is written as an empty
quoted field. Rows are joined by newlines with no trailing newline.
"""

import csv
import io
from pathlib import Path
from typing import Iterable, Union

from expense_tracker.models.expense import CENTS, Expense


CSV_HEADER = ["id", "date", "category", "description", "amount"]


def render_csv(expenses: Iterable[Expense]) -> str:
    """Render the header plus one row per expense."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(CSV_HEADER)

    # QUOTE_NONNUMERIC quotes every str and leaves int/Decimal bare.
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for expense in expenses:
        writer.writerow([
            expense.id,
            expense.date.isoformat(),
            expense.category or "",
            expense.description,
            expense.amount.quantize(CENTS),
        ])

    return buffer.getvalue().removesuffix("\n")


def export_expenses(
    path: Union[str, Path],
    expenses: Iterable[Expense],
    encoding: str = "utf-8",
) -> int:
    """
    Write expenses to a CSV file, overwriting it.

    Returns:
        Number of data rows written
    """
    rows = list(expenses)
    Path(path).write_text(render_csv(rows), encoding=encoding, newline="")
    return len(rows)
