"""Export package."""

from expense_tracker.services.export.csv_export import (
    CSV_HEADER,
    export_expenses,
    render_csv,
)

__all__ = ["CSV_HEADER", "export_expenses", "render_csv"]
