"""Services package."""

from expense_tracker.services.export import (
    CSV_HEADER,
    export_expenses,
    render_csv,
)
from expense_tracker.services.storage import (
    DatasetStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Export
    "CSV_HEADER",
    "export_expenses",
    "render_csv",
    # Storage services
    "DatasetStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "NotFoundError",
    "StorageError",
]
