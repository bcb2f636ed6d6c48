"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON document in the user's home directory is the
whole datastore because:
1. A few thousand records fit comfortably in memory
2. The file stays human-readable and easy to back up
3. No database setup required

TRADEOFFS:
- Every mutation rewrites the whole file
- No locking: two concurrent invocations race and the last writer wins
- No schema version field

Writes go to a temporary file next to the target and are moved into place
with os.replace, so readers never observe a half-written document.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from expense_tracker.config import get_settings
from expense_tracker.models.expense import Dataset
from expense_tracker.services.storage.interface import (
    DatasetStorageInterface,
    StorageError,
)


class JsonFileStorage(DatasetStorageInterface):
    """
    JSON file implementation of dataset storage.

    The file holds {"expenses": [...], "budgets": {...}} with 2-space
    indentation.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path is not None else get_settings().data_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Dataset:
        if not self._path.exists():
            return Dataset()

        try:
            raw = self._path.read_text(encoding="utf-8")
            return Dataset.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise StorageError(f"Failed to load data: {e}") from e

    def save(self, dataset: Dataset) -> None:
        payload = dataset.model_dump_json(indent=2)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                fp.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to save data: {e}") from e
