"""In-memory storage, used by tests and when embedding the ledger."""

from typing import Optional

from expense_tracker.models.expense import Dataset
from expense_tracker.services.storage.interface import DatasetStorageInterface


class InMemoryStorage(DatasetStorageInterface):
    """Keeps a private copy so callers cannot mutate the stored state."""

    def __init__(self, dataset: Optional[Dataset] = None):
        self._dataset = dataset.model_copy(deep=True) if dataset else Dataset()
        self.save_count = 0

    def load(self) -> Dataset:
        return self._dataset.model_copy(deep=True)

    def save(self, dataset: Dataset) -> None:
        self._dataset = dataset.model_copy(deep=True)
        self.save_count += 1
