"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep file I/O at the edges, away from the aggregation logic
2. Use in-memory storage for testing
3. Swap the JSON file for something sturdier later

The interface is intentionally tiny. The dataset is small enough to be
loaded, mutated and written back whole on every command, so there are no
per-record operations here.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Dataset


class DatasetStorageInterface(ABC):
    """
    Abstract interface for dataset persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Dataset:
        """
        Read the persisted dataset.

        Returns:
            The stored dataset, or an empty one if nothing is stored yet

        Raises:
            StorageError: If stored data exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    def save(self, dataset: Dataset) -> None:
        """
        Overwrite the persisted dataset.

        Args:
            dataset: The complete dataset to store

        Raises:
            StorageError: If the write cannot complete
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """No expense with the requested id."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"No expense with id {expense_id}")
