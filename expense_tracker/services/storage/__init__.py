"""
Storage Services Package

Provides the abstract dataset interface and its implementations.
The JSON file is the real backend; the in-memory one backs the tests.
"""

from expense_tracker.services.storage.interface import (
    DatasetStorageInterface,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.json_file import JsonFileStorage
from expense_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "DatasetStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
