"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements a local JSON file as the backend, but designed to be swappable.
"""

from src.services.storage.interface import (
    ActivityStorageInterface,
    CorruptStoreError,
    DuplicateError,
    NotFoundError,
    ProblemStorageInterface,
    StorageError,
)
from src.services.storage.json_file import (
    InMemoryProblemStorage,
    JsonFileProblemStorage,
    JsonLinesActivityStorage,
)

__all__ = [
    # Interfaces
    "ActivityStorageInterface",
    "ProblemStorageInterface",
    # Exceptions
    "CorruptStoreError",
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryProblemStorage",
    "JsonFileProblemStorage",
    "JsonLinesActivityStorage",
]
