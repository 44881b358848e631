"""Services package."""

from src.services.storage import (
    ActivityStorageInterface,
    CorruptStoreError,
    DuplicateError,
    InMemoryProblemStorage,
    JsonFileProblemStorage,
    JsonLinesActivityStorage,
    NotFoundError,
    ProblemStorageInterface,
    StorageError,
)

__all__ = [
    "ActivityStorageInterface",
    "CorruptStoreError",
    "DuplicateError",
    "InMemoryProblemStorage",
    "JsonFileProblemStorage",
    "JsonLinesActivityStorage",
    "NotFoundError",
    "ProblemStorageInterface",
    "StorageError",
]
