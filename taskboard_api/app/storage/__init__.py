"""
Persistence layer.

``Storage`` is the abstract capability the services depend on;
``build_storage`` picks the backend named by the settings.  Only the
SQLite backend is shipped.
"""

from ..core.config import Settings
from ..core.db import resolve_database_path
from .base import (
    DuplicateRecordError,
    IntegrityViolationError,
    RecordNotFoundError,
    Storage,
    StorageError,
)
from .sqlite import SQLiteStorage


__all__ = [
    "DuplicateRecordError",
    "IntegrityViolationError",
    "RecordNotFoundError",
    "SQLiteStorage",
    "Storage",
    "StorageError",
    "build_storage",
]


def build_storage(config: Settings) -> Storage:
    """Construct the storage backend selected by ``config.storage_backend``."""
    backend = config.storage_backend.lower()
    if backend == "sqlite":
        return SQLiteStorage(resolve_database_path(config.database_url))
    raise ValueError(f"Unsupported storage backend: {config.storage_backend!r}")
