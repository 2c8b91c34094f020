"""
Process-wide schema store for the API service.
"""
from typing import Optional

from core.schema_store import SchemaStore

_schema_store: Optional[SchemaStore] = None


def get_store() -> SchemaStore:
    """
    Get the singleton schema store.

    Returns:
        SchemaStore instance shared by all requests
    """
    global _schema_store
    if _schema_store is None:
        _schema_store = SchemaStore()
    return _schema_store


def reset_store() -> None:
    """Drop every table (used on shutdown and by tests)."""
    global _schema_store
    _schema_store = None
