"""models/__init__.py"""
from models.schema import (
    EMPTY_REFERENCE,
    Column,
    ColumnType,
    Reference,
    Table,
)

__all__ = [
    "EMPTY_REFERENCE",
    "Column",
    "ColumnType",
    "Reference",
    "Table",
]
