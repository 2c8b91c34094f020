"""
core/validation.py
------------------
The gate a table draft must pass before the store commits it.

A column is valid when its name is non-empty, contains no digits,
whitespace or semicolons, and it has a type. A table is persistable when it
has a name and at least one column, every column is valid and no column
name repeats.
"""
from __future__ import annotations

import re
from typing import Iterable

from models.schema import Column

_COLUMN_NAME_RE = re.compile(r"^[^;\d\s]+$")


def is_valid_column_name(name: str) -> bool:
    return bool(name) and _COLUMN_NAME_RE.match(name) is not None


def is_column_valid(column: Column) -> bool:
    return is_valid_column_name(column.name) and bool(column.type)


def validation_errors(name: str, columns: Iterable[Column]) -> list[str]:
    """
    Return every reason a table draft cannot be committed.

    An empty list means the draft is persistable.
    """
    errors: list[str] = []
    columns = list(columns)

    if not name or not name.strip():
        errors.append("Table name is required.")
    if not columns:
        errors.append("A table needs at least one column.")

    seen: set[str] = set()
    for pos, col in enumerate(columns, start=1):
        if not col.name:
            errors.append(f"Column {pos}: name is required.")
        elif not is_valid_column_name(col.name):
            errors.append(
                f"Column {pos}: name {col.name!r} may not contain digits, "
                "whitespace or semicolons."
            )
        elif col.name in seen:
            errors.append(f"Column {pos}: duplicate column name {col.name!r}.")
        if not col.type:
            errors.append(f"Column {pos}: type is required.")
        seen.add(col.name)

    return errors


def is_table_valid(name: str, columns: Iterable[Column]) -> bool:
    return not validation_errors(name, columns)
