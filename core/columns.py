"""
core/columns.py
---------------
Pure helpers over column lists, shared by the parser, the store and the
column editor.

Each helper returns new :class:`Column` objects and never mutates its
input, so an editor can preview a change before committing it.
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from core.type_mapping import capitalize_first, lower_first
from models.schema import EMPTY_REFERENCE, Column, Reference, Table


def set_primary_key(columns: Iterable[Column], name: str | None) -> list[Column]:
    """
    Return a copy of *columns* with the primary-key flag on *name* only.

    The chosen column becomes ``NOT NULL`` and unique. Passing ``None``
    clears the flag everywhere.
    """
    result: list[Column] = []
    for col in columns:
        if name is not None and col.name == name:
            result.append(col.copy(primary_key=True, nullable=False, unique=True))
        elif col.primary_key:
            result.append(col.copy(primary_key=False))
        else:
            result.append(col.copy())
    return result


def normalise_primary_key(
    columns: Iterable[Column], preferred: str | None = None
) -> list[Column]:
    """
    Enforce a single primary key.

    *preferred* wins when it names one of the columns; otherwise the first
    column already flagged is kept.
    """
    columns = list(columns)
    names = {c.name for c in columns}
    if preferred is None or preferred not in names:
        preferred = next((c.name for c in columns if c.primary_key), None)
    return set_primary_key(columns, preferred)


def link_reference(column: Column, target: Table, column_name: str) -> Column:
    """
    Point *column* at ``target.column_name``.

    The type and length are copied from the referenced column, and an empty
    name is filled in from it. If the target has no such column the
    reference is left unset.
    """
    referenced = target.column(column_name)
    if referenced is None:
        return column.copy(foreign_key=True, references=Reference(target.id, ""))
    return column.copy(
        name=column.name or referenced.name,
        type=referenced.type,
        type_length=referenced.type_length,
        foreign_key=True,
        references=Reference(target.id, column_name),
    )


def clear_reference(column: Column) -> Column:
    return column.copy(foreign_key=False, references=EMPTY_REFERENCE)


def resolve_reference(column: Column, tables_by_id: dict[str, Table]) -> Table | None:
    """
    Return the table a foreign-key column points into, or ``None`` when the
    column is not a foreign key or its target table/column is gone.
    """
    ref = column.references
    if not column.foreign_key or not ref.is_set:
        return None
    target = tables_by_id.get(ref.table_id)
    if target is None or target.column(ref.column_name) is None:
        return None
    return target


def demote_foreign_key(column: Column, nullable: bool) -> Column:
    """
    Turn a foreign-key column whose target disappeared into a plain unique
    column. A primary-key column stays ``NOT NULL``.
    """
    return column.copy(
        unique=True,
        nullable=False if column.primary_key else nullable,
        foreign_key=False,
        references=EMPTY_REFERENCE,
    )


def relation_field_names(table: Table, tables_by_id: dict[str, Table]) -> dict[str, str]:
    """
    Name of the relation field for each resolved foreign key of *table*,
    keyed by column name.

    The field is named after the target table. When several columns point
    into the same table, the column name is appended so the fields stay
    distinct (``customersSender``, ``customersReceiver``).
    """
    targets: dict[str, Table] = {}
    for col in table.columns:
        target = resolve_reference(col, tables_by_id)
        if target is not None:
            targets[col.name] = target

    per_target = Counter(t.id for t in targets.values())
    names: dict[str, str] = {}
    for col_name, target in targets.items():
        name = lower_first(target.name)
        if per_target[target.id] > 1:
            name += capitalize_first(col_name)
        names[col_name] = name
    return names
