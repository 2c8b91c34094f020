"""
models/schema.py
----------------
Typed data models for a designed relational schema.

Design Decisions:
    * ``@dataclass`` instead of plain dicts gives one source of truth for
      column attributes and IDE auto-complete throughout the codebase.
    * ``Table.primary_key`` is computed from the column flags rather than
      stored, so the two can never disagree.
    * Cross-table links use an explicit :class:`Reference` value whose
      empty form ``("", "")`` means "unset or dangling".
    * ``to_dict`` / ``from_dict`` use the camelCase wire shape the editor
      front-end exchanges, with tolerant defaults for missing keys.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class ColumnType(str, Enum):
    """Canonical, target-independent column type vocabulary."""
    INT = "int"
    CHAR = "char"
    VARCHAR = "varchar"
    BINARY = "binary"
    VARBINARY = "varbinary"
    TEXT = "text"
    BLOB = "blob"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Reference:
    """
    Weak pointer from a foreign-key column to ``table_id.column_name``.

    Either both parts are set, or the reference is treated as unset.
    """
    table_id: str = ""
    column_name: str = ""

    @property
    def is_set(self) -> bool:
        return bool(self.table_id and self.column_name)

    def to_dict(self) -> dict[str, str]:
        return {"tableId": self.table_id, "columnName": self.column_name}

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> "Reference":
        if not data:
            return EMPTY_REFERENCE
        return Reference(
            table_id=data.get("tableId") or "",
            column_name=data.get("columnName") or "",
        )


EMPTY_REFERENCE = Reference()


@dataclass
class Column:
    """
    One column of a table.

    Attributes:
        name:         Unique within its table.
        type:         Canonical type keyword (see :class:`ColumnType`);
                      unrecognised keywords are kept verbatim.
        type_length:  Optional numeric qualifier, e.g. ``100`` for
                      ``varchar(100)``.
        nullable:     ``False`` emits ``NOT NULL``.
        unique:       Column carries a unique constraint.
        primary_key:  Column is the table's primary key.
        foreign_key:  Column points at another table via ``references``.
        references:   Target of the foreign key, or the empty reference.
    """
    name: str
    type: str
    type_length: int | None = None
    nullable: bool = True
    unique: bool = False
    primary_key: bool = False
    foreign_key: bool = False
    references: Reference = EMPTY_REFERENCE

    def copy(self, **changes: Any) -> "Column":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "typeLength": self.type_length,
            "nullable": self.nullable,
            "unique": self.unique,
            "primaryKey": self.primary_key,
            "foreignKey": self.foreign_key,
            "references": self.references.to_dict(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Column":
        return Column(
            name=data.get("name", ""),
            type=data.get("type", ""),
            type_length=_coerce_length(data.get("typeLength")),
            nullable=bool(data.get("nullable", True)),
            unique=bool(data.get("unique", False)),
            primary_key=bool(data.get("primaryKey", False)),
            foreign_key=bool(data.get("foreignKey", False)),
            references=Reference.from_dict(data.get("references")),
        )


@dataclass(eq=False)
class Table:
    """
    A table in the designed schema.

    Identity is the ``id`` assigned at creation; two tables may share a
    ``name``.

    Attributes:
        id:       Opaque identifier, never reused.
        name:     Table name as used in generated code.
        notes:    Free-text notes (emitted as comments by some generators).
        columns:  Ordered columns; order is preserved in generated code.
    """
    id: str
    name: str
    notes: str = ""
    columns: list[Column] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def primary_key(self) -> str | None:
        """Name of the column flagged as primary key, if any."""
        for col in self.columns:
            if col.primary_key:
                return col.name
        return None

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "notes": self.notes,
            "columns": [c.to_dict() for c in self.columns],
            "primaryKey": self.primary_key,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Table":
        return Table(
            id=data.get("id", ""),
            name=data.get("name", ""),
            notes=data.get("notes") or "",
            columns=[Column.from_dict(c) for c in data.get("columns", [])],
        )


def new_table_id() -> str:
    """Fresh opaque table id; ids are never reused."""
    return f"table-{uuid.uuid4().hex}"


def _coerce_length(raw: Any) -> int | None:
    """Accept ``100``, ``"100"`` or ``""``/``None`` for a type length."""
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
