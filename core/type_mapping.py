"""
core/type_mapping.py
--------------------
Canonical column types and how each export target spells them.

Design Decision:
    Each target's vocabulary is data (a dict per target plus an explicit
    fallback) rather than a nested if/else tree, so adding a canonical
    type means adding one entry per table below.
"""
from __future__ import annotations

from models.schema import Column, ColumnType

CANONICAL_TYPES = frozenset(t.value for t in ColumnType)

_STRING_TYPES = frozenset({"char", "varchar", "text"})
_BINARY_TYPES = frozenset({"binary", "varbinary", "blob"})

# ---------------------------------------------------------------------------
# Java (Spring / JPA)
# ---------------------------------------------------------------------------
_JAVA_TYPES: dict[str, str] = {
    "int": "Integer",
    "boolean": "Boolean",
    **{t: "String" for t in _STRING_TYPES},
    **{t: "byte[]" for t in _BINARY_TYPES},
}
_JAVA_FALLBACK = "String"

# ---------------------------------------------------------------------------
# Prisma
# ---------------------------------------------------------------------------
_PRISMA_TYPES: dict[str, str] = {
    "int": "Int",
    "boolean": "Boolean",
    **{t: "String" for t in _STRING_TYPES},
    **{t: "Bytes" for t in _BINARY_TYPES},
}
_PRISMA_FALLBACK = "String"

# ---------------------------------------------------------------------------
# Drizzle (pg-core builders)
# ---------------------------------------------------------------------------
_DRIZZLE_BUILDERS: dict[str, str] = {
    "int": "integer",
    "varchar": "varchar",
    "char": "char",
    "boolean": "boolean",
    "text": "text",
}
_DRIZZLE_FALLBACK = "varchar"
_DRIZZLE_SIZED = frozenset({"varchar", "char"})
_DRIZZLE_DEFAULT_LENGTH = {"char": 1}


def base_type(column: Column) -> str:
    """Lower-cased canonical type keyword of *column*."""
    return (column.type or "").strip().lower()


def is_canonical(type_name: str) -> bool:
    return type_name.lower() in CANONICAL_TYPES


def sql_type(column: Column) -> str:
    """``varchar(100)`` style type clause for canonical SQL."""
    if column.type_length:
        return f"{base_type(column)}({column.type_length})"
    return base_type(column)


def java_type(column: Column) -> str:
    return _JAVA_TYPES.get(base_type(column), _JAVA_FALLBACK)


def prisma_type(column: Column) -> str:
    return _PRISMA_TYPES.get(base_type(column), _PRISMA_FALLBACK)


def drizzle_builder(column: Column, default_varchar_length: int = 255) -> tuple[str, str]:
    """
    Return ``(builder_name, call)`` for a Drizzle column.

    Examples::

        int primary key  →  ("serial", "serial('id')")
        varchar(100)     →  ("varchar", "varchar('name', { length: 100 })")
        blob             →  ("varchar", "varchar('data', { length: 255 })")
    """
    kind = base_type(column)
    builder = _DRIZZLE_BUILDERS.get(kind)
    if builder is None:
        builder = _DRIZZLE_FALLBACK
        length = default_varchar_length
    elif builder in _DRIZZLE_SIZED:
        length = column.type_length or _DRIZZLE_DEFAULT_LENGTH.get(
            builder, default_varchar_length
        )
    else:
        length = None

    if builder == "integer" and column.primary_key:
        builder = "serial"

    if length is not None:
        return builder, f"{builder}('{column.name}', {{ length: {length} }})"
    return builder, f"{builder}('{column.name}')"


# ---------------------------------------------------------------------------
# Identifier transforms
# ---------------------------------------------------------------------------

def capitalize_first(name: str) -> str:
    """Type / model identifier form: ``orders`` → ``Orders``."""
    return name[:1].upper() + name[1:]


def lower_first(name: str) -> str:
    """Relation field form: ``Customers`` → ``customers``."""
    return name[:1].lower() + name[1:]
