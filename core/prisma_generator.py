"""
core/prisma_generator.py
------------------------
Serialises the schema model to a Prisma schema.

Design Decisions:
    * Relations in Prisma are declared on both sides. Before any model is
      emitted, a pre-pass maps each referenced table id to the tables and
      columns pointing into it, so every model can list its
      back-references.
    * Field order inside a model: scalar fields, then one relation field
      per resolved foreign key, then back-reference fields.
    * A back-reference is a list (``Orders[]``) unless the referencing
      column is unique, in which case it is optional (``Orders?``).
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from config import CONFIG
from core.columns import relation_field_names, resolve_reference
from core.type_mapping import base_type, capitalize_first, lower_first, prisma_type
from models.schema import Column, Table


class _Edge(NamedTuple):
    source: Table
    column: Column


def generate_prisma(tables: Sequence[Table], provider: str | None = None) -> str:
    """Generate a Prisma schema with one model block per table."""
    tables_by_id = {t.id: t for t in tables}
    back_refs = _collect_back_references(tables, tables_by_id)

    parts = [
        "generator client {\n",
        '  provider = "prisma-client-js"\n',
        "}\n\n",
        "datasource db {\n",
        f'  provider = "{provider or CONFIG.export.prisma_provider}"\n',
        '  url      = env("DATABASE_URL")\n',
        "}\n\n",
    ]
    for table in tables:
        parts.append(_model(table, tables_by_id, back_refs.get(table.id, [])))
    return "".join(parts)


def _collect_back_references(
    tables: Sequence[Table], tables_by_id: dict[str, Table]
) -> dict[str, list[_Edge]]:
    """Map target table id → first edge from each *other* referencing table."""
    edges: dict[str, list[_Edge]] = {}
    for table in tables:
        for col in table.columns:
            target = resolve_reference(col, tables_by_id)
            if target is None or target.id == table.id:
                continue
            bucket = edges.setdefault(target.id, [])
            if all(e.source.id != table.id for e in bucket):
                bucket.append(_Edge(table, col))
    return edges


def _model(table: Table, tables_by_id: dict[str, Table], back_refs: list[_Edge]) -> str:
    lines: list[str] = []
    if table.notes:
        lines.append(f"// {table.notes}")
    lines.append(f"model {capitalize_first(table.name)} {{")

    for col in table.columns:
        lines.append(f"  {_scalar_field(col)}")

    relation_names = relation_field_names(table, tables_by_id)
    for col in table.columns:
        target = resolve_reference(col, tables_by_id)
        if target is None:
            continue
        optional = "?" if col.nullable else ""
        lines.append(
            f"  {relation_names[col.name]} {capitalize_first(target.name)}{optional} "
            f"@relation(fields: [{col.name}], references: [{col.references.column_name}])"
        )

    for edge in back_refs:
        suffix = "?" if edge.column.unique else "[]"
        lines.append(
            f"  {lower_first(edge.source.name)} {capitalize_first(edge.source.name)}{suffix}"
        )

    lines.append("}")
    return "\n".join(lines) + "\n\n"


def _scalar_field(col: Column) -> str:
    field = f"{col.name} {prisma_type(col)}"
    if col.nullable:
        field += "?"

    markers: list[str] = []
    if col.primary_key:
        markers.append("@id")
    if col.unique and not col.primary_key:
        markers.append("@unique")
    if col.primary_key and base_type(col) == "int":
        markers.append("@default(autoincrement())")

    if markers:
        field += " " + " ".join(markers)
    return field
