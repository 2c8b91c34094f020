"""
core/drizzle_generator.py
-------------------------
Serialises the schema model to a Drizzle ORM (pg-core) schema module.

Each table becomes an exported ``pgTable`` object; each column a builder
call chain::

    export const orders = pgTable('orders', {
      id: serial('id').primaryKey().notNull(),
      customer_id: integer('customer_id').references(() => customers.id),
    });
"""
from __future__ import annotations

from typing import Sequence

from config import CONFIG
from core.columns import resolve_reference
from core.type_mapping import drizzle_builder
from models.schema import Column, Table

_MODULE = "drizzle-orm/pg-core"


def generate_drizzle(tables: Sequence[Table], default_varchar_length: int | None = None) -> str:
    """Generate a Drizzle schema module for *tables*, in model order."""
    length = default_varchar_length or CONFIG.export.default_varchar_length
    tables_by_id = {t.id: t for t in tables}

    builders: set[str] = set()
    blocks: list[str] = []
    for table in tables:
        lines = [f"export const {table.name} = pgTable('{table.name}', {{"]
        for col in table.columns:
            builder, call = drizzle_builder(col, length)
            builders.add(builder)
            lines.append(f"  {col.name}: {call}{_chain(col, tables_by_id)},")
        lines.append("});")
        blocks.append("\n".join(lines) + "\n\n")

    imports = ", ".join(sorted(builders | {"pgTable"}))
    return f"import {{ {imports} }} from '{_MODULE}';\n\n" + "".join(blocks)


def _chain(col: Column, tables_by_id: dict[str, Table]) -> str:
    calls: list[str] = []
    if col.primary_key:
        calls.append(".primaryKey()")
    if not col.nullable:
        calls.append(".notNull()")
    if col.unique and not col.primary_key:
        calls.append(".unique()")
    target = resolve_reference(col, tables_by_id)
    if target is not None:
        calls.append(f".references(() => {target.name}.{col.references.column_name})")
    return "".join(calls)
