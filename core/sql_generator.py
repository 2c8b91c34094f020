"""
core/sql_generator.py
---------------------
Serialises the schema model to canonical SQL DDL.

Output shape per table::

    CREATE TABLE orders (
      id int NOT NULL,
      customer_id int,
      PRIMARY KEY (id),
      FOREIGN KEY (customer_id) REFERENCES customers(id)
    );

The dialect is the one :mod:`core.ddl_parser` reads, so generated SQL can
be fed back into the parser.
"""
from __future__ import annotations

from typing import Sequence

from core.columns import resolve_reference
from core.type_mapping import sql_type
from models.schema import Table


def generate_sql(tables: Sequence[Table]) -> str:
    """
    Generate one ``CREATE TABLE`` statement per table, in model order.

    Foreign keys whose target cannot be resolved are omitted.
    """
    tables_by_id = {t.id: t for t in tables}
    return "".join(generate_create_table_sql(t, tables_by_id) for t in tables)


def generate_create_table_sql(table: Table, tables_by_id: dict[str, Table]) -> str:
    """
    Generate the ``CREATE TABLE`` statement for a single table.

    Column clauses come first, then the PRIMARY KEY constraint, then one
    FOREIGN KEY constraint per resolved reference.
    """
    col_lines: list[str] = []
    constraints: list[str] = []

    for col in table.columns:
        clause = f"  {col.name} {sql_type(col)}"
        if not col.nullable:
            clause += " NOT NULL"
        if col.unique and not col.primary_key:
            clause += " UNIQUE"
        col_lines.append(clause)

    if table.primary_key:
        constraints.append(f"  PRIMARY KEY ({table.primary_key})")

    for col in table.columns:
        target = resolve_reference(col, tables_by_id)
        if target is not None:
            constraints.append(
                f"  FOREIGN KEY ({col.name}) REFERENCES "
                f"{target.name}({col.references.column_name})"
            )

    body = ",\n".join(col_lines + constraints)
    return f"CREATE TABLE {table.name} (\n{body}\n);\n\n"
