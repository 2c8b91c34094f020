"""
core/jpa_generator.py
---------------------
Serialises the schema model to Spring / JPA entity classes.

Design Decisions:
    * A table without a primary key still gets an identity: a synthesized
      ``Long id`` field (``generatedId`` when a column already uses ``id``).
    * A resolved foreign-key column is emitted as a ``@ManyToOne`` field
      typed with the referenced entity, replacing the scalar field.
"""
from __future__ import annotations

from typing import Sequence

from config import CONFIG
from core.columns import relation_field_names, resolve_reference
from core.type_mapping import base_type, capitalize_first, java_type
from models.schema import Column, Table

_INDENT = "    "
_GENERATED_VALUE = "@GeneratedValue(strategy = GenerationType.IDENTITY)"


def generate_jpa(tables: Sequence[Table], package: str | None = None) -> str:
    """Generate one annotated entity class per table, in model order."""
    tables_by_id = {t.id: t for t in tables}
    parts = [
        f"package {package or CONFIG.export.java_package};\n\n",
        "import javax.persistence.*;\n",
        "import lombok.Data;\n\n",
    ]
    for table in tables:
        parts.append(_entity(table, tables_by_id))
    return "".join(parts)


def _entity(table: Table, tables_by_id: dict[str, Table]) -> str:
    lines = [
        "@Entity",
        f'@Table(name = "{table.name}")',
        "@Data",
        f"public class {capitalize_first(table.name)} {{",
        "",
    ]

    if table.primary_key is None:
        field_name = "generatedId" if table.column("id") is not None else "id"
        lines += _field(["@Id", _GENERATED_VALUE], f"private Long {field_name};")

    relation_names = relation_field_names(table, tables_by_id)
    for col in table.columns:
        lines += _column_field(col, tables_by_id, relation_names)

    if table.notes:
        lines.append(f"{_INDENT}// {table.notes}")
    lines.append("}")
    return "\n".join(lines) + "\n\n"


def _column_field(
    col: Column, tables_by_id: dict[str, Table], relation_names: dict[str, str]
) -> list[str]:
    annotations: list[str] = []
    if col.primary_key:
        annotations.append("@Id")
        if base_type(col) == "int":
            annotations.append(_GENERATED_VALUE)

    target = resolve_reference(col, tables_by_id)
    if target is not None:
        join = f'name = "{col.name}", referencedColumnName = "{col.references.column_name}"'
        if col.unique and not col.primary_key:
            join += ", unique = true"
        if not col.nullable and not col.primary_key:
            join += ", nullable = false"
        annotations += ["@ManyToOne", f"@JoinColumn({join})"]
        declaration = f"private {capitalize_first(target.name)} {relation_names[col.name]};"
        return _field(annotations, declaration)

    if not col.primary_key:
        attrs: list[str] = []
        if col.unique:
            attrs.append("unique = true")
        if not col.nullable:
            attrs.append("nullable = false")
        annotations.append(f"@Column({', '.join(attrs)})" if attrs else "@Column")

    return _field(annotations, f"private {java_type(col)} {col.name};")


def _field(annotations: list[str], declaration: str) -> list[str]:
    return [f"{_INDENT}{a}" for a in annotations] + [f"{_INDENT}{declaration}", ""]
