"""core/__init__.py"""
from core.columns import link_reference, normalise_primary_key, set_primary_key
from core.ddl_parser import ParseReport, SkippedFragment, parse_ddl, parse_ddl_report
from core.drizzle_generator import generate_drizzle
from core.exporter import ExportFormat, export_schema, generate
from core.jpa_generator import generate_jpa
from core.prisma_generator import generate_prisma
from core.schema_store import SchemaStore
from core.sql_generator import generate_sql
from core.validation import is_column_valid, is_table_valid, validation_errors

__all__ = [
    "link_reference",
    "normalise_primary_key",
    "set_primary_key",
    "ParseReport",
    "SkippedFragment",
    "parse_ddl",
    "parse_ddl_report",
    "generate_drizzle",
    "ExportFormat",
    "export_schema",
    "generate",
    "generate_jpa",
    "generate_prisma",
    "SchemaStore",
    "generate_sql",
    "is_column_valid",
    "is_table_valid",
    "validation_errors",
]
