"""
core/exporter.py
----------------
Picks a generator by format name and adds the "generated by" header.

The generators themselves are pure and deterministic; only
:func:`export_schema` stamps a timestamp, on a comment line of its own.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Callable, Sequence

from config import CONFIG
from core.drizzle_generator import generate_drizzle
from core.jpa_generator import generate_jpa
from core.prisma_generator import generate_prisma
from core.sql_generator import generate_sql
from logger import get_logger
from models.schema import Table

log = get_logger(__name__)


class ExportFormat(str, Enum):
    """Supported export targets."""
    SQL = "SQL"
    DRIZZLE = "Drizzle"
    SPRING = "Spring"
    PRISMA = "Prisma"

    @classmethod
    def parse(cls, value: str) -> "ExportFormat":
        """
        Look up a format by value or name, ignoring case.

        Raises:
            ValueError: If *value* names no supported format.
        """
        wanted = (value or "").strip().casefold()
        for fmt in cls:
            if wanted in (fmt.value.casefold(), fmt.name.casefold()):
                return fmt
        raise ValueError(
            f"Unknown export format {value!r}; expected one of "
            f"{', '.join(f.value for f in cls)}."
        )

    @property
    def comment_prefix(self) -> str:
        return "--" if self is ExportFormat.SQL else "//"


_GENERATORS: dict[ExportFormat, Callable[[Sequence[Table]], str]] = {
    ExportFormat.SQL: generate_sql,
    ExportFormat.DRIZZLE: generate_drizzle,
    ExportFormat.SPRING: generate_jpa,
    ExportFormat.PRISMA: generate_prisma,
}


def generate(tables: Sequence[Table], fmt: ExportFormat) -> str:
    """Run the generator for *fmt* without any header."""
    return _GENERATORS[fmt](tables)


def export_header(fmt: ExportFormat, generated_at: datetime.datetime | None = None) -> str:
    stamp = (generated_at or datetime.datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    prefix = fmt.comment_prefix
    return (
        f"{prefix} {fmt.value} Schema generated by {CONFIG.export.header_tool_name}\n"
        f"{prefix} Generated on {stamp}\n\n"
    )


def export_schema(
    tables: Sequence[Table],
    fmt: ExportFormat,
    generated_at: datetime.datetime | None = None,
) -> str:
    """
    Generate code for *tables* in *fmt*, preceded by a two-line header.

    Example::

        code = export_schema(store.all(), ExportFormat.PRISMA)
    """
    code = export_header(fmt, generated_at) + generate(tables, fmt)
    log.info("Exported %d table(s) as %s.", len(tables), fmt.value)
    return code
