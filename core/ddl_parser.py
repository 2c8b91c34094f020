"""
core/ddl_parser.py
------------------
Recovers a schema model from hand-written ``CREATE TABLE`` DDL.

Supported input::

    -- comments are ignored (line and /* block */ comments)
    CREATE TABLE customers (
      id    INT PRIMARY KEY,
      name  VARCHAR(100) NOT NULL,
      email VARCHAR(255) UNIQUE
    );

    CREATE TABLE orders (
      id          INT NOT NULL,
      customer_id INT,
      PRIMARY KEY (id),
      FOREIGN KEY (customer_id) REFERENCES customers(id)
    );

Design Decisions:
    * The parser is a pure function (no side effects) and never raises:
      anything it does not understand is skipped and reported in
      :class:`ParseReport.skipped`.
    * Statement bodies are delimited by a balanced-parenthesis scan and
      split on depth-0 commas, so ``DECIMAL(10,2)`` stays in one piece.
    * Each body piece is matched against the table-level PRIMARY KEY form,
      then the FOREIGN KEY form, then a column definition; first match wins.
    * Foreign keys are recorded by target table *name* while a statement is
      parsed and resolved to table ids once the whole batch is known.
      Targets outside the batch become the empty reference.
    * Duplicate table names yield independent tables; no merging.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NamedTuple

from core.columns import normalise_primary_key
from core.validation import is_valid_column_name
from logger import get_logger
from models.schema import EMPTY_REFERENCE, Column, Reference, Table, new_table_id

log = get_logger(__name__)

_IDENT = r"[`\"]?(\w+)[`\"]?"

_LINE_COMMENT_RE = re.compile(r"--[^\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CREATE_RE = re.compile(
    rf"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?(?:{_IDENT}\.)?{_IDENT}\s*\(",
    re.IGNORECASE,
)
_PK_RE = re.compile(
    rf"^(?:CONSTRAINT\s+\S+\s+)?PRIMARY\s+KEY\s*\(\s*{_IDENT}\s*\)$",
    re.IGNORECASE,
)
_FK_RE = re.compile(
    rf"^(?:CONSTRAINT\s+\S+\s+)?FOREIGN\s+KEY\s*\(\s*{_IDENT}\s*\)\s*"
    rf"REFERENCES\s+{_IDENT}\s*\(\s*{_IDENT}\s*\)",
    re.IGNORECASE,
)
_COLUMN_RE = re.compile(
    r"^[`\"]?(?P<name>[^\s`\",()]+)[`\"]?\s+(?P<type>[A-Za-z]+)"
    r"(?:\s*\(\s*(?P<length>[^)]*?)\s*\))?(?P<rest>.*)$",
    re.IGNORECASE | re.DOTALL,
)
_INLINE_REF_RE = re.compile(
    rf"\bREFERENCES\s+{_IDENT}\s*\(\s*{_IDENT}\s*\)", re.IGNORECASE
)
_NOT_NULL_RE = re.compile(r"\bNOT\s+NULL\b", re.IGNORECASE)
_UNIQUE_RE = re.compile(r"\bUNIQUE\b", re.IGNORECASE)
_INLINE_PK_RE = re.compile(r"\bPRIMARY\s+KEY\b", re.IGNORECASE)

# A piece led by one of these words is a table-level clause only when the
# word is used as one; ``key varchar(50)`` is still a column.
_CLAUSE_RE = re.compile(
    r"^(?:"
    r"CONSTRAINT\s+\S+\s+(?:(?:PRIMARY|FOREIGN)\s+KEY\b|UNIQUE\s*(?:\(|(?:KEY|INDEX)\b)|CHECK\s*\()"
    r"|(?:PRIMARY|FOREIGN)\s+KEY\b"
    r"|UNIQUE\s*(?:\(|(?:KEY|INDEX)\b)"
    r"|CHECK\s*\("
    r"|(?:INDEX|KEY)\s*\("
    r"|(?:INDEX|KEY)\s+[`\"]?\w+[`\"]?\s*\(\s*[`\"A-Za-z_]"
    r")",
    re.IGNORECASE,
)


class SkippedFragment(NamedTuple):
    """A piece of input the parser did not turn into model data."""
    kind: str       # "statement", "line" or "column"
    text: str
    reason: str


@dataclass
class ParseReport:
    """Parsed tables plus everything that was dropped along the way."""
    tables: list[Table] = field(default_factory=list)
    skipped: list[SkippedFragment] = field(default_factory=list)


class _PendingTable(NamedTuple):
    table: Table
    foreign_keys: dict[str, tuple[str, str]]   # column → (table name, column)


def parse_ddl(text: str) -> list[Table]:
    """
    Parse DDL text into an ordered list of tables.

    Never raises; returns an empty list when nothing is recognised.

    Example::

        tables = parse_ddl("CREATE TABLE t (id INT PRIMARY KEY);")
        # tables[0].primary_key == "id"
    """
    return parse_ddl_report(text).tables


def parse_ddl_report(text: str) -> ParseReport:
    """Like :func:`parse_ddl`, but also report every skipped fragment."""
    report = ParseReport()
    if not text:
        return report

    source = _BLOCK_COMMENT_RE.sub(" ", text)
    source = _LINE_COMMENT_RE.sub("", source)

    pending: list[_PendingTable] = []
    for name, body in _extract_statements(source, report.skipped):
        pending.append(_parse_table(name, body, report.skipped))

    _resolve_foreign_keys(pending)
    report.tables = [p.table for p in pending]

    for frag in report.skipped:
        log.debug("Skipped %s (%s): %r", frag.kind, frag.reason, frag.text)
    log.debug(
        "Parsed DDL: %d table(s), %d skipped fragment(s).",
        len(report.tables), len(report.skipped),
    )
    return report


# ---------------------------------------------------------------------------
# Statement level
# ---------------------------------------------------------------------------

def _extract_statements(
    source: str, skipped: list[SkippedFragment]
) -> list[tuple[str, str]]:
    """Return ``(table_name, body)`` for each well-formed CREATE TABLE."""
    statements: list[tuple[str, str]] = []
    pos = 0
    while True:
        match = _CREATE_RE.search(source, pos)
        if match is None:
            _report_gap(source[pos:], skipped)
            break

        _report_gap(source[pos:match.start()], skipped)
        end = _matching_paren(source, match.end())
        if end is None:
            resume = _resume_point(source, match.end())
            skipped.append(SkippedFragment(
                "statement",
                source[match.start():resume].strip().rstrip(";").strip(),
                "unbalanced parentheses",
            ))
            pos = resume
            continue

        statements.append((match.group(2), source[match.end():end]))
        pos = end + 1
    return statements


def _resume_point(source: str, start: int) -> int:
    """Where scanning continues after an unterminated statement body."""
    candidates = [len(source)]
    semicolon = source.find(";", start)
    if semicolon != -1:
        candidates.append(semicolon + 1)
    following = _CREATE_RE.search(source, start)
    if following is not None:
        candidates.append(following.start())
    return min(candidates)


def _matching_paren(source: str, start: int) -> int | None:
    """Index of the ``)`` closing the ``(`` just before *start*."""
    depth = 1
    for idx in range(start, len(source)):
        ch = source[idx]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return idx
    return None


def _report_gap(gap: str, skipped: list[SkippedFragment]) -> None:
    for stmt in gap.split(";"):
        stmt = stmt.strip()
        if stmt:
            skipped.append(SkippedFragment("statement", stmt, "not a CREATE TABLE statement"))


def _split_top_level(body: str) -> list[str]:
    """Split on commas that are not nested inside parentheses."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


# ---------------------------------------------------------------------------
# Line level
# ---------------------------------------------------------------------------

def _parse_table(name: str, body: str, skipped: list[SkippedFragment]) -> _PendingTable:
    table = Table(id=new_table_id(), name=name)
    primary_key: str | None = None
    foreign_keys: dict[str, tuple[str, str]] = {}

    for line in _split_top_level(body):
        pk_match = _PK_RE.match(line)
        if pk_match:
            primary_key = pk_match.group(1)
            continue

        fk_match = _FK_RE.match(line)
        if fk_match:
            col_name, ref_table, ref_col = fk_match.groups()
            foreign_keys[col_name] = (ref_table, ref_col)
            continue

        column = _parse_column(line, table, skipped)
        if column is None:
            continue
        table.columns.append(column)
        ref_match = _INLINE_REF_RE.search(line)
        if ref_match:
            foreign_keys.setdefault(column.name, ref_match.groups())

    for col_name in foreign_keys:
        if table.column(col_name) is None:
            skipped.append(SkippedFragment(
                "line", f"FOREIGN KEY ({col_name})", f"no column '{col_name}' in '{name}'"
            ))
    # A table-level PRIMARY KEY wins over inline ones.
    table.columns = normalise_primary_key(table.columns, primary_key)
    return _PendingTable(table, foreign_keys)


def _parse_column(
    line: str, table: Table, skipped: list[SkippedFragment]
) -> Column | None:
    if _CLAUSE_RE.match(line):
        skipped.append(SkippedFragment("line", line, "unsupported table constraint"))
        return None
    match = _COLUMN_RE.match(line)
    if match is None:
        skipped.append(SkippedFragment("line", line, "unrecognised syntax"))
        return None

    name = match.group("name")
    if not is_valid_column_name(name):
        skipped.append(SkippedFragment("column", line, f"invalid column name '{name}'"))
        return None
    if table.column(name) is not None:
        skipped.append(SkippedFragment("column", line, f"duplicate column '{name}'"))
        return None

    length = match.group("length")
    rest = match.group("rest") or ""
    return Column(
        name=name,
        type=match.group("type").lower(),
        type_length=int(length) if length and length.isdecimal() else None,
        nullable=_NOT_NULL_RE.search(rest) is None,
        unique=_UNIQUE_RE.search(rest) is not None,
        primary_key=_INLINE_PK_RE.search(rest) is not None,
    )


# ---------------------------------------------------------------------------
# Batch level
# ---------------------------------------------------------------------------

def _resolve_foreign_keys(pending: list[_PendingTable]) -> None:
    """Turn recorded target table names into ids; unknown targets dangle."""
    by_name: dict[str, Table] = {}
    for p in pending:
        by_name.setdefault(p.table.name, p.table)

    for p in pending:
        if not p.foreign_keys:
            continue
        resolved: list[Column] = []
        for col in p.table.columns:
            wanted = p.foreign_keys.get(col.name)
            if wanted is not None:
                ref_table, ref_col = wanted
                target = by_name.get(ref_table)
                if target is not None and target.column(ref_col) is not None:
                    reference = Reference(target.id, ref_col)
                else:
                    log.debug(
                        "Foreign key %s.%s → %s(%s) does not resolve.",
                        p.table.name, col.name, ref_table, ref_col,
                    )
                    reference = EMPTY_REFERENCE
                col = col.copy(foreign_key=True, references=reference)
            resolved.append(col)
        p.table.columns = resolved
