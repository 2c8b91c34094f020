"""
core/schema_store.py
--------------------
In-memory schema state with integrity-preserving mutations.

Design Decisions:
    * One store owns the ordered table list; every mutation runs to
      completion before the next, so no locking is needed.
    * Invalid drafts are refused by returning ``None`` (nothing committed)
      rather than raising, so an editor can simply re-check and retry.
    * Removing a column that other tables point at demotes the referencing
      columns to plain unique columns ("cascade demotion") instead of
      deleting them. Deleting a whole table applies the same demotion to
      every column that pointed into it.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from core.columns import demote_foreign_key, normalise_primary_key
from core.ddl_parser import ParseReport, parse_ddl_report
from core.validation import validation_errors
from logger import get_logger
from models.schema import EMPTY_REFERENCE, Column, Reference, Table, new_table_id

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class SchemaStore:
    """
    Ordered registry of tables.

    Attributes:
        _tables: Tables in creation/import order; generated code follows
                 this order.
    """

    def __init__(self, tables: Iterable[Table] | None = None) -> None:
        self._tables: list[Table] = list(tables or [])

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def get(self, table_id: str) -> Table | None:
        for table in self._tables:
            if table.id == table_id:
                return table
        return None

    def all(self) -> list[Table]:
        return list(self._tables)

    def find_by_name(self, name: str) -> list[Table]:
        return [t for t in self._tables if t.name == name]

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[Table]:
        return iter(list(self._tables))

    def clear(self) -> None:
        self._tables = []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_table(
        self,
        name: str,
        columns: Iterable[Column],
        notes: str = "",
        primary_key: str | None = None,
    ) -> Table | None:
        """
        Commit a new table with a fresh id.

        Returns:
            The committed :class:`Table`, or ``None`` if the draft failed
            validation.
        """
        columns = list(columns)
        errors = validation_errors(name, columns)
        if errors:
            log.warning("Table '%s' not created: %s", name, "; ".join(errors))
            return None

        table = Table(id=new_table_id(), name=name, notes=notes or "")
        table.columns = self._sanitise_references(
            normalise_primary_key(columns, primary_key), table
        )
        self._warn_on_name_collision(table)
        self._tables.append(table)
        log.debug("Created table '%s' (%s) with %d column(s).",
                  table.name, table.id, len(table.columns))
        return table

    def update_table(
        self,
        table_id: str,
        name: str,
        notes: str,
        columns: Iterable[Column],
        primary_key: str | None = None,
    ) -> Table | None:
        """
        Replace a table's name, notes and columns.

        Columns that existed before and are absent now are "removed"; every
        foreign key in another table that pointed at a removed column is
        demoted to a plain unique column taking the removed column's
        nullability. Unrelated tables are left untouched.

        Returns:
            The updated table, or ``None`` if *table_id* is unknown or the
            new data failed validation.
        """
        table = self.get(table_id)
        if table is None:
            log.warning("Cannot update unknown table id '%s'.", table_id)
            return None

        columns = list(columns)
        errors = validation_errors(name, columns)
        if errors:
            log.warning("Table '%s' not updated: %s", name, "; ".join(errors))
            return None

        kept_names = {c.name for c in columns}
        removed = [c for c in table.columns if c.name not in kept_names]
        if removed:
            demoted = self._demote_references(table, removed)
            if demoted:
                log.info(
                    "Removing %d column(s) from '%s' demoted %d foreign key(s).",
                    len(removed), table.name, demoted,
                )

        new_columns = normalise_primary_key(columns, primary_key)
        table.name = name
        table.notes = notes or ""
        table.columns = self._sanitise_references(new_columns, table)
        self._warn_on_name_collision(table)
        log.debug("Updated table '%s' (%s).", table.name, table.id)
        return table

    def delete_table(self, table_id: str) -> bool:
        """
        Remove a table. Returns True if a table was removed.

        Foreign keys in other tables that pointed into it are demoted the
        same way :meth:`update_table` demotes them for removed columns.
        """
        table = self.get(table_id)
        if table is None:
            return False

        demoted = self._demote_references(table, table.columns, sweep_all=True)
        self._tables = [t for t in self._tables if t.id != table_id]
        log.debug("Deleted table '%s' (%s); demoted %d foreign key(s).",
                  table.name, table_id, demoted)
        return True

    def import_ddl(self, text: str) -> list[Table]:
        """Parse *text* and append every table found, in order."""
        return self.import_ddl_report(text).tables

    def import_ddl_report(self, text: str) -> ParseReport:
        """Like :meth:`import_ddl`, also returning the skipped fragments."""
        report = parse_ddl_report(text)
        self._tables.extend(report.tables)
        if report.tables:
            log.info("Imported %d table(s) from DDL.", len(report.tables))
        if report.skipped:
            log.info("DDL import skipped %d fragment(s).", len(report.skipped))
        return report

    # ------------------------------------------------------------------
    # Integrity internals
    # ------------------------------------------------------------------

    def _demote_references(
        self,
        target: Table,
        removed: Iterable[Column],
        sweep_all: bool = False,
    ) -> int:
        """
        Demote foreign keys in other tables that point at *removed*.

        With *sweep_all*, any reference to *target* is demoted, including
        ones naming a column the target no longer has.
        """
        seen: set[tuple[str, str]] = set()
        nullability: dict[str, bool] = {}
        for gone in removed:
            key = (target.id, gone.name)
            if key in seen:
                continue
            seen.add(key)
            nullability[gone.name] = gone.nullable

        count = 0
        for other in self._tables:
            if other.id == target.id:
                continue
            changed = False
            new_columns: list[Column] = []
            for col in other.columns:
                ref = col.references
                hit = col.foreign_key and ref.table_id == target.id and (
                    ref.column_name in nullability or sweep_all
                )
                if hit:
                    col = demote_foreign_key(col, nullability.get(ref.column_name, col.nullable))
                    changed = True
                    count += 1
                new_columns.append(col)
            if changed:
                other.columns = new_columns
        return count

    def _sanitise_references(self, columns: list[Column], owner: Table) -> list[Column]:
        """
        Empty any reference that does not resolve.

        A column keeps its ``foreign_key`` flag with an empty reference
        (dangling); a non-FK column never carries a reference.
        """
        result: list[Column] = []
        for col in columns:
            ref = col.references
            if not col.foreign_key:
                if ref != EMPTY_REFERENCE:
                    col = col.copy(references=EMPTY_REFERENCE)
            elif ref != EMPTY_REFERENCE and not self._resolves(ref, owner, columns):
                log.debug("Dangling reference on '%s.%s' cleared.", owner.name, col.name)
                col = col.copy(references=EMPTY_REFERENCE)
            result.append(col)
        return result

    def _resolves(self, ref: Reference, owner: Table, owner_columns: list[Column]) -> bool:
        if not ref.is_set:
            return False
        if ref.table_id == owner.id:
            return any(c.name == ref.column_name for c in owner_columns)
        target = self.get(ref.table_id)
        return target is not None and target.column(ref.column_name) is not None

    def _warn_on_name_collision(self, table: Table) -> None:
        folded = table.name.casefold()
        for other in self._tables:
            if other.id != table.id and other.name.casefold() == folded:
                log.warning(
                    "Table name '%s' collides with '%s'; generated identifiers "
                    "may clash.", table.name, other.name,
                )
                return
