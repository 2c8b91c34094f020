"""
tests/test_ddl_parser.py
------------------------
Unit tests for core/ddl_parser.py.
Run with: python -m pytest tests/
"""
from __future__ import annotations

import textwrap

import pytest

from core.ddl_parser import parse_ddl, parse_ddl_report
from models.schema import EMPTY_REFERENCE


def _ddl(content: str) -> str:
    return textwrap.dedent(content)


# ---------------------------------------------------------------------------
# Statements and columns
# ---------------------------------------------------------------------------

class TestParseTables:
    def test_inline_primary_key_and_length(self) -> None:
        tables = parse_ddl(
            "CREATE TABLE customers (id INT PRIMARY KEY, name VARCHAR(100) NOT NULL);"
        )
        assert len(tables) == 1
        customers = tables[0]
        assert customers.name == "customers"
        assert customers.column_names == ["id", "name"]

        id_col = customers.column("id")
        assert id_col.type == "int"
        assert id_col.primary_key
        assert not id_col.nullable
        assert id_col.unique

        name_col = customers.column("name")
        assert name_col.type == "varchar"
        assert name_col.type_length == 100
        assert not name_col.nullable
        assert not name_col.primary_key

        assert customers.primary_key == "id"

    def test_multiple_tables_keep_order(self) -> None:
        tables = parse_ddl(_ddl("""\
            CREATE TABLE b (x INT);
            CREATE TABLE a (y INT);
            CREATE TABLE c (z INT);
        """))
        assert [t.name for t in tables] == ["b", "a", "c"]

    def test_flags(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (email VARCHAR(255) NOT NULL UNIQUE, bio text);")
        email = table.column("email")
        assert email.unique and not email.nullable
        bio = table.column("bio")
        assert bio.nullable and not bio.unique
        assert bio.type_length is None
        assert table.primary_key is None

    def test_type_is_lowercased(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (flag BOOLEAN, data BLOB);")
        assert [c.type for c in table.columns] == ["boolean", "blob"]

    def test_nested_commas_not_split(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (price DECIMAL(10,2) NOT NULL, qty INT);")
        assert table.column_names == ["price", "qty"]
        price = table.column("price")
        assert price.type == "decimal"
        assert price.type_length is None
        assert not price.nullable

    def test_unknown_modifiers_tolerated(self) -> None:
        (table,) = parse_ddl(
            "CREATE TABLE users (id INT AUTO_INCREMENT PRIMARY KEY, active BOOLEAN DEFAULT 1);"
        )
        assert table.primary_key == "id"
        assert table.column("active").type == "boolean"

    def test_if_not_exists_and_quoted_names(self) -> None:
        (table,) = parse_ddl('CREATE TABLE IF NOT EXISTS `users` (`login` VARCHAR(20));')
        assert table.name == "users"
        assert table.column_names == ["login"]

    def test_comments_ignored(self) -> None:
        tables = parse_ddl(_ddl("""\
            -- SQL Schema generated by a tool
            /* block
               comment */
            CREATE TABLE t (
              id INT, -- trailing
              name TEXT
            );
        """))
        assert len(tables) == 1
        assert tables[0].column_names == ["id", "name"]

    def test_each_table_gets_fresh_id(self) -> None:
        tables = parse_ddl("CREATE TABLE t (a INT); CREATE TABLE t (a INT);")
        assert len(tables) == 2
        assert tables[0].id != tables[1].id
        assert tables[0].name == tables[1].name == "t"


# ---------------------------------------------------------------------------
# Table-level constraints
# ---------------------------------------------------------------------------

class TestConstraints:
    def test_table_level_primary_key(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (id INT, name TEXT, PRIMARY KEY (id));")
        assert table.primary_key == "id"
        id_col = table.column("id")
        assert id_col.primary_key and not id_col.nullable and id_col.unique

    def test_table_level_primary_key_wins_over_inline(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (a INT PRIMARY KEY, b INT, PRIMARY KEY (b));")
        assert table.primary_key == "b"
        assert [c.primary_key for c in table.columns] == [False, True]

    def test_primary_key_for_missing_column_is_noop(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (a INT, PRIMARY KEY (ghost));")
        assert table.primary_key is None

    def test_only_one_primary_key_survives(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (a INT PRIMARY KEY, b INT PRIMARY KEY);")
        assert sum(c.primary_key for c in table.columns) == 1
        assert table.primary_key == "a"

    def test_foreign_key_resolved_to_table_id(self) -> None:
        customers, orders = parse_ddl(_ddl("""\
            CREATE TABLE customers (id INT PRIMARY KEY);
            CREATE TABLE orders (
              id INT PRIMARY KEY,
              customer_id INT,
              FOREIGN KEY (customer_id) REFERENCES customers(id)
            );
        """))
        fk = orders.column("customer_id")
        assert fk.foreign_key
        assert fk.references.table_id == customers.id
        assert fk.references.column_name == "id"

    def test_foreign_key_to_later_table(self) -> None:
        orders, customers = parse_ddl(_ddl("""\
            CREATE TABLE orders (customer_id INT, FOREIGN KEY (customer_id) REFERENCES customers(id));
            CREATE TABLE customers (id INT PRIMARY KEY);
        """))
        assert orders.column("customer_id").references.table_id == customers.id

    def test_constraint_name_prefix(self) -> None:
        _, orders = parse_ddl(_ddl("""\
            CREATE TABLE customers (id INT);
            CREATE TABLE orders (
              customer_id INT,
              CONSTRAINT fk_customer FOREIGN KEY (customer_id) REFERENCES customers(id)
            );
        """))
        assert orders.column("customer_id").foreign_key

    def test_inline_references(self) -> None:
        customers, orders = parse_ddl(_ddl("""\
            CREATE TABLE customers (id INT PRIMARY KEY);
            CREATE TABLE orders (customer_id INT REFERENCES customers(id));
        """))
        ref = orders.column("customer_id").references
        assert ref.table_id == customers.id

    def test_unknown_target_table_dangles(self) -> None:
        (orders,) = parse_ddl(
            "CREATE TABLE orders (customer_id INT, "
            "FOREIGN KEY (customer_id) REFERENCES customers(id));"
        )
        fk = orders.column("customer_id")
        assert fk.foreign_key
        assert fk.references == EMPTY_REFERENCE

    def test_unknown_target_column_dangles(self) -> None:
        _, orders = parse_ddl(_ddl("""\
            CREATE TABLE customers (id INT);
            CREATE TABLE orders (customer_id INT, FOREIGN KEY (customer_id) REFERENCES customers(uuid));
        """))
        assert orders.column("customer_id").references == EMPTY_REFERENCE

    def test_duplicate_target_names_resolve_to_first(self) -> None:
        first, _, orders = parse_ddl(_ddl("""\
            CREATE TABLE customers (id INT);
            CREATE TABLE customers (id INT);
            CREATE TABLE orders (cid INT, FOREIGN KEY (cid) REFERENCES customers(id));
        """))
        assert orders.column("cid").references.table_id == first.id


# ---------------------------------------------------------------------------
# Permissiveness and diagnostics
# ---------------------------------------------------------------------------

class TestSkipping:
    @pytest.mark.parametrize("text", ["", "   ", "hello world", "SELECT * FROM t;", "CREATE TABLE"])
    def test_nothing_recognisable(self, text: str) -> None:
        assert parse_ddl(text) == []

    def test_other_statements_reported(self) -> None:
        report = parse_ddl_report(_ddl("""\
            INSERT INTO t VALUES (1);
            CREATE TABLE t (id INT);
            DROP TABLE x;
        """))
        assert [t.name for t in report.tables] == ["t"]
        skipped = [f.text for f in report.skipped if f.kind == "statement"]
        assert skipped == ["INSERT INTO t VALUES (1)", "DROP TABLE x"]

    def test_unbalanced_statement_skipped(self) -> None:
        report = parse_ddl_report("CREATE TABLE ok (id INT); CREATE TABLE broken (id INT")
        assert [t.name for t in report.tables] == ["ok"]
        assert report.skipped[-1].reason == "unbalanced parentheses"

    def test_invalid_column_name_skipped(self) -> None:
        report = parse_ddl_report("CREATE TABLE t (address2 VARCHAR(10), city TEXT);")
        (table,) = report.tables
        assert table.column_names == ["city"]
        assert any(f.kind == "column" and "address2" in f.reason for f in report.skipped)

    def test_duplicate_column_first_wins(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t (a INT NOT NULL, a TEXT);")
        assert table.column_names == ["a"]
        assert table.column("a").type == "int"

    def test_unsupported_constraint_dropped(self) -> None:
        report = parse_ddl_report(
            "CREATE TABLE t (a INT, b INT, UNIQUE (a), PRIMARY KEY (a, b), CHECK (a > 0));"
        )
        (table,) = report.tables
        assert table.column_names == ["a", "b"]
        assert table.primary_key is None
        assert len(report.skipped) == 3

    def test_empty_body(self) -> None:
        (table,) = parse_ddl("CREATE TABLE t ();")
        assert table.columns == []

    def test_valid_tables_after_unbalanced_statement(self) -> None:
        report = parse_ddl_report(_ddl("""\
            CREATE TABLE a (x VARCHAR(10);
            CREATE TABLE b (y INT);
            CREATE TABLE c (z INT);
        """))
        assert [t.name for t in report.tables] == ["b", "c"]
        assert report.skipped[0].reason == "unbalanced parentheses"
        assert report.skipped[0].text == "CREATE TABLE a (x VARCHAR(10)"

    def test_unbalanced_without_semicolon_resumes_at_next_create(self) -> None:
        tables = parse_ddl("CREATE TABLE a (x INT CREATE TABLE b (y INT);")
        assert [t.name for t in tables] == ["b"]

    @pytest.mark.parametrize("length", ["²", "١٠x", "n"])
    def test_odd_length_qualifier_ignored(self, length: str) -> None:
        (table,) = parse_ddl(f"CREATE TABLE t (a VARCHAR({length}));")
        assert table.column("a").type == "varchar"
        assert table.column("a").type_length is None


# ---------------------------------------------------------------------------
# Keyword-named columns versus table clauses
# ---------------------------------------------------------------------------

class TestKeywordColumns:
    @pytest.mark.parametrize("name", ["key", "index", "check", "unique", "primary", "foreign", "constraint"])
    def test_keyword_named_column_kept(self, name: str) -> None:
        (table,) = parse_ddl(f"CREATE TABLE t ({name} varchar(50) NOT NULL, value text);")
        assert table.column_names == [name, "value"]
        assert table.column(name).type_length == 50

    def test_key_column_as_primary_key(self) -> None:
        (table,) = parse_ddl(
            "CREATE TABLE settings (key varchar(50) NOT NULL, value text, PRIMARY KEY (key));"
        )
        assert table.primary_key == "key"

    @pytest.mark.parametrize("clause", [
        "KEY (a)",
        "INDEX idx_a (a)",
        "KEY `idx_a` (a)",
        "UNIQUE KEY uq_a (a)",
        "CONSTRAINT uq_a UNIQUE (a)",
        "CONSTRAINT ck_a CHECK (a > 0)",
    ])
    def test_table_clauses_still_skipped(self, clause: str) -> None:
        report = parse_ddl_report(f"CREATE TABLE t (a INT, {clause});")
        (table,) = report.tables
        assert table.column_names == ["a"]
        assert report.skipped[0].reason == "unsupported table constraint"
