"""
tests/test_validation.py
------------------------
Unit tests for core/validation.py.
Run with: python -m pytest tests/
"""
from __future__ import annotations

import pytest

from core.validation import (
    is_column_valid,
    is_table_valid,
    is_valid_column_name,
    validation_errors,
)
from models.schema import Column


@pytest.mark.parametrize("name", ["id", "customer_id", "firstName", "é"])
def test_valid_column_names(name: str) -> None:
    assert is_valid_column_name(name)


@pytest.mark.parametrize("name", ["", "address2", "first name", "a;b", "tab\there", "1st"])
def test_invalid_column_names(name: str) -> None:
    assert not is_valid_column_name(name)


def test_column_needs_type() -> None:
    assert is_column_valid(Column("id", "int"))
    assert not is_column_valid(Column("id", ""))


class TestTableValidation:
    def test_valid(self) -> None:
        assert is_table_valid("users", [Column("id", "int"), Column("name", "text")])
        assert validation_errors("users", [Column("id", "int")]) == []

    def test_missing_name_and_columns(self) -> None:
        assert validation_errors("  ", []) == [
            "Table name is required.",
            "A table needs at least one column.",
        ]

    def test_column_problems_reported_by_position(self) -> None:
        errors = validation_errors("t", [
            Column("", "int"),
            Column("line2", "text"),
            Column("a", ""),
            Column("a", "int"),
        ])
        assert errors[0] == "Column 1: name is required."
        assert errors[1].startswith("Column 2: name 'line2'")
        assert errors[2] == "Column 3: type is required."
        assert errors[3] == "Column 4: duplicate column name 'a'."
        assert len(errors) == 4

    def test_invalid_table(self) -> None:
        assert not is_table_valid("t", [Column("a", "int"), Column("a", "int")])
