"""
tests/conftest.py
-----------------
Shared fixtures: an empty store and a small customers/orders schema.
"""
from __future__ import annotations

import pytest

from core.schema_store import SchemaStore
from models.schema import Column, Reference, Table


@pytest.fixture
def store() -> SchemaStore:
    """Returns a fresh, empty SchemaStore."""
    return SchemaStore()


@pytest.fixture
def customers(store: SchemaStore) -> Table:
    table = store.create_table(
        "customers",
        [
            Column("id", "int", primary_key=True),
            Column("name", "varchar", type_length=100, nullable=False),
        ],
    )
    assert table is not None
    return table


@pytest.fixture
def orders(store: SchemaStore, customers: Table) -> Table:
    table = store.create_table(
        "orders",
        [
            Column("id", "int", primary_key=True),
            Column(
                "customer_id", "int",
                foreign_key=True,
                references=Reference(customers.id, "id"),
            ),
            Column("order_date", "text"),
        ],
    )
    assert table is not None
    return table
