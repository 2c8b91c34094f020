"""
tests/test_logger.py
--------------------
Unit tests for logger.py.
Run with: python -m pytest tests/
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.ddl_parser import parse_ddl
from logger import NAMESPACE, component_for, configure_logging


@pytest.fixture
def restore_logging():
    yield
    configure_logging()


@pytest.mark.parametrize("name, component", [
    ("tabledraft.core.ddl_parser", "parser"),
    ("tabledraft.core.schema_store", "store"),
    ("tabledraft.core.exporter", "export"),
    ("tabledraft.services.api.routers.tables", "api"),
    ("tabledraft.core.sql_generator", "sql_generator"),
])
def test_component_for(name: str, component: str) -> None:
    assert component_for(name) == component


def _owned(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if getattr(h, "_tabledraft", False)]


class TestConfigureLogging:
    def test_reconfigure_does_not_stack_handlers(self, restore_logging) -> None:
        configure_logging(log_file="")
        root = configure_logging(log_file="")
        assert root.name == NAMESPACE
        assert len(_owned(root)) == 1

    def test_file_receives_parser_skips(self, tmp_path: Path, restore_logging) -> None:
        path = tmp_path / "logs" / "tabledraft.log"
        root = configure_logging(level=logging.WARNING, log_file=str(path))
        assert len(_owned(root)) == 2
        assert root.level == logging.DEBUG

        parse_ddl("DROP TABLE x;")
        configure_logging(log_file="")   # closes the file handler

        text = path.read_text(encoding="utf-8")
        assert "[parser]" in text
        assert "Skipped statement" in text
