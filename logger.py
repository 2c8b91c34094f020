"""
logger.py
---------
Logging setup for tabledraft.

Every module logs through ``get_logger(__name__)``, which places its logger
under the ``tabledraft`` namespace. Handlers stamp each record with a
``component`` tag (``parser``, ``store``, ``export``, ``api`` ...) taken from
the module path, so the DDL parser's skip diagnostics can be told apart
from API traffic in one log.

Design Decisions:
    * :func:`configure_logging` runs once on import with ``CONFIG.logging``.
      Calling it again swaps out the handlers it installed earlier rather
      than stacking duplicates.
    * With ``LOG_FILE`` set, the namespace logger opens up to DEBUG and a
      size-rotated file receives everything, including every skipped DDL
      fragment; the console keeps the configured level.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import CONFIG, get_log_level

NAMESPACE = "tabledraft"

_CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s [%(component)s] %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(name)s:%(lineno)d %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_MAX_LOG_BYTES = 1_000_000
_LOG_BACKUPS = 3

_COMPONENTS = {
    "core.ddl_parser": "parser",
    "core.schema_store": "store",
    "core.exporter": "export",
}


def component_for(logger_name: str) -> str:
    """Short tag for a logger: ``tabledraft.core.ddl_parser`` → ``parser``."""
    name = logger_name.removeprefix(f"{NAMESPACE}.")
    if name in _COMPONENTS:
        return _COMPONENTS[name]
    if name.startswith("services."):
        return "api"
    return name.rsplit(".", 1)[-1]


class _ComponentFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = component_for(record.name)
        return True


def _install(root: logging.Logger, handler: logging.Handler, fmt: str) -> None:
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=_DATE_FORMAT))
    handler.addFilter(_ComponentFilter())
    handler._tabledraft = True  # marks handlers owned by configure_logging
    root.addHandler(handler)


def configure_logging(level: int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    (Re)install the console and optional file handler on the namespace logger.

    Args:
        level:    Console level; defaults to ``LOG_LEVEL``.
        log_file: Path of the rotating log file; defaults to ``LOG_FILE``.
                  Pass ``""`` to disable the file even when configured.

    Returns:
        The ``tabledraft`` namespace logger.
    """
    root = logging.getLogger(NAMESPACE)
    for handler in [h for h in root.handlers if getattr(h, "_tabledraft", False)]:
        root.removeHandler(handler)
        handler.close()

    level = get_log_level() if level is None else level
    log_file = CONFIG.logging.log_file if log_file is None else log_file

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    _install(root, console, _CONSOLE_FORMAT)
    root.setLevel(level)

    if log_file:
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
            )
        except OSError as exc:
            root.warning("Could not open log file '%s': %s", path, exc)
        else:
            file_handler.setLevel(logging.DEBUG)
            _install(root, file_handler, _FILE_FORMAT)
            root.setLevel(logging.DEBUG)
    return root


configure_logging()


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a tabledraft module.

    Example::

        log = get_logger(__name__)
        log.debug("Skipped %s (%s): %r", frag.kind, frag.reason, frag.text)
    """
    return logging.getLogger(f"{NAMESPACE}.{name}")
