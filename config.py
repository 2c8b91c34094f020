"""
config.py
---------
Centralised configuration management for tabledraft.

Loads settings from environment variables, with ``.env`` file support via
python-dotenv. Provides typed settings as frozen dataclasses so
configuration is immutable at runtime.

Design Decision:
    Using a dataclass with class-level defaults means the tool works
    "out of the box" without any .env file, while still allowing
    environment-based overrides (e.g. a different Java package for the
    generated entities).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)


@dataclass(frozen=True)
class ExportConfig:
    """Settings that shape generated code."""
    header_tool_name: str = field(
        default_factory=lambda: os.getenv("EXPORT_TOOL_NAME", "tabledraft")
    )
    java_package: str = field(
        default_factory=lambda: os.getenv("EXPORT_JAVA_PACKAGE", "com.example.model")
    )
    prisma_provider: str = field(
        default_factory=lambda: os.getenv("EXPORT_PRISMA_PROVIDER", "postgresql")
    )
    default_varchar_length: int = field(
        default_factory=lambda: int(os.getenv("EXPORT_DEFAULT_VARCHAR_LENGTH", "255"))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings."""
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper()
    )
    log_file: str | None = field(
        default_factory=lambda: os.getenv("LOG_FILE")  # None → log to stderr only
    )


@dataclass(frozen=True)
class ApiConfig:
    """HTTP surface settings."""
    host: str = field(default_factory=lambda: os.getenv("API_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))
    title: str = "tabledraft API"


@dataclass(frozen=True)
class AppConfig:
    """Root application configuration."""
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    app_name: str = "tabledraft"
    app_version: str = "1.0.0"


def load_config() -> AppConfig:
    """
    Build and return the application configuration.

    Returns:
        AppConfig: Fully populated (and frozen) configuration object.

    Example::

        cfg = load_config()
        print(cfg.export.java_package)     # "com.example.model"
        print(cfg.api.port)                # 8000
    """
    return AppConfig()


# Module-level singleton used throughout the application
CONFIG: AppConfig = load_config()


def get_log_level() -> int:
    """Convert string log level from config to logging module constant."""
    level = getattr(logging, CONFIG.logging.log_level, None)
    if not isinstance(level, int):
        return logging.INFO
    return level
