"""Logging setup for applications embedding wren."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with a wren-prefixed override."""
    value = os.getenv("WREN_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def configure_logging(level_name: str | None = None) -> None:
    """Install a single console handler on the root logger."""
    name = level_name if level_name is not None else resolve_log_level_name()
    level = getattr(logging, name.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)


def setup_logging() -> None:
    """Configure logging only if the host has not done so already."""
    if logging.getLogger().handlers:
        return
    configure_logging()
