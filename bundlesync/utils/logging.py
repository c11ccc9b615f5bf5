"""Shared logging configuration and the diagnostic sink used by the sync core."""

from __future__ import annotations

import logging
import os
from typing import Protocol

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "BUNDLESYNC_LOG_LEVEL"


class DiagnosticSink(Protocol):
    """Where the sync core reports what it did. Owned by the host."""

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingSink:
    """DiagnosticSink backed by a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("bundlesync")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)


def resolve_level(value: int | str | None) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        candidate = logging.getLevelName(value.strip().upper())
        if isinstance(candidate, int):
            return candidate
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        candidate = logging.getLevelName(env_level.strip().upper())
        if isinstance(candidate, int):
            return candidate
    return logging.INFO


def configure_logging(level: int | str | None = None, console: Console | None = None) -> None:
    """Install a RichHandler on the package logger, once."""
    resolved = resolve_level(level)
    logger = logging.getLogger("bundlesync")
    logger.setLevel(resolved)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or "bundlesync")
