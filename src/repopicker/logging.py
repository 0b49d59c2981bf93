"""Logging setup for the CLI and the selector window."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from repopicker.config import AppConfig

APP_LOGGER = "repopicker"
SELECTION_LOGGER = "repopicker.selection"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LOG_PATH = Path("~/.config/repopicker/logs/repopicker.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def resolve_level(level: str | None) -> int:
    return LOG_LEVELS.get((level or "").upper(), py_logging.INFO)


def _absolute(path: str | Path) -> Path:
    try:
        resolved = Path(path).expanduser()
    except RuntimeError:
        resolved = Path.cwd() / ".repopicker" / "logs" / Path(path).name
    return resolved if resolved.is_absolute() else resolved.resolve()


def default_log_path() -> Path:
    return _absolute(DEFAULT_LOG_PATH)


def log_path_for(config: AppConfig, override: str | Path | None = None) -> Path:
    """Log file to write: explicit override, then config value, then default."""
    if override:
        return _absolute(override)
    if config.log_file:
        return _absolute(config.log_file)
    return default_log_path()


def _file_handler(path: Path, formatter: py_logging.Formatter) -> py_logging.Handler | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = py_logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(py_logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
    trace_selection: bool = False,
) -> py_logging.Logger:
    """Configure the application logger.

    The stream handler follows ``level``; the optional file handler always
    records DEBUG. With ``trace_selection`` the selection state machine logs
    at DEBUG regardless of ``level`` so resolution decisions reach the file.
    """
    resolved = resolve_level(level)
    logger = py_logging.getLogger(APP_LOGGER)
    logger.setLevel(resolved)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    formatter = py_logging.Formatter(_FORMAT)
    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = _file_handler(_absolute(log_file), formatter)
        if file_handler is not None:
            logger.addHandler(file_handler)

    selection_logger = py_logging.getLogger(SELECTION_LOGGER)
    selection_logger.setLevel(py_logging.DEBUG if trace_selection else py_logging.NOTSET)

    logger.propagate = False
    return logger


def configure_from_config(
    config: AppConfig,
    *,
    level: str | None = None,
    log_file: str | Path | None = None,
    stream: TextIO | None = None,
) -> py_logging.Logger:
    return configure_logging(
        level or config.log_level,
        stream,
        log_file=log_path_for(config, log_file),
        trace_selection=config.trace_selection,
    )
