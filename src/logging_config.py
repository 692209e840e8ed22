"""Logging configuration helpers."""
from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-7s | %(parent_file)s:%(lineno)-3d | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ShortPathFilter(logging.Filter):
    """Attach ``parent_file`` = ``<parent>/<filename>`` to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        parent = os.path.basename(os.path.dirname(record.pathname))
        filename = os.path.basename(record.pathname)
        record.parent_file = f"{parent}/{filename}"  # type: ignore[attr-defined]
        return True


def configure_logging(
    *,
    level: int | str = logging.INFO,
    log_format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_dir: str | Path = "logs",
    log_filename: Optional[str | Path] = None,
    max_bytes: int = 1 * 1024 * 1024,
    backup_count: int = 5,
    in_terminal: bool = True,
) -> logging.Logger:
    """
    Configure console and optional rotating-file logging with dictConfig.

    Args:
        level: Level number or name ("DEBUG", "INFO", ...)
        log_dir: Directory for the log file
        log_filename: File name inside log_dir; no file handler when None
        in_terminal: Add a console handler

    Returns:
        The root logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handlers = {}
    if in_terminal:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "level": level,
            "filters": ["short_path"],
        }

    if log_filename:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "level": level,
            "filename": os.path.join(str(log_dir), str(Path(log_filename).with_suffix(".log"))),
            "maxBytes": max_bytes,
            "backupCount": backup_count,
            "encoding": "utf-8",
            "filters": ["short_path"],
        }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"short_path": {"()": ShortPathFilter}},
            "formatters": {"default": {"format": log_format, "datefmt": datefmt}},
            "handlers": handlers,
            "root": {"handlers": list(handlers), "level": level},
        }
    )

    root = logging.getLogger()
    root.debug("Logging configured for level %s", logging.getLevelName(level))
    return root


__all__ = ["configure_logging", "ShortPathFilter"]
