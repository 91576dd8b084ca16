"""Logging setup shared by the API process, Celery workers and the CLI."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_logging(
    *,
    level: str | int = "INFO",
    log_file: Optional[str | Path] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Attach a console handler (and a rotating file handler when ``log_file`` is set).

    Calling it again only adjusts the level, handlers are never duplicated.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(logger_name) if logger_name else logging.getLogger()
    logger.setLevel(resolved)

    if logger.handlers:
        for h in logger.handlers:
            h.setLevel(resolved)
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(resolved)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)
    return logger
