"""
Logging configuration.

Console logging with timestamps and levels. Library modules only ask for
loggers; the CLI is the one place that calls ``setup_logging``.
"""
from __future__ import annotations

import logging
import os
import sys

_logging_configured = False


def setup_logging(level: str | int | None = None, app_name: str = "docsim") -> logging.Logger:
    """Configure console logging once and return the application logger.

    ``level`` wins over the ``DOCSIM_DEBUG`` environment flag. Noisy
    third-party loggers are pinned to WARNING.
    """
    global _logging_configured

    if level is None:
        debug_mode = os.environ.get("DOCSIM_DEBUG", "").lower() in ("true", "1", "yes")
        log_level = logging.DEBUG if debug_mode else logging.INFO
    elif isinstance(level, str):
        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {level}")
    else:
        log_level = level

    logger = logging.getLogger(app_name)

    if _logging_configured:
        logger.setLevel(log_level)
        return logger

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("ppocr").setLevel(logging.WARNING)
    logging.getLogger("paddle").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    logger.setLevel(log_level)
    _logging_configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the docsim namespace, e.g. ``get_logger("process")``."""
    return logging.getLogger(f"docsim.{name}")
