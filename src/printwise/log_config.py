"""Rotating file logging for Printwise.

Only stdlib modules are used.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_DEFAULT_LOG_DIR = os.path.join(str(Path.home()), ".printwise", "logs")
_LOG_FILE_NAME = "printwise.log"


def configure_logging(
    log_dir: Optional[str] = None,
    *,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
    level: Optional[str] = None,
) -> str:
    """Configure the root logger with a rotating file handler.

    Calling this more than once does not add a second file handler.

    :param log_dir: Directory for log files.  Reads ``PRINTWISE_LOG_DIR``
        env var, then falls back to ``~/.printwise/logs/``.
    :param max_bytes: Maximum log file size before rotation (default 5 MB).
    :param backup_count: Number of rotated log files to keep (default 3).
    :param level: Log level string.  Reads ``PRINTWISE_LOG_LEVEL`` env var,
        then falls back to ``"INFO"``.
    :returns: Path of the log file.
    """
    log_dir = log_dir or os.environ.get("PRINTWISE_LOG_DIR") or _DEFAULT_LOG_DIR
    level = level or os.environ.get("PRINTWISE_LOG_LEVEL", "INFO")

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, _LOG_FILE_NAME)

    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    has_rotating = any(
        isinstance(h, RotatingFileHandler) for h in root.handlers
    )
    if not has_rotating:
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    return log_path
