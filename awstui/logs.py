from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from awstui.config.loader import SETTINGS_DIR

LOG_FILE = "aws-tui.log"
LOG_LEVEL_ENV = "AWS_TUI_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
MAX_BYTES = 1_000_000
BACKUP_COUNT = 3


def setup_logging(level: str | None = None, directory: str | None = None) -> Path | None:
    """Send the ``awstui`` loggers to a rotating file next to the settings.

    Nothing is written to the terminal, which belongs to the TUI. Returns the
    log file path, or None when the directory cannot be created. Safe to call
    more than once (handlers are replaced).
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper().strip()
    numeric = getattr(logging, level_name, logging.WARNING)

    try:
        log_dir = Path(directory or SETTINGS_DIR).expanduser()
        log_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    except (OSError, RuntimeError):
        return None

    log_file = log_dir / LOG_FILE
    handler = RotatingFileHandler(log_file, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("awstui")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False

    logger.info("logging to %s at %s", os.fspath(log_file), level_name)
    return log_file
