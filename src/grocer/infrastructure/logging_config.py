"""Configure logging for the ``grocer`` package.

Human-readable messages go to stderr.  When a log directory is given,
records are also written as JSON lines to a rotating ``grocer.log``.
Only the ``grocer`` logger is configured; the root logger is left alone.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = "grocer"
LOG_FILE_NAME = "grocer.log"

_CONSOLE_FORMAT = "%(levelname)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Format log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def configure_logging(level: int = logging.WARNING, log_dir: Path | None = None) -> logging.Logger:
    """Attach console (and optionally rotating file) handlers to ``grocer``.

    Args:
        level: Logging level for the package logger.
        log_dir: Directory for ``grocer.log``; created if missing.  No file
            logging when None.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Drop handlers from an earlier call (e.g. repeated CLI invocations in tests)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / LOG_FILE_NAME,
            maxBytes=5 * 1024 * 1024,  # 5 MB per log file
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(JsonFormatter())
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger
