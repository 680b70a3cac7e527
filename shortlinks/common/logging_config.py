"""Logging configuration for shortlinks."""

import json
import logging
import sys
from typing import Optional, TextIO


class JSONLineFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the ``shortlinks`` logger.

    Calling it again replaces the previous handlers, so the CLI and the
    test suite can reconfigure freely.

    Args:
        level: Logging level name (case-insensitive)
        log_file: Optional file that receives the same records
        json_format: Emit JSON lines instead of plain text
        stream: Console stream (defaults to stdout)

    Returns:
        Configured ``shortlinks`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("shortlinks")
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if json_format:
        formatter = JSONLineFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = "shortlinks") -> logging.Logger:
    """Get a logger under the ``shortlinks`` hierarchy, e.g. ``shortlinks.web``."""
    return logging.getLogger(name)
