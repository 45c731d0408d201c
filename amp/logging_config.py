"""
Logging setup for the amp command line front end.

Library modules only create loggers; handlers are attached here, and only
when the CLI (or an embedding application) asks for them.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAME = "amp"

_PLAIN_FORMAT = "%(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "thread": threading.current_thread().name,
        }

        # Add extra fields if present
        if hasattr(record, 'extra_data'):
            log_entry.update(record.extra_data)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(level=logging.WARNING, json_format: bool = False,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the `amp` logger tree.

    Args:
        level: Threshold for the amp logger and its handlers
        json_format: Emit one JSON object per record instead of plain text
        log_file: Also write records to this file

    Returns:
        The configured `amp` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers so repeated calls don't duplicate output
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = JSONFormatter() if json_format else logging.Formatter(_PLAIN_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
