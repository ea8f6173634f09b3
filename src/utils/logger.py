"""Structured logging for the feedback service."""

import logging
import json
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path


class JsonFormatter(logging.Formatter):
    """One JSON object per line: UTC time, level, component, event, data, exception."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "event": record.getMessage(),
        }

        # Structured context passed as extra={"data": {...}}
        data = getattr(record, "data", None)
        if data is not None:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Datetimes and exceptions in data are rendered with str()
        return json.dumps(log_data, default=str)


def setup_logger(name: str = "chrono.feedback", log_dir: str = "logs") -> logging.Logger:
    """
    Set up structured logger for a service component.

    Creates the log directory if it doesn't exist and attaches a rotating
    JSON file handler (10MB files, keep 5). Calling it twice for the same
    name returns the already configured logger.

    Args:
        name: Logger name (default: chrono.feedback)
        log_dir: Directory for log files

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    Path(log_dir).mkdir(exist_ok=True)

    handler = RotatingFileHandler(
        str(Path(log_dir) / "chrono.log"),
        maxBytes=10_000_000,  # 10MB
        backupCount=5
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    return logger
