#!/usr/bin/env python3
"""
Logging configuration module for the Context7 MCP server.

Log records are written as one JSON object per line to a dated, rotating file
under the logs directory. Nothing goes to stdout, which carries the stdio
transport. Structured fields are attached with
``extra={'extra_data': {...}}``.
"""

import datetime
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "Context7Server"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Keys owned by the formatter; extra_data may not replace them
RESERVED_FIELDS = ("timestamp", "level", "name", "message", "exc_info")


class JsonFormatter(logging.Formatter):
    """Render a log record and its extra_data as a single JSON line."""

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        extra_data = getattr(record, 'extra_data', None)
        if extra_data:
            for key, value in extra_data.items():
                if key in RESERVED_FIELDS:
                    key = f"extra_{key}"
                log_record[key] = value
        if record.exc_info:
            log_record['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def get_logger() -> logging.Logger:
    """Return the server logger without attaching any handlers."""
    return logging.getLogger(LOGGER_NAME)


def parse_level(level: Union[int, str, None]) -> int:
    """Accept a level number or name ("debug", "INFO"); unknown names give INFO."""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(logs_dir: Optional[Path] = None, level: Union[int, str, None] = logging.INFO) -> logging.Logger:
    """
    Configures the structured JSON logger.

    Args:
        logs_dir: Directory to store log files. If None, uses "./logs"
        level: Logging level as number or name

    Returns:
        Configured logger instance
    """
    if logs_dir is None:
        logs_dir = Path("./logs")

    logger = get_logger()
    logger.setLevel(parse_level(level))
    logger.propagate = False

    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    logs_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        logs_dir / f"{datetime.date.today()}.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    return logger
