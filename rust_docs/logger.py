#!/usr/bin/env python3
"""
Logging configuration module for the Rust documentation MCP server.

Provides structured JSON logging on stderr, with optional file rotation.
Nothing here ever writes to stdout: the stdio transport owns that stream.
"""

import datetime
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

LOGGER_NAME = "RustDocsServer"

# Marks handlers installed by setup_logging; other handlers on the logger are left alone
HANDLER_MARKER = "_rust_docs_handler"


class JsonFormatter(logging.Formatter):
    """Custom formatter to output logs in JSON format."""
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        # Add extra data if it exists
        if hasattr(record, 'extra_data'):
            log_record.update(record.extra_data)
        # Add exception info if it exists
        if record.exc_info:
            log_record['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def setup_logging(
    level: Union[str, int] = logging.INFO,
    logs_dir: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures the structured JSON logger.

    Args:
        level: Log level name or number
        logs_dir: Directory for rotating log files. If None, no file is written
        stream: Diagnostic stream, defaults to sys.stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Prevent logging from propagating to the root logger
    logger.propagate = False

    # If our handlers are already present, do nothing
    if any(getattr(handler, HANDLER_MARKER, False) for handler in logger.handlers):
        return logger

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    stream_handler.setFormatter(formatter)
    setattr(stream_handler, HANDLER_MARKER, True)
    logger.addHandler(stream_handler)

    if logs_dir is not None:
        logs_dir = Path(logs_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"{datetime.date.today()}.log"

        # Use RotatingFileHandler to prevent log files from growing too large
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        setattr(file_handler, HANDLER_MARKER, True)
        logger.addHandler(file_handler)

    return logger
