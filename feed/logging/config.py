"""Structlog setup: JSON lines to a rotating file, colored lines to the console.

Environment variables:
- LOG_FILE_PATH: log file (default ./logs/notification-feed-service.log)
- LOG_LEVEL: minimum level (default INFO)
- LOG_FILE_MAX_BYTES / LOG_FILE_BACKUP_COUNT: rotation policy
- SERVICE_NAME, ENVIRONMENT: attached to every file record
"""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from feed.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE = "./logs/notification-feed-service.log"

_TIMESTAMPER = structlog.processors.TimeStamper(fmt="iso", utc=True)

# Applied to records from stdlib loggers (Django, gunicorn) before rendering
_FOREIGN_CHAIN = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    _TIMESTAMPER,
    add_request_context,
]


def _file_handler(path: str, level: int) -> logging.Handler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=int(os.getenv("LOG_FILE_MAX_BYTES", str(50 * 1024 * 1024))),
        backupCount=int(os.getenv("LOG_FILE_BACKUP_COUNT", "20")),
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[*_FOREIGN_CHAIN, add_service_context, add_process_info],
        )
    )
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_FOREIGN_CHAIN,
        )
    )
    return handler


def setup_logging() -> None:
    """Route structlog and stdlib logging through the file and console handlers."""
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE)
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _TIMESTAMPER,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(_file_handler(log_file_path, level))
    root_logger.addHandler(_console_handler(level))

    structlog.get_logger(__name__).info(
        "Logging configured", log_file=log_file_path, log_level=level_name
    )
