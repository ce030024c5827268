"""Logging utilities for the notification feed service."""

from feed.logging.config import setup_logging
from feed.logging.context import (
    clear_request_id,
    get_request_id,
    get_user_id,
    set_request_id,
    set_user_id,
)

__all__ = [
    "clear_request_id",
    "get_request_id",
    "get_user_id",
    "set_request_id",
    "set_user_id",
    "setup_logging",
]
