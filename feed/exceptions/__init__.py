"""Exception handling utilities for the notification feed service."""

from feed.exceptions.feed_exceptions import (
    ActionFailedError,
    ConflictError,
    FeedError,
    OverlayUnavailableError,
    SourceUnavailableError,
)
from feed.exceptions.handlers import custom_exception_handler

__all__ = [
    "ActionFailedError",
    "ConflictError",
    "FeedError",
    "OverlayUnavailableError",
    "SourceUnavailableError",
    "custom_exception_handler",
]
