"""Enumerations for the feed app."""

from feed.enums.health import HealthStatus
from feed.enums.notification import (
    ActionOutcome,
    CandidateSource,
    NotificationType,
)

__all__ = ["ActionOutcome", "CandidateSource", "HealthStatus", "NotificationType"]
