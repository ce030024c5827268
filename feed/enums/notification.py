"""Notification-related enumerations.

This module contains the notification types shown in the feed, the
collectors candidates originate from, and the outcomes of user actions.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Kinds of notification that can appear in the feed."""

    LIKE = "like"
    FOLLOW = "follow"
    COMMENT = "comment"
    WORKOUT_LIKE = "workout_like"
    FOLLOW_REQUEST = "follow_request"

    @property
    def is_post_related(self) -> bool:
        """Whether notifications of this type reference a post."""
        return self in (NotificationType.LIKE, NotificationType.COMMENT)


class CandidateSource(str, Enum):
    """Collector a candidate was produced by.

    Declaration order is the tie-break rank used when two candidates share
    the same creation timestamp: structured first, then legacy likes, then
    legacy follows.
    """

    STRUCTURED = "structured"
    LEGACY_LIKE = "legacy_like"
    LEGACY_FOLLOW = "legacy_follow"

    @property
    def rank(self) -> int:
        """Tie-break rank, lower sorts first."""
        return list(CandidateSource).index(self)

    @property
    def is_legacy(self) -> bool:
        """Whether the source cannot be deleted server-side."""
        return self is not CandidateSource.STRUCTURED


class ActionOutcome(str, Enum):
    """Result of routing a user action."""

    APPLIED = "applied"
    SUPPRESSED = "suppressed"
    RESYNCED = "resynced"
