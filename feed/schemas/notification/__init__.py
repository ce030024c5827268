"""Notification schemas."""

from feed.schemas.notification.candidate import (
    Actor,
    FollowRequestRef,
    NotificationCandidate,
    PostRef,
    WorkoutRef,
)
from feed.schemas.notification.feed_notification import FeedNotification
from feed.schemas.notification.response import (
    NotificationFeedResponse,
    ReadAllResponse,
    UnreadCountResponse,
)

__all__ = [
    "Actor",
    "FeedNotification",
    "FollowRequestRef",
    "NotificationCandidate",
    "NotificationFeedResponse",
    "PostRef",
    "ReadAllResponse",
    "UnreadCountResponse",
    "WorkoutRef",
]
