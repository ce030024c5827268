"""Notification feed response schemas."""

from pydantic import Field

from feed.schemas.base import FeedSchema
from feed.schemas.notification.feed_notification import FeedNotification


class NotificationFeedResponse(FeedSchema):
    """Merged notification feed for the authenticated user."""

    notifications: list[FeedNotification] = Field(
        ..., description="Merged, deduplicated, newest-first notifications"
    )
    total_count: int = Field(..., ge=0, description="Number of notifications")
    unread_count: int = Field(..., ge=0, description="Number of unread notifications")


class UnreadCountResponse(FeedSchema):
    """Unread structured notification count."""

    unread_count: int = Field(..., ge=0, description="Unread notifications")


class ReadAllResponse(FeedSchema):
    """Result of marking every notification read."""

    updated_count: int = Field(..., ge=0, description="Notifications marked read")


__all__ = ["NotificationFeedResponse", "ReadAllResponse", "UnreadCountResponse"]
