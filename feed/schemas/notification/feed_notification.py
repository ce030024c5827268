"""Schema for a rendered feed entry."""

from datetime import datetime

from pydantic import Field

from feed.schemas.notification.candidate import NotificationCandidate
from feed.services.notification_text import action_text, relative_time_label


class FeedNotification(NotificationCandidate):
    """A merged candidate with its display text."""

    message: str = Field(..., description="Action text, e.g. 'liked your post'")
    time_label: str = Field(..., description="Relative time, e.g. '3h' or 'Jan 5'")

    @classmethod
    def render(
        cls, candidate: NotificationCandidate, now: datetime
    ) -> "FeedNotification":
        """Build the display entry for a candidate at time `now`."""
        return cls(
            **candidate.model_dump(),
            message=action_text(candidate.type),
            time_label=relative_time_label(candidate.created_at, now),
        )
