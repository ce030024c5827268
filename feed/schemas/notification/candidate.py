"""Schema for a canonical notification candidate."""

from datetime import datetime

from pydantic import Field

from feed.enums import NotificationType
from feed.schemas.base import FeedSchema


class Actor(FeedSchema):
    """Profile whose action produced a notification."""

    id: str = Field(..., description="Profile ID of the actor")
    username: str = Field(..., description="Actor username")
    avatar_url: str | None = Field(None, description="Actor avatar URL")
    is_verified: bool = Field(False, description="Whether the actor is verified")


class PostRef(FeedSchema):
    """Post a notification refers to."""

    id: str = Field(..., description="Post ID")
    image_url: str | None = Field(None, description="Post image URL")


class WorkoutRef(FeedSchema):
    """Workout a notification refers to."""

    id: str = Field(..., description="Workout ID")
    progress_image_url: str | None = Field(
        None, description="Workout progress image URL"
    )


class FollowRequestRef(FeedSchema):
    """Pending follow request behind a follow_request notification."""

    id: str = Field(..., description="Follow request ID")
    requester_id: str = Field(..., description="Profile asking to follow")
    requested_id: str = Field(..., description="Profile being asked")


class NotificationCandidate(FeedSchema):
    """A notification normalized from any source, before deduplication.

    The id is source specific: structured rows use their UUID, legacy rows
    carry a "like_" or "follow_" marker in front of their row id.
    """

    id: str = Field(..., min_length=1, description="Source-specific identifier")
    type: NotificationType = Field(..., description="Notification type")
    created_at: datetime = Field(..., description="When the event happened")
    read: bool = Field(False, description="Whether the notification has been read")
    actor: Actor = Field(..., description="Profile that caused the notification")
    post: PostRef | None = Field(None, description="Referenced post")
    workout: WorkoutRef | None = Field(None, description="Referenced workout")
    follow_request: FollowRequestRef | None = Field(
        None, description="Follow request payload, only for follow_request"
    )
