"""Raw row schemas returned by the notification source collectors.

Each collector returns rows in its own shape. Rows are validated straight
off ORM instances; every relation is optional so a relation deleted
concurrently validates as None instead of raising.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SourceRow(BaseModel):
    """Base for collector rows, read from ORM attributes by field name."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class ProfileRow(SourceRow):
    id: UUID
    username: str
    avatar_url: str | None = None
    is_verified: bool = False


class PostRow(SourceRow):
    id: UUID
    image_url: str | None = None


class WorkoutRow(SourceRow):
    id: UUID
    progress_image_url: str | None = None


class FollowRequestRow(SourceRow):
    id: int
    requester_id: UUID
    requested_id: UUID


class NotificationRow(SourceRow):
    """Structured notification row."""

    notification_id: UUID
    type: str
    created_at: datetime
    is_read: bool = False
    actor_id: UUID
    actor: ProfileRow | None = None
    post: PostRow | None = None
    workout: WorkoutRow | None = None
    follow_request: FollowRequestRow | None = None


class LikeRow(SourceRow):
    """Legacy like activity row: `user` liked `post`."""

    id: int
    created_at: datetime
    user_id: UUID
    user: ProfileRow | None = None
    post_id: UUID | None = None
    post: PostRow | None = None


class FollowRow(SourceRow):
    """Legacy follow activity row: `follower` started following the user."""

    id: int
    created_at: datetime
    follower_id: UUID
    follower: ProfileRow | None = None


__all__ = [
    "FollowRequestRow",
    "FollowRow",
    "LikeRow",
    "NotificationRow",
    "PostRow",
    "ProfileRow",
    "SourceRow",
    "WorkoutRow",
]
