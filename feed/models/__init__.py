"""Database models for the feed application.

All tables are owned by the main application; every model here is
unmanaged and read or mutated only through the notification store.
"""

from feed.models.follow_request import FollowRequest
from feed.models.follower import Follower
from feed.models.like import Like
from feed.models.notification import Notification
from feed.models.post import Post
from feed.models.profile import Profile
from feed.models.workout import Workout

__all__ = [
    "FollowRequest",
    "Follower",
    "Like",
    "Notification",
    "Post",
    "Profile",
    "Workout",
]
