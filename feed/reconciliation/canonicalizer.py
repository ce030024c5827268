"""Map raw collector rows onto the shared NotificationCandidate shape.

Canonicalization never fails on a missing relation: a like whose post was
deleted concurrently still canonicalizes with `post` left unset, and an
actor whose profile row is gone is represented by its id alone.
"""

from uuid import UUID

from feed.constants import LEGACY_FOLLOW_ID_PREFIX, LEGACY_LIKE_ID_PREFIX
from feed.enums import CandidateSource, NotificationType
from feed.schemas.notification import (
    Actor,
    FollowRequestRef,
    NotificationCandidate,
    PostRef,
    WorkoutRef,
)
from feed.schemas.rows import (
    FollowRow,
    LikeRow,
    NotificationRow,
    PostRow,
    ProfileRow,
    WorkoutRow,
)

UNKNOWN_USERNAME = "unknown"


def _actor(profile: ProfileRow | None, actor_id: UUID) -> Actor:
    if profile is None:
        return Actor(id=str(actor_id), username=UNKNOWN_USERNAME)
    return Actor(
        id=str(profile.id),
        username=profile.username,
        avatar_url=profile.avatar_url,
        is_verified=profile.is_verified,
    )


def _post(post: PostRow | None) -> PostRef | None:
    if post is None:
        return None
    return PostRef(id=str(post.id), image_url=post.image_url)


def _workout(workout: WorkoutRow | None) -> WorkoutRef | None:
    if workout is None:
        return None
    return WorkoutRef(id=str(workout.id), progress_image_url=workout.progress_image_url)


def canonicalize_notification(row: NotificationRow) -> NotificationCandidate:
    """Canonicalize a structured notification row.

    Raises:
        ValueError: If the row carries an unknown notification type.
    """
    kind = NotificationType(row.type)
    follow_request = None
    if kind is NotificationType.FOLLOW_REQUEST and row.follow_request is not None:
        follow_request = FollowRequestRef(
            id=str(row.follow_request.id),
            requester_id=str(row.follow_request.requester_id),
            requested_id=str(row.follow_request.requested_id),
        )

    return NotificationCandidate(
        id=str(row.notification_id),
        type=kind,
        created_at=row.created_at,
        read=row.is_read,
        actor=_actor(row.actor, row.actor_id),
        post=_post(row.post),
        workout=_workout(row.workout),
        follow_request=follow_request,
    )


def canonicalize_like(row: LikeRow) -> NotificationCandidate:
    """Canonicalize a legacy like row. Legacy candidates are always unread."""
    return NotificationCandidate(
        id=f"{LEGACY_LIKE_ID_PREFIX}{row.id}",
        type=NotificationType.LIKE,
        created_at=row.created_at,
        read=False,
        actor=_actor(row.user, row.user_id),
        post=_post(row.post),
    )


def canonicalize_follow(row: FollowRow) -> NotificationCandidate:
    """Canonicalize a legacy follow row."""
    return NotificationCandidate(
        id=f"{LEGACY_FOLLOW_ID_PREFIX}{row.id}",
        type=NotificationType.FOLLOW,
        created_at=row.created_at,
        read=False,
        actor=_actor(row.follower, row.follower_id),
    )


def source_of(candidate_id: str) -> CandidateSource:
    """Recover the collector a candidate came from using its id marker."""
    if candidate_id.startswith(LEGACY_LIKE_ID_PREFIX):
        return CandidateSource.LEGACY_LIKE
    if candidate_id.startswith(LEGACY_FOLLOW_ID_PREFIX):
        return CandidateSource.LEGACY_FOLLOW
    return CandidateSource.STRUCTURED
