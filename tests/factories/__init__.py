"""Test data builders for candidates, rows and ORM models."""

from datetime import UTC, datetime, timedelta
from itertools import count
from uuid import UUID, uuid4

from faker import Faker

from feed.enums import NotificationType
from feed.models import (
    Follower,
    FollowRequest,
    Like,
    Notification,
    Post,
    Profile,
    Workout,
)
from feed.schemas.notification import (
    Actor,
    FollowRequestRef,
    NotificationCandidate,
    PostRef,
    WorkoutRef,
)

fake = Faker()

BASE_TIME = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)

_row_ids = count(1)


def at(minutes: int) -> datetime:
    """Timestamp `minutes` after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def actor(actor_id: str | None = None, username: str | None = None) -> Actor:
    return Actor(id=actor_id or str(uuid4()), username=username or fake.user_name())


def candidate(
    notification_type: NotificationType = NotificationType.LIKE,
    *,
    candidate_id: str | None = None,
    actor_id: str = "actor-1",
    created_at: datetime = BASE_TIME,
    post_id: str | None = None,
    workout_id: str | None = None,
    follow_request: FollowRequestRef | None = None,
    read: bool = False,
) -> NotificationCandidate:
    """Build a candidate; structured UUID id unless `candidate_id` is given."""
    return NotificationCandidate(
        id=candidate_id or str(uuid4()),
        type=notification_type,
        created_at=created_at,
        read=read,
        actor=actor(actor_id),
        post=PostRef(id=post_id) if post_id else None,
        workout=WorkoutRef(id=workout_id) if workout_id else None,
        follow_request=follow_request,
    )


def legacy_like(
    actor_id: str, post_id: str, created_at: datetime
) -> NotificationCandidate:
    return candidate(
        NotificationType.LIKE,
        candidate_id=f"like_{next(_row_ids)}",
        actor_id=actor_id,
        post_id=post_id,
        created_at=created_at,
    )


def legacy_follow(actor_id: str, created_at: datetime) -> NotificationCandidate:
    return candidate(
        NotificationType.FOLLOW,
        candidate_id=f"follow_{next(_row_ids)}",
        actor_id=actor_id,
        created_at=created_at,
    )


def follow_request_candidate(
    requester_id: UUID, requested_id: UUID, created_at: datetime = BASE_TIME
) -> NotificationCandidate:
    return candidate(
        NotificationType.FOLLOW_REQUEST,
        actor_id=str(requester_id),
        created_at=created_at,
        follow_request=FollowRequestRef(
            id=str(next(_row_ids)),
            requester_id=str(requester_id),
            requested_id=str(requested_id),
        ),
    )


# ORM builders. created_at columns use auto_now_add, so timestamps are
# applied with an update after the insert.


def create_profile(**kwargs) -> Profile:
    kwargs.setdefault("username", fake.unique.user_name())
    return Profile.objects.create(**kwargs)


def create_post(user: Profile, **kwargs) -> Post:
    kwargs.setdefault("image_url", fake.image_url())
    return Post.objects.create(user=user, **kwargs)


def create_workout(user: Profile, **kwargs) -> Workout:
    return Workout.objects.create(user=user, **kwargs)


def _stamp(instance, created_at: datetime | None):
    if created_at is not None:
        type(instance).objects.filter(pk=instance.pk).update(created_at=created_at)
        instance.created_at = created_at
    return instance


def create_like(user: Profile, post: Post, created_at: datetime | None = None) -> Like:
    return _stamp(Like.objects.create(user=user, post=post), created_at)


def create_follower(
    follower: Profile, following: Profile, created_at: datetime | None = None
) -> Follower:
    return _stamp(
        Follower.objects.create(follower=follower, following=following), created_at
    )


def create_follow_request(requester: Profile, requested: Profile) -> FollowRequest:
    return FollowRequest.objects.create(requester=requester, requested=requested)


def create_notification(
    user: Profile,
    actor: Profile,
    notification_type: NotificationType,
    created_at: datetime | None = None,
    **kwargs,
) -> Notification:
    notification = Notification.objects.create(
        user=user, actor=actor, type=notification_type.value, **kwargs
    )
    return _stamp(notification, created_at)
