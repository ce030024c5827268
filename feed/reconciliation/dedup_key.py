"""Deterministic identity used to collapse duplicate notifications.

A key is built from the notification type and actor, extended with the
post id for post-related types and with the workout id for workout likes.
Keys are only ever built through `dedup_key`, so the merge step and the
dismissal overlay always agree on their shape.
"""

from dataclasses import dataclass

from feed.enums import NotificationType
from feed.schemas.notification import NotificationCandidate

KEY_SEPARATOR = ":"


@dataclass(frozen=True)
class DedupKey:
    """Identity of a notification across all sources."""

    type: NotificationType
    actor_id: str
    subject_id: str | None = None

    def __str__(self) -> str:
        parts = [self.type.value, self.actor_id]
        if self.subject_id is not None:
            parts.append(self.subject_id)
        return KEY_SEPARATOR.join(parts)


def dedup_key(
    notification_type: NotificationType | str,
    actor_id: str,
    post_id: str | None = None,
    workout_id: str | None = None,
) -> DedupKey:
    """Build the DedupKey for a notification.

    Args:
        notification_type: Notification type (enum or its value)
        actor_id: Profile id of the actor
        post_id: Referenced post id, used only for post-related types
        workout_id: Referenced workout id, used only for workout likes

    Returns:
        The DedupKey for the given fields.
    """
    kind = NotificationType(notification_type)
    subject_id: str | None = None
    if kind.is_post_related:
        subject_id = post_id
    elif kind is NotificationType.WORKOUT_LIKE:
        subject_id = workout_id
    return DedupKey(type=kind, actor_id=str(actor_id), subject_id=subject_id)


def dedup_key_for(candidate: NotificationCandidate) -> DedupKey:
    """Build the DedupKey of a canonical candidate."""
    return dedup_key(
        candidate.type,
        candidate.actor.id,
        post_id=candidate.post.id if candidate.post else None,
        workout_id=candidate.workout.id if candidate.workout else None,
    )
