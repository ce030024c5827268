"""Display helpers for feed entries: action text and relative timestamps."""

from datetime import datetime

from feed.enums import NotificationType

ACTION_TEXT: dict[NotificationType, str] = {
    NotificationType.LIKE: "liked your post",
    NotificationType.FOLLOW: "started following you",
    NotificationType.COMMENT: "commented on your post",
    NotificationType.WORKOUT_LIKE: "liked your workout",
    NotificationType.FOLLOW_REQUEST: "requested to follow you",
}


def action_text(notification_type: NotificationType | str) -> str:
    """Return the sentence fragment shown after the actor's username."""
    try:
        return ACTION_TEXT[NotificationType(notification_type)]
    except ValueError:
        return ""


def relative_time_label(created_at: datetime, now: datetime) -> str:
    """Format how long ago a notification happened.

    Returns "Just now" under an hour, then "{n}h", "{n}d" and "{n}w", and
    a short date such as "Jan 5" from four weeks on.
    """
    hours = int((now - created_at).total_seconds() // 3600)
    days = hours // 24
    weeks = days // 7

    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours}h"
    if days < 7:
        return f"{days}d"
    if weeks < 4:
        return f"{weeks}w"
    return f"{created_at:%b} {created_at.day}"
