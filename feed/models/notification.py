"""Structured notification model.

This module defines the notification rows written by the main application.
They are the authoritative, already deduplicated source of the feed.
"""

import uuid
from typing import ClassVar

from django.db import models

from feed.enums import NotificationType


class Notification(models.Model):
    """Structured notification row.

    Attributes:
        notification_id: Unique identifier for the notification.
        user: The profile receiving this notification.
        actor: The profile whose action produced the notification.
        type: One of the NotificationType values.
        post: Post the notification refers to, for post-related types.
        workout: Workout the notification refers to, for workout likes.
        follow_request: Pending follow request, for follow_request rows.
        is_read: Whether the user has read this notification.
        is_deleted: Soft delete flag for user-initiated deletion.
        created_at: When the notification was created.
        updated_at: When the notification was last updated.
    """

    notification_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    user = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="user_id",
        help_text="Profile receiving the notification",
    )
    actor = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="caused_notifications",
        db_column="actor_id",
        help_text="Profile whose action produced the notification",
    )
    type = models.CharField(
        max_length=20,
        choices=[(t.value, t.value) for t in NotificationType],
        help_text="Notification type",
    )
    post = models.ForeignKey(
        "feed.Post",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        db_column="post_id",
    )
    workout = models.ForeignKey(
        "feed.Workout",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        db_column="workout_id",
    )
    follow_request = models.ForeignKey(
        "feed.FollowRequest",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
        db_column="follow_request_id",
    )
    is_read = models.BooleanField(
        default=False,
        help_text="Whether the notification has been read by the user",
    )
    is_deleted = models.BooleanField(
        default=False,
        help_text="Soft delete flag for user-initiated deletion",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the notification was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the notification was last updated",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["user", "-created_at"]),
            models.Index(fields=["user", "is_read", "-created_at"]),
            models.Index(fields=["user", "is_deleted", "-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.type} for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.notification_id}, "
            f"type={self.type}, "
            f"user={self.user_id}, "
            f"is_read={self.is_read})>"
        )
