"""Workout model."""

import uuid
from typing import ClassVar

from django.db import models


class Workout(models.Model):
    """Logged workout matching the workouts table."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="workouts",
        db_column="user_id",
    )
    progress_image_url = models.URLField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "workouts"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of workout."""
        return f"Workout {self.id} by {self.user_id}"
