"""Post model."""

import uuid
from typing import ClassVar

from django.db import models


class Post(models.Model):
    """Image post matching the posts table."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="posts",
        db_column="user_id",
    )
    image_url = models.URLField(max_length=500)
    caption = models.TextField(default="", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "posts"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of post."""
        return f"Post {self.id} by {self.user_id}"
