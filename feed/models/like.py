"""Like model."""

from typing import ClassVar

from django.db import models


class Like(models.Model):
    """A profile liking a post, matching the likes table.

    This is a legacy activity table: like notifications are derived from its
    rows and cannot be deleted server-side.
    """

    user = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="likes",
        db_column="user_id",
    )
    post = models.ForeignKey(
        "feed.Post",
        on_delete=models.CASCADE,
        related_name="likes",
        db_column="post_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "likes"
        managed = False  # Schema is managed externally
        unique_together: ClassVar[list[list[str]]] = [["user", "post"]]
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of like."""
        return f"{self.user_id} likes {self.post_id}"
