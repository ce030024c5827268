"""Follower model."""

from typing import ClassVar

from django.db import models


class Follower(models.Model):
    """Follow edge between two profiles, matching the followers table.

    This is a legacy activity table: follow notifications are derived from
    its rows and cannot be deleted server-side.
    """

    follower = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="following_edges",
        db_column="follower_id",
    )
    following = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="follower_edges",
        db_column="following_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "followers"
        managed = False  # Schema is managed externally
        unique_together: ClassVar[list[list[str]]] = [["follower", "following"]]
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of follow relationship."""
        return f"{self.follower_id} follows {self.following_id}"

    def __repr__(self) -> str:
        """Return detailed representation of follow relationship."""
        return (
            f"<Follower(follower={self.follower_id}, "
            f"following={self.following_id})>"
        )
