"""FollowRequest model."""

from typing import ClassVar

from django.db import models


class FollowRequest(models.Model):
    """Pending request to follow a private profile (follow_requests table)."""

    requester = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="sent_follow_requests",
        db_column="requester_id",
    )
    requested = models.ForeignKey(
        "feed.Profile",
        on_delete=models.CASCADE,
        related_name="received_follow_requests",
        db_column="requested_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "follow_requests"
        managed = False  # Schema is managed externally
        unique_together: ClassVar[list[list[str]]] = [["requester", "requested"]]
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of follow request."""
        return f"{self.requester_id} requested to follow {self.requested_id}"
