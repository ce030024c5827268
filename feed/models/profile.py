"""Profile model."""

import uuid
from typing import ClassVar

from django.db import models


class Profile(models.Model):
    """Public user profile matching the profiles table.

    This model is unmanaged as the database schema is owned by another service.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=50, unique=True)
    avatar_url = models.URLField(max_length=500, null=True, blank=True)
    is_verified = models.BooleanField(default=False)
    is_private = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "profiles"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["username"]

    def __str__(self) -> str:
        """Return string representation of profile."""
        return self.username

    def __repr__(self) -> str:
        """Return detailed representation of profile."""
        return f"<Profile(id={self.id}, username='{self.username}')>"
