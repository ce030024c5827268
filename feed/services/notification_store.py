"""Authoritative notification store.

`NotificationStore` is the query/command interface the feed depends on;
`DjangoNotificationStore` implements it with the Django async ORM against
the tables owned by the main application.
"""

from typing import Protocol
from uuid import UUID

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

import structlog
from asgiref.sync import sync_to_async

from feed.constants import DEFAULT_LEGACY_FETCH_LIMIT, DEFAULT_STRUCTURED_FETCH_LIMIT
from feed.enums import CandidateSource
from feed.exceptions import ActionFailedError, SourceUnavailableError
from feed.models import Follower, FollowRequest, Like, Notification
from feed.schemas.rows import FollowRow, LikeRow, NotificationRow

logger = structlog.get_logger(__name__)


class NotificationStore(Protocol):
    """Reads and mutations the feed needs from the authoritative store.

    Fetches raise SourceUnavailableError and mutations raise
    ActionFailedError when the store cannot serve them.
    """

    async def fetch_structured_notifications(
        self, user_id: UUID
    ) -> list[NotificationRow]: ...

    async def fetch_likes_on_user_posts(self, user_id: UUID) -> list[LikeRow]: ...

    async def fetch_follows_of_user(self, user_id: UUID) -> list[FollowRow]: ...

    async def delete_structured_notification(
        self, notification_id: UUID, user_id: UUID
    ) -> None: ...

    async def accept_follow_request(
        self, requester_id: UUID, requested_id: UUID
    ) -> None: ...

    async def delete_follow_request(
        self, requester_id: UUID, requested_id: UUID
    ) -> None: ...

    async def mark_all_read(self, user_id: UUID) -> int: ...

    async def count_unread(self, user_id: UUID) -> int: ...


class DjangoNotificationStore:
    """NotificationStore backed by the Django ORM."""

    def __init__(
        self,
        legacy_limit: int | None = None,
        structured_limit: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            legacy_limit: Row cap for each legacy collector. Defaults to
                settings.FEED_LEGACY_FETCH_LIMIT.
            structured_limit: Row cap for the structured collector. Defaults
                to settings.FEED_STRUCTURED_FETCH_LIMIT.
        """
        self._legacy_limit = legacy_limit
        self._structured_limit = structured_limit

    @property
    def legacy_limit(self) -> int:
        if self._legacy_limit is not None:
            return self._legacy_limit
        return getattr(settings, "FEED_LEGACY_FETCH_LIMIT", DEFAULT_LEGACY_FETCH_LIMIT)

    @property
    def structured_limit(self) -> int:
        if self._structured_limit is not None:
            return self._structured_limit
        return getattr(
            settings, "FEED_STRUCTURED_FETCH_LIMIT", DEFAULT_STRUCTURED_FETCH_LIMIT
        )

    async def fetch_structured_notifications(
        self, user_id: UUID
    ) -> list[NotificationRow]:
        """Fetch the user's non-deleted structured notifications, newest first."""
        queryset = (
            Notification.objects.filter(user_id=user_id, is_deleted=False)
            .select_related("actor", "post", "workout", "follow_request")
            .order_by("-created_at")[: self.structured_limit]
        )
        try:
            return [NotificationRow.model_validate(row) async for row in queryset]
        except DatabaseError as e:
            raise SourceUnavailableError(
                CandidateSource.STRUCTURED.value, str(e)
            ) from e

    async def fetch_likes_on_user_posts(self, user_id: UUID) -> list[LikeRow]:
        """Fetch likes other profiles left on the user's posts."""
        queryset = (
            Like.objects.filter(post__user_id=user_id)
            .exclude(user_id=user_id)
            .select_related("user", "post")
            .order_by("-created_at")[: self.legacy_limit]
        )
        try:
            return [LikeRow.model_validate(row) async for row in queryset]
        except DatabaseError as e:
            raise SourceUnavailableError(
                CandidateSource.LEGACY_LIKE.value, str(e)
            ) from e

    async def fetch_follows_of_user(self, user_id: UUID) -> list[FollowRow]:
        """Fetch follow edges pointing at the user."""
        queryset = (
            Follower.objects.filter(following_id=user_id)
            .select_related("follower")
            .order_by("-created_at")[: self.legacy_limit]
        )
        try:
            return [FollowRow.model_validate(row) async for row in queryset]
        except DatabaseError as e:
            raise SourceUnavailableError(
                CandidateSource.LEGACY_FOLLOW.value, str(e)
            ) from e

    async def delete_structured_notification(
        self, notification_id: UUID, user_id: UUID
    ) -> None:
        """Soft-delete one of the user's structured notifications.

        Deleting a row that is already deleted is a no-op.
        """
        try:
            deleted = await Notification.objects.filter(
                notification_id=notification_id,
                user_id=user_id,
                is_deleted=False,
            ).aupdate(is_deleted=True, updated_at=timezone.now())
        except DatabaseError as e:
            raise ActionFailedError("delete", str(notification_id), str(e)) from e

        logger.info(
            "Structured notification deleted",
            notification_id=str(notification_id),
            deleted=bool(deleted),
        )

    async def accept_follow_request(
        self, requester_id: UUID, requested_id: UUID
    ) -> None:
        """Turn a pending follow request into a follow edge.

        Raises:
            ActionFailedError: If the request no longer exists or the
                transaction fails.
        """
        try:
            accepted = await sync_to_async(self._accept_follow_request)(
                requester_id, requested_id
            )
        except DatabaseError as e:
            raise ActionFailedError("accept", message=str(e)) from e

        if not accepted:
            raise ActionFailedError(
                "accept", message="Follow request no longer exists"
            )

        logger.info(
            "Follow request accepted",
            requester_id=str(requester_id),
            requested_id=str(requested_id),
        )

    async def delete_follow_request(
        self, requester_id: UUID, requested_id: UUID
    ) -> None:
        """Delete a pending follow request (decline)."""
        try:
            deleted = await sync_to_async(self._delete_follow_request)(
                requester_id, requested_id
            )
        except DatabaseError as e:
            raise ActionFailedError("decline", message=str(e)) from e

        logger.info(
            "Follow request declined",
            requester_id=str(requester_id),
            requested_id=str(requested_id),
            deleted=deleted,
        )

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark all unread structured notifications read.

        Returns:
            Number of notifications updated.
        """
        try:
            return await Notification.objects.filter(
                user_id=user_id,
                is_deleted=False,
                is_read=False,
            ).aupdate(is_read=True, updated_at=timezone.now())
        except DatabaseError as e:
            raise ActionFailedError("mark_all_read", message=str(e)) from e

    async def count_unread(self, user_id: UUID) -> int:
        """Count unread, non-deleted structured notifications."""
        try:
            return await Notification.objects.filter(
                user_id=user_id,
                is_deleted=False,
                is_read=False,
            ).acount()
        except DatabaseError as e:
            raise SourceUnavailableError(
                CandidateSource.STRUCTURED.value, str(e)
            ) from e

    @staticmethod
    def _retire_request_notifications(requester_id: UUID, requested_id: UUID) -> None:
        Notification.objects.filter(
            follow_request__requester_id=requester_id,
            follow_request__requested_id=requested_id,
            is_deleted=False,
        ).update(is_deleted=True, updated_at=timezone.now())

    @classmethod
    def _accept_follow_request(cls, requester_id: UUID, requested_id: UUID) -> bool:
        with transaction.atomic():
            requests = FollowRequest.objects.select_for_update().filter(
                requester_id=requester_id, requested_id=requested_id
            )
            if not requests.exists():
                return False
            cls._retire_request_notifications(requester_id, requested_id)
            requests.delete()
            Follower.objects.get_or_create(
                follower_id=requester_id, following_id=requested_id
            )
        return True

    @classmethod
    def _delete_follow_request(cls, requester_id: UUID, requested_id: UUID) -> bool:
        with transaction.atomic():
            cls._retire_request_notifications(requester_id, requested_id)
            deleted, _ = FollowRequest.objects.filter(
                requester_id=requester_id, requested_id=requested_id
            ).delete()
        return deleted > 0


notification_store = DjangoNotificationStore()
