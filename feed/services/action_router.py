"""Routes user actions on feed entries to the right backend.

Deletes go to the authoritative store for structured entries and to the
dismissal overlay for legacy ones. Accept and decline resolve the follow
request behind a follow_request entry. All actions update the feed
optimistically; failures either resynchronize or roll back.
"""

from collections.abc import Awaitable, Callable
from uuid import UUID

from django.core.exceptions import PermissionDenied

import structlog

from feed.enums import ActionOutcome
from feed.exceptions import ActionFailedError, FeedError
from feed.reconciliation import dedup_key_for, source_of
from feed.schemas.notification import NotificationCandidate
from feed.services.dismissal_overlay import OverlayFactory, overlay_for
from feed.services.notification_feed_service import NotificationFeed
from feed.services.notification_store import NotificationStore, notification_store

logger = structlog.get_logger(__name__)


def _parse_uuid(value: str, action: str, notification_id: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise ActionFailedError(
            action, notification_id, f"Malformed identifier: {value}"
        ) from e


class NotificationActionRouter:
    """Dispatches delete, accept and decline actions."""

    def __init__(self, store: NotificationStore, overlay_factory: OverlayFactory):
        self.store = store
        self.overlay_factory = overlay_factory
        self._in_flight: set[str] = set()

    def is_in_flight(self, candidate_id: str) -> bool:
        return candidate_id in self._in_flight

    async def delete_notification(
        self, feed: NotificationFeed, candidate: NotificationCandidate
    ) -> ActionOutcome:
        """Delete an entry from the feed.

        The entry is removed from the feed before the backend call. If the
        call fails the feed is re-fetched so it matches the backends again.

        Returns:
            APPLIED on success, RESYNCED if the feed had to be re-fetched.
        """
        feed.remove(candidate.id)

        try:
            if source_of(candidate.id).is_legacy:
                await self.overlay_factory(feed.user_id).add(dedup_key_for(candidate))
            else:
                notification_id = _parse_uuid(candidate.id, "delete", candidate.id)
                await self.store.delete_structured_notification(
                    notification_id, feed.user_id
                )
        except FeedError as e:
            logger.warning(
                "Notification delete failed, resynchronizing feed",
                notification_id=candidate.id,
                user_id=str(feed.user_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            await feed.refresh()
            return ActionOutcome.RESYNCED

        logger.info(
            "Notification deleted",
            notification_id=candidate.id,
            user_id=str(feed.user_id),
        )
        return ActionOutcome.APPLIED

    async def accept_follow_request(
        self, feed: NotificationFeed, candidate: NotificationCandidate
    ) -> ActionOutcome:
        """Accept the follow request behind a follow_request entry."""
        return await self._resolve_follow_request(
            feed, candidate, "accept", self.store.accept_follow_request
        )

    async def decline_follow_request(
        self, feed: NotificationFeed, candidate: NotificationCandidate
    ) -> ActionOutcome:
        """Decline the follow request behind a follow_request entry."""
        return await self._resolve_follow_request(
            feed, candidate, "decline", self.store.delete_follow_request
        )

    async def _resolve_follow_request(
        self,
        feed: NotificationFeed,
        candidate: NotificationCandidate,
        action: str,
        call: Callable[[UUID, UUID], Awaitable[None]],
    ) -> ActionOutcome:
        if candidate.id in self._in_flight:
            logger.info(
                "Follow request action already in flight, ignoring",
                action=action,
                notification_id=candidate.id,
            )
            return ActionOutcome.SUPPRESSED

        payload = candidate.follow_request
        if payload is None:
            raise ActionFailedError(
                action, candidate.id, "Notification has no follow request"
            )

        requester_id = _parse_uuid(payload.requester_id, action, candidate.id)
        requested_id = _parse_uuid(payload.requested_id, action, candidate.id)
        if requested_id != feed.user_id:
            raise PermissionDenied("Follow request is addressed to another user")

        self._in_flight.add(candidate.id)
        removed = feed.remove(candidate.id)
        try:
            await call(requester_id, requested_id)
        except FeedError as e:
            if removed is not None:
                feed.restore(*removed)
            logger.warning(
                "Follow request action failed, entry restored",
                action=action,
                notification_id=candidate.id,
                error=str(e),
            )
            if isinstance(e, ActionFailedError):
                raise
            raise ActionFailedError(action, candidate.id, str(e)) from e
        finally:
            self._in_flight.discard(candidate.id)

        logger.info(
            "Follow request resolved",
            action=action,
            notification_id=candidate.id,
            requester_id=str(requester_id),
        )
        return ActionOutcome.APPLIED


notification_action_router = NotificationActionRouter(notification_store, overlay_for)
