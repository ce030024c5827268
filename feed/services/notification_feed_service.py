"""Notification feed assembly.

`NotificationFeedService` runs one merge cycle: it queries the three
collectors concurrently, canonicalizes their rows, reads the dismissal
overlay and merges. `NotificationFeed` holds one user's current list and
makes sure an older cycle never overwrites a newer one.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

import structlog

from feed.enums import CandidateSource
from feed.reconciliation import (
    canonicalize_follow,
    canonicalize_like,
    canonicalize_notification,
    merge_candidates,
)
from feed.schemas.notification import NotificationCandidate
from feed.services.dismissal_overlay import OverlayFactory, overlay_for
from feed.services.notification_store import NotificationStore, notification_store

logger = structlog.get_logger(__name__)


class NotificationFeedService:
    """Service producing the merged notification feed for a user."""

    def __init__(self, store: NotificationStore, overlay_factory: OverlayFactory):
        self.store = store
        self.overlay_factory = overlay_factory

    async def get_notification_feed(self, user_id: UUID) -> list[NotificationCandidate]:
        """Run one merge cycle for a user.

        A collector that is unavailable contributes nothing instead of
        failing the cycle.

        Args:
            user_id: Profile id of the feed owner

        Returns:
            Deduplicated candidates, newest first, without dismissed ones.
        """
        structured, likes, follows, dismissed = await asyncio.gather(
            self._collect(
                CandidateSource.STRUCTURED,
                self.store.fetch_structured_notifications,
                canonicalize_notification,
                user_id,
            ),
            self._collect(
                CandidateSource.LEGACY_LIKE,
                self.store.fetch_likes_on_user_posts,
                canonicalize_like,
                user_id,
            ),
            self._collect(
                CandidateSource.LEGACY_FOLLOW,
                self.store.fetch_follows_of_user,
                canonicalize_follow,
                user_id,
            ),
            self.overlay_factory(user_id).snapshot(),
        )

        feed = merge_candidates(structured, likes, follows, dismissed)
        logger.info(
            "Notification feed assembled",
            user_id=str(user_id),
            structured=len(structured),
            legacy_likes=len(likes),
            legacy_follows=len(follows),
            dismissed=len(dismissed),
            total=len(feed),
        )
        return feed

    def new_feed(self, user_id: UUID) -> "NotificationFeed":
        """Create an empty feed state for a user bound to this service."""
        return NotificationFeed(user_id, self)

    async def _collect(
        self,
        source: CandidateSource,
        fetch: Callable[[UUID], Awaitable[list[Any]]],
        canonicalize: Callable[[Any], NotificationCandidate],
        user_id: UUID,
    ) -> list[NotificationCandidate]:
        try:
            rows = await fetch(user_id)
        except Exception as e:
            # Any collector failure costs only that source, never the cycle
            logger.warning(
                "Notification source unavailable, using empty result",
                source=source.value,
                user_id=str(user_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        candidates = []
        for row in rows:
            try:
                candidates.append(canonicalize(row))
            except ValueError as e:
                logger.warning(
                    "Skipping row that could not be canonicalized",
                    source=source.value,
                    error=str(e),
                )
        return candidates


class NotificationFeed:
    """In-memory feed of one user.

    Every refresh starts a new cycle; a cycle that completes after a newer
    one was started is discarded.
    """

    def __init__(self, user_id: UUID, service: NotificationFeedService):
        self.user_id = user_id
        self.service = service
        self.items: list[NotificationCandidate] = []
        self._cycle_id = 0

    @property
    def cycle_id(self) -> int:
        return self._cycle_id

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self.items if not item.read)

    async def refresh(self) -> list[NotificationCandidate]:
        """Run a new merge cycle and publish its result if still current."""
        self._cycle_id += 1
        cycle_id = self._cycle_id
        items = await self.service.get_notification_feed(self.user_id)

        if cycle_id != self._cycle_id:
            logger.info(
                "Discarding stale feed cycle",
                user_id=str(self.user_id),
                cycle_id=cycle_id,
                current_cycle_id=self._cycle_id,
            )
            return self.items

        self.items = items
        return self.items

    def find(self, candidate_id: str) -> NotificationCandidate | None:
        for item in self.items:
            if item.id == candidate_id:
                return item
        return None

    def remove(self, candidate_id: str) -> tuple[NotificationCandidate, int] | None:
        """Remove an entry, returning it with its position for rollback."""
        for index, item in enumerate(self.items):
            if item.id == candidate_id:
                del self.items[index]
                return item, index
        return None

    def restore(self, candidate: NotificationCandidate, index: int) -> None:
        """Put an entry back at the position it was removed from."""
        if self.find(candidate.id) is not None:
            return
        self.items.insert(min(index, len(self.items)), candidate)


notification_feed_service = NotificationFeedService(notification_store, overlay_for)
