"""Per-user record of dismissed legacy notifications.

Legacy likes and follows live in tables the feed may not delete from, so
deleting one records its dedup key here instead. The merge step drops any
candidate whose key is in the overlay. Entries are never evicted.
"""

from collections.abc import Callable, Iterable
from typing import Protocol
from uuid import UUID

from django.core.cache import caches

import structlog

from feed.constants import DISMISSAL_CACHE_ALIAS, DISMISSAL_CACHE_KEY_PREFIX
from feed.exceptions import OverlayUnavailableError
from feed.reconciliation import DedupKey

logger = structlog.get_logger(__name__)


class DismissalOverlayStore(Protocol):
    """Persistent key/value slot holding one user's dismissed keys."""

    async def get_dismissed_keys(self) -> list[str]: ...

    async def set_dismissed_keys(self, keys: list[str]) -> None: ...


class CacheDismissalStore:
    """Overlay store backed by a Django cache alias.

    The "dismissals" alias is configured as a non-expiring file cache so
    entries survive restarts.
    """

    def __init__(self, user_id: UUID, cache_alias: str = DISMISSAL_CACHE_ALIAS):
        self.cache_key = f"{DISMISSAL_CACHE_KEY_PREFIX}{user_id}"
        self.cache_alias = cache_alias

    async def get_dismissed_keys(self) -> list[str]:
        keys = await caches[self.cache_alias].aget(self.cache_key)
        return list(keys or [])

    async def set_dismissed_keys(self, keys: list[str]) -> None:
        await caches[self.cache_alias].aset(self.cache_key, list(keys), timeout=None)


class InMemoryDismissalStore:
    """Overlay store kept in process memory."""

    def __init__(self, keys: Iterable[str] = ()):
        self.keys = list(keys)

    async def get_dismissed_keys(self) -> list[str]:
        return list(self.keys)

    async def set_dismissed_keys(self, keys: list[str]) -> None:
        self.keys = list(keys)


class DismissalOverlay:
    """Set-like view over a DismissalOverlayStore."""

    def __init__(self, store: DismissalOverlayStore):
        self.store = store

    async def snapshot(self) -> frozenset[str]:
        """Read the dismissed keys once for a merge cycle.

        A read failure is logged and treated as an empty overlay so the
        feed still renders.
        """
        try:
            keys = await self.store.get_dismissed_keys()
        except Exception as e:
            logger.warning(
                "Dismissal overlay read failed, treating as empty",
                error=str(e),
                error_type=type(e).__name__,
            )
            return frozenset()
        return frozenset(keys)

    async def contains(self, key: DedupKey | str) -> bool:
        return str(key) in await self.snapshot()

    async def add(self, key: DedupKey | str) -> None:
        """Record a dismissal. Adding a key twice leaves the overlay unchanged.

        The update is a read-modify-write with no lock, so two concurrent adds
        for the same user from different workers can lose one of the keys.

        Raises:
            OverlayUnavailableError: If the store cannot be read or written.
        """
        value = str(key)
        try:
            keys = await self.store.get_dismissed_keys()
        except Exception as e:
            raise OverlayUnavailableError("read", str(e)) from e

        if value in keys:
            logger.debug("Dismissal already recorded", dedup_key=value)
            return

        try:
            await self.store.set_dismissed_keys([*keys, value])
        except Exception as e:
            raise OverlayUnavailableError("write", str(e)) from e

        logger.info("Dismissal recorded", dedup_key=value, overlay_size=len(keys) + 1)


OverlayFactory = Callable[[UUID], DismissalOverlay]


def overlay_for(user_id: UUID) -> DismissalOverlay:
    """Build the persistent overlay for a user."""
    return DismissalOverlay(CacheDismissalStore(user_id))
