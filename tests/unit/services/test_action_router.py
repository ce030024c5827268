"""Unit tests for NotificationActionRouter."""

import asyncio
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

from django.core.exceptions import PermissionDenied
from django.test import SimpleTestCase

from feed.enums import ActionOutcome, NotificationType
from feed.exceptions import ActionFailedError
from feed.reconciliation import dedup_key_for
from feed.schemas.rows import LikeRow, NotificationRow, PostRow, ProfileRow
from feed.services.action_router import NotificationActionRouter
from feed.services.dismissal_overlay import DismissalOverlay, InMemoryDismissalStore
from feed.services.notification_feed_service import NotificationFeedService
from tests.factories import at, candidate, follow_request_candidate, legacy_follow
from tests.fakes import FakeNotificationStore


class RouterTestCase(SimpleTestCase):
    """Shared wiring: fake store, in-memory overlay, one user's feed."""

    def setUp(self):
        """Set up test fixtures."""
        self.user_id = uuid4()
        self.store = FakeNotificationStore()
        self.overlay_store = InMemoryDismissalStore()
        def overlay_factory(_user_id):
            return DismissalOverlay(self.overlay_store)

        self.service = NotificationFeedService(self.store, overlay_factory)
        self.router = NotificationActionRouter(self.store, overlay_factory)
        self.feed = self.service.new_feed(self.user_id)


class TestDeleteNotification(RouterTestCase):
    """Test cases for delete routing."""

    async def test_structured_delete_goes_to_store(self):
        target = candidate(NotificationType.COMMENT, post_id="P1")
        self.feed.items = [target]

        outcome = await self.router.delete_notification(self.feed, target)

        self.assertEqual(outcome, ActionOutcome.APPLIED)
        self.assertEqual(self.feed.items, [])
        self.assertEqual(
            self.store.mutations("delete_structured_notification"),
            [("delete_structured_notification", UUID(target.id), self.user_id)],
        )
        self.assertEqual(self.overlay_store.keys, [])

    async def test_legacy_delete_goes_to_overlay(self):
        target = legacy_follow("U1", at(1))
        self.feed.items = [target]

        outcome = await self.router.delete_notification(self.feed, target)

        self.assertEqual(outcome, ActionOutcome.APPLIED)
        self.assertEqual(self.overlay_store.keys, [str(dedup_key_for(target))])
        self.assertEqual(self.store.mutations("delete_structured_notification"), [])

    async def test_deleted_legacy_like_stays_hidden_next_cycle(self):
        liker = ProfileRow(id=uuid4(), username="u3")
        post_id = uuid4()
        self.store.likes = [
            LikeRow(
                id=11,
                created_at=at(5),
                user_id=liker.id,
                user=liker,
                post_id=post_id,
                post=PostRow(id=post_id),
            )
        ]
        await self.feed.refresh()
        target = self.feed.items[0]

        await self.router.delete_notification(self.feed, target)
        await self.feed.refresh()

        self.assertEqual(self.feed.items, [])
        self.assertIn(str(dedup_key_for(target)), self.overlay_store.keys)

    async def test_structured_delete_does_not_dismiss_legacy_duplicate(self):
        liker = ProfileRow(id=uuid4(), username="u1")
        post_id = uuid4()
        self.store.structured = [
            NotificationRow(
                notification_id=uuid4(),
                type="like",
                created_at=at(5),
                actor_id=liker.id,
                actor=liker,
                post=PostRow(id=post_id),
            )
        ]
        self.store.likes = [
            LikeRow(
                id=12,
                created_at=at(5),
                user_id=liker.id,
                user=liker,
                post_id=post_id,
                post=PostRow(id=post_id),
            )
        ]
        await self.feed.refresh()
        target = self.feed.items[0]

        await self.router.delete_notification(self.feed, target)
        # The soft-deleted row is no longer served by the structured collector
        self.store.structured = []
        await self.feed.refresh()

        self.assertEqual(self.overlay_store.keys, [])
        self.assertEqual([c.id for c in self.feed.items], ["like_12"])

    async def test_store_failure_resynchronizes(self):
        self.store.fail_actions = {"delete_structured_notification"}
        target = candidate(NotificationType.FOLLOW)
        self.feed.items = [target]

        outcome = await self.router.delete_notification(self.feed, target)

        self.assertEqual(outcome, ActionOutcome.RESYNCED)
        self.assertIn(("fetch_structured_notifications",), self.store.calls)
        self.assertEqual(self.feed.cycle_id, 1)

    async def test_overlay_failure_resynchronizes(self):
        failing = AsyncMock()
        failing.get_dismissed_keys.return_value = []
        failing.set_dismissed_keys.side_effect = OSError("disk full")
        router = NotificationActionRouter(
            self.store, lambda _user_id: DismissalOverlay(failing)
        )
        target = legacy_follow("U1", at(1))
        self.feed.items = [target]

        outcome = await router.delete_notification(self.feed, target)

        self.assertEqual(outcome, ActionOutcome.RESYNCED)
        self.assertEqual(self.feed.cycle_id, 1)

    async def test_malformed_structured_id_resynchronizes(self):
        target = candidate(NotificationType.FOLLOW, candidate_id="not-a-uuid")
        self.feed.items = [target]

        outcome = await self.router.delete_notification(self.feed, target)

        self.assertEqual(outcome, ActionOutcome.RESYNCED)
        self.assertEqual(self.store.mutations("delete_structured_notification"), [])


class TestFollowRequestActions(RouterTestCase):
    """Test cases for accept and decline routing."""

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.requester_id = uuid4()
        self.request = follow_request_candidate(self.requester_id, self.user_id)
        self.before = legacy_follow("U1", at(10))
        self.after = legacy_follow("U2", at(-10))
        self.feed.items = [self.before, self.request, self.after]

    async def test_accept_calls_backend_and_removes_entry(self):
        outcome = await self.router.accept_follow_request(self.feed, self.request)

        self.assertEqual(outcome, ActionOutcome.APPLIED)
        self.assertEqual(self.feed.items, [self.before, self.after])
        self.assertEqual(
            self.store.mutations("accept_follow_request"),
            [("accept_follow_request", self.requester_id, self.user_id)],
        )
        self.assertFalse(self.router.is_in_flight(self.request.id))

    async def test_decline_deletes_follow_request(self):
        outcome = await self.router.decline_follow_request(self.feed, self.request)

        self.assertEqual(outcome, ActionOutcome.APPLIED)
        self.assertEqual(len(self.store.mutations("delete_follow_request")), 1)
        self.assertEqual(self.store.mutations("accept_follow_request"), [])

    async def test_failure_restores_entry_and_raises(self):
        self.store.fail_actions = {"accept_follow_request"}

        with self.assertRaises(ActionFailedError):
            await self.router.accept_follow_request(self.feed, self.request)

        self.assertEqual(self.feed.items, [self.before, self.request, self.after])
        self.assertFalse(self.router.is_in_flight(self.request.id))

    async def test_concurrent_duplicate_is_suppressed(self):
        self.store.gate = asyncio.Event()
        first = asyncio.ensure_future(
            self.router.accept_follow_request(self.feed, self.request)
        )
        await asyncio.sleep(0)

        self.assertTrue(self.router.is_in_flight(self.request.id))
        second = await self.router.decline_follow_request(self.feed, self.request)
        self.store.gate.set()

        self.assertEqual(second, ActionOutcome.SUPPRESSED)
        self.assertEqual(await first, ActionOutcome.APPLIED)
        self.assertEqual(len(self.store.mutations("accept_follow_request")), 1)
        self.assertEqual(self.store.mutations("delete_follow_request"), [])

    async def test_retry_allowed_after_failure(self):
        self.store.fail_actions = {"accept_follow_request"}
        with self.assertRaises(ActionFailedError):
            await self.router.accept_follow_request(self.feed, self.request)

        self.store.fail_actions = set()
        outcome = await self.router.accept_follow_request(self.feed, self.request)

        self.assertEqual(outcome, ActionOutcome.APPLIED)

    async def test_missing_payload_raises_without_backend_call(self):
        target = candidate(NotificationType.FOLLOW_REQUEST)
        self.feed.items.append(target)

        with self.assertRaises(ActionFailedError):
            await self.router.accept_follow_request(self.feed, target)

        self.assertEqual(self.store.mutations("accept_follow_request"), [])
        self.assertIn(target, self.feed.items)

    async def test_request_for_another_user_is_denied(self):
        foreign = follow_request_candidate(self.requester_id, uuid4())

        with self.assertRaises(PermissionDenied):
            await self.router.accept_follow_request(self.feed, foreign)

        self.assertEqual(self.store.calls, [])
