"""Unit tests for merge_candidates."""

import unittest

from feed.enums import NotificationType
from feed.reconciliation import dedup_key, dedup_key_for, merge_candidates
from tests.factories import at, candidate, legacy_follow, legacy_like


class TestMergeCandidates(unittest.TestCase):
    """Test cases for deduplication, precedence, dismissal and ordering."""

    def test_empty_sources_produce_empty_feed(self):
        self.assertEqual(merge_candidates([], [], []), [])

    def test_same_like_from_structured_and_legacy_collapses(self):
        structured = candidate(
            NotificationType.LIKE, actor_id="U1", post_id="P1", created_at=at(100)
        )
        legacy = legacy_like("U1", "P1", at(100))

        result = merge_candidates([structured], [legacy], [])

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].id, structured.id)

    def test_follow_supersedes_follow_request(self):
        request = candidate(
            NotificationType.FOLLOW_REQUEST, actor_id="U2", created_at=at(150)
        )
        follow = legacy_follow("U2", at(200))

        result = merge_candidates([request], [], [follow])

        self.assertEqual([c.id for c in result], [follow.id])

    def test_follow_supersedes_newer_follow_request(self):
        request = candidate(
            NotificationType.FOLLOW_REQUEST, actor_id="U2", created_at=at(300)
        )
        follow = legacy_follow("U2", at(200))

        result = merge_candidates([request], [], [follow])

        self.assertEqual([c.type for c in result], ["follow"])

    def test_structured_follow_supersedes_structured_follow_request(self):
        follow = candidate(NotificationType.FOLLOW, actor_id="U2", created_at=at(10))
        request = candidate(
            NotificationType.FOLLOW_REQUEST, actor_id="U2", created_at=at(5)
        )

        result = merge_candidates([request, follow], [], [])

        self.assertEqual([c.id for c in result], [follow.id])

    def test_follow_request_survives_unrelated_notifications_from_actor(self):
        request = candidate(
            NotificationType.FOLLOW_REQUEST, actor_id="U2", created_at=at(150)
        )
        like = legacy_like("U2", "P1", at(100))

        result = merge_candidates([request], [like], [])

        self.assertEqual({c.id for c in result}, {request.id, like.id})

    def test_follow_request_survives_follow_from_other_actor(self):
        request = candidate(
            NotificationType.FOLLOW_REQUEST, actor_id="U2", created_at=at(150)
        )
        follow = legacy_follow("U9", at(200))

        result = merge_candidates([request], [], [follow])

        self.assertEqual(len(result), 2)

    def test_likes_on_different_posts_are_distinct(self):
        first = legacy_like("U1", "P1", at(1))
        second = legacy_like("U1", "P2", at(2))

        result = merge_candidates([], [first, second], [])

        self.assertEqual(len(result), 2)

    def test_newer_duplicate_wins(self):
        older = legacy_like("U1", "P1", at(10))
        newer = legacy_like("U1", "P1", at(20))

        result = merge_candidates([], [older, newer], [])

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].created_at, at(20))

    def test_newer_legacy_replaces_structured(self):
        structured = candidate(
            NotificationType.LIKE, actor_id="U1", post_id="P1", created_at=at(10)
        )
        legacy = legacy_like("U1", "P1", at(20))

        result = merge_candidates([structured], [legacy], [])

        self.assertEqual([c.id for c in result], [legacy.id])

    def test_equal_timestamp_keeps_structured(self):
        structured = candidate(
            NotificationType.FOLLOW, actor_id="U4", created_at=at(50)
        )
        legacy = legacy_follow("U4", at(50))

        result = merge_candidates([structured], [], [legacy])

        self.assertEqual([c.id for c in result], [structured.id])

    def test_dismissed_keys_are_filtered(self):
        like = legacy_like("U3", "P3", at(10))
        follow = legacy_follow("U5", at(20))
        dismissed = {str(dedup_key(NotificationType.LIKE, "U3", post_id="P3"))}

        result = merge_candidates([], [like], [follow], dismissed)

        self.assertEqual([c.id for c in result], [follow.id])

    def test_dismissal_applies_to_structured_duplicate(self):
        structured = candidate(
            NotificationType.LIKE, actor_id="U3", post_id="P3", created_at=at(10)
        )
        legacy = legacy_like("U3", "P3", at(10))

        result = merge_candidates(
            [structured], [legacy], [], {str(dedup_key_for(legacy))}
        )

        self.assertEqual(result, [])

    def test_output_is_newest_first(self):
        items = [
            legacy_like("U1", "P1", at(5)),
            legacy_like("U2", "P1", at(50)),
            legacy_like("U3", "P1", at(20)),
        ]
        follows = [legacy_follow("U4", at(35))]

        result = merge_candidates([], items, follows)

        self.assertEqual(
            [c.created_at for c in result], [at(50), at(35), at(20), at(5)]
        )

    def test_timestamp_ties_order_by_source_then_id(self):
        follow = legacy_follow("U1", at(0))
        like_b = candidate(
            NotificationType.LIKE,
            candidate_id="like_9",
            actor_id="U2",
            post_id="P1",
            created_at=at(0),
        )
        like_a = candidate(
            NotificationType.LIKE,
            candidate_id="like_10",
            actor_id="U3",
            post_id="P1",
            created_at=at(0),
        )
        structured = candidate(
            NotificationType.COMMENT, actor_id="U4", post_id="P1", created_at=at(0)
        )

        result = merge_candidates([structured], [like_b, like_a], [follow])

        self.assertEqual(
            [c.id for c in result], [structured.id, "like_10", "like_9", follow.id]
        )

    def test_output_keys_are_unique_for_mixed_inputs(self):
        structured = [
            candidate(
                NotificationType.LIKE, actor_id="U1", post_id="P1", created_at=at(1)
            ),
            candidate(NotificationType.FOLLOW, actor_id="U2", created_at=at(2)),
            candidate(NotificationType.FOLLOW_REQUEST, actor_id="U3", created_at=at(3)),
        ]
        likes = [legacy_like("U1", "P1", at(4)), legacy_like("U1", "P1", at(0))]
        follows = [legacy_follow("U2", at(1)), legacy_follow("U3", at(9))]

        result = merge_candidates(structured, likes, follows)

        keys = [dedup_key_for(c) for c in result]
        self.assertEqual(len(keys), len(set(keys)))
        self.assertNotIn("follow_request", [c.type for c in result])
        self.assertEqual(
            [c.created_at for c in result],
            sorted((c.created_at for c in result), reverse=True),
        )

    def test_inputs_are_not_mutated(self):
        likes = [legacy_like("U1", "P1", at(1)), legacy_like("U1", "P1", at(2))]
        snapshot = list(likes)

        merge_candidates([], likes, [])

        self.assertEqual(likes, snapshot)


if __name__ == "__main__":
    unittest.main()
