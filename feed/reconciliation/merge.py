"""Merge, deduplicate and order notification candidates.

`merge_candidates` guarantees for its output:

- at most one candidate per DedupKey; on collision the later `created_at`
  wins and an exact tie keeps the candidate seen first (structured
  candidates are seen first);
- a `follow` from an actor drops any `follow_request` from the same actor;
- no candidate whose DedupKey is in the dismissal snapshot survives;
- candidates are ordered newest first. Equal timestamps are ordered by
  source (structured, legacy like, legacy follow) and then by id.
"""

from collections.abc import Iterable, Set

import structlog

from feed.enums import NotificationType
from feed.reconciliation.canonicalizer import source_of
from feed.reconciliation.dedup_key import DedupKey, dedup_key_for
from feed.schemas.notification import NotificationCandidate

logger = structlog.get_logger(__name__)


def _absorb(
    merged: dict[DedupKey, NotificationCandidate],
    candidates: Iterable[NotificationCandidate],
) -> int:
    """Insert candidates, keeping the most recent per key.

    Returns:
        Number of candidates discarded as duplicates.
    """
    discarded = 0
    for candidate in candidates:
        key = dedup_key_for(candidate)
        existing = merged.get(key)
        if existing is None:
            merged[key] = candidate
            continue
        discarded += 1
        if candidate.created_at > existing.created_at:
            merged[key] = candidate
    return discarded


def _apply_follow_precedence(merged: dict[DedupKey, NotificationCandidate]) -> int:
    followed_by = {
        key.actor_id for key in merged if key.type is NotificationType.FOLLOW
    }
    superseded = [
        key
        for key in merged
        if key.type is NotificationType.FOLLOW_REQUEST and key.actor_id in followed_by
    ]
    for key in superseded:
        del merged[key]
    return len(superseded)


def _sort_key(candidate: NotificationCandidate) -> tuple[int, str]:
    return (source_of(candidate.id).rank, candidate.id)


def merge_candidates(
    structured: Iterable[NotificationCandidate],
    legacy_likes: Iterable[NotificationCandidate],
    legacy_follows: Iterable[NotificationCandidate],
    dismissed: Set[str] = frozenset(),
) -> list[NotificationCandidate]:
    """Produce the final feed from all candidate sources.

    Args:
        structured: Candidates from structured notification rows
        legacy_likes: Candidates derived from like activity rows
        legacy_follows: Candidates derived from follow activity rows
        dismissed: Snapshot of dismissed DedupKey strings

    Returns:
        Deduplicated, non-dismissed candidates, newest first.
    """
    merged: dict[DedupKey, NotificationCandidate] = {}

    duplicates = _absorb(merged, structured)
    duplicates += _absorb(merged, legacy_likes)
    duplicates += _absorb(merged, legacy_follows)

    superseded = _apply_follow_precedence(merged)

    dismissed_keys = [key for key in merged if str(key) in dismissed]
    for key in dismissed_keys:
        del merged[key]

    # Two stable passes: tie-break order first, then newest first
    ordered = sorted(merged.values(), key=_sort_key)
    ordered.sort(key=lambda candidate: candidate.created_at, reverse=True)

    logger.debug(
        "Merged notification candidates",
        result_count=len(ordered),
        duplicates_discarded=duplicates,
        follow_requests_superseded=superseded,
        dismissed_filtered=len(dismissed_keys),
    )
    return ordered
