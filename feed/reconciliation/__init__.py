"""Notification reconciliation: canonicalize, deduplicate, merge.

Everything in this package is synchronous and side-effect free.
"""

from feed.reconciliation.canonicalizer import (
    canonicalize_follow,
    canonicalize_like,
    canonicalize_notification,
    source_of,
)
from feed.reconciliation.dedup_key import DedupKey, dedup_key, dedup_key_for
from feed.reconciliation.merge import merge_candidates

__all__ = [
    "DedupKey",
    "canonicalize_follow",
    "canonicalize_like",
    "canonicalize_notification",
    "dedup_key",
    "dedup_key_for",
    "merge_candidates",
    "source_of",
]
