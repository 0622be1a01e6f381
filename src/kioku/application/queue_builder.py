"""
Queue builder for review sessions.

Builds the list of items to study by:
1. Keeping only items that are due (overdue or never scheduled)
2. Ordering overdue items by due time, never-scheduled items last
3. Splitting the limit between kanji and vocab for mixed sessions
"""

import logging
import math
import random
from dataclasses import dataclass
from datetime import datetime

from kioku.domain.constants import DEFAULT_QUEUE_LIMIT, MAX_QUEUE_LIMIT
from kioku.domain.review.models import ReviewableItem

logger = logging.getLogger(__name__)

QUEUE_TYPES = ("kanji", "vocab", "mixed")


@dataclass
class DueCounts:
    kanji: int = 0
    vocab: int = 0

    @property
    def total(self) -> int:
        return self.kanji + self.vocab


@dataclass
class QueueBuildResult:
    """Result of queue building operation."""

    items: list[ReviewableItem]  # Items to review, in presentation order
    total_due: DueCounts  # Everything due, not just what fit in the queue


def build_review_queue(
    items: list[ReviewableItem],
    now: datetime,
    queue_type: str = "mixed",
    limit: int = DEFAULT_QUEUE_LIMIT,
    rng: random.Random | None = None,
) -> QueueBuildResult:
    """
    Build a review queue from a learner's items.

    Args:
        items: All items owned by the learner.
        now: Reference instant for deciding what is due.
        queue_type: 'kanji', 'vocab' or 'mixed'.
        limit: Maximum queue size, clamped to [1, MAX_QUEUE_LIMIT].
        rng: Random source used to interleave mixed queues.

    Returns:
        QueueBuildResult with the ordered queue and due counts.
    """
    if queue_type not in QUEUE_TYPES:
        raise ValueError(f"queue_type must be one of {QUEUE_TYPES}, got {queue_type!r}")
    limit = max(1, min(limit, MAX_QUEUE_LIMIT))

    due_kanji = _sorted_due(items, now, "kanji")
    due_vocab = _sorted_due(items, now, "vocab")
    total_due = DueCounts(kanji=len(due_kanji), vocab=len(due_vocab))

    queue: list[ReviewableItem] = []

    if queue_type in ("kanji", "mixed"):
        kanji_limit = math.ceil(limit / 2) if queue_type == "mixed" else limit
        queue.extend(due_kanji[:kanji_limit])

    if queue_type in ("vocab", "mixed"):
        remaining = max(limit - len(queue), limit // 2) if queue_type == "mixed" else limit
        queue.extend(due_vocab[:remaining])

    # Interleave so a mixed session is not all-kanji-then-all-vocab
    if queue_type == "mixed" and len(queue) > 1:
        (rng or random.Random()).shuffle(queue)

    logger.debug(f"Built {queue_type} queue: {len(queue)} of {total_due.total} due")
    return QueueBuildResult(items=queue[:limit], total_due=total_due)


def _sorted_due(items: list[ReviewableItem], now: datetime, item_type: str) -> list[ReviewableItem]:
    """
    Due items of one type: scheduled ones by due time, then never-scheduled ones.
    """
    scheduled = [
        item
        for item in items
        if item.item_type == item_type and item.next_review_at is not None and item.is_due(now)
    ]
    unscheduled = [
        item for item in items if item.item_type == item_type and item.next_review_at is None
    ]
    scheduled.sort(key=lambda item: item.next_review_at)
    return scheduled + unscheduled
