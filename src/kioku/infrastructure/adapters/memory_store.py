"""
In-Memory Repositories — Infrastructure adapters backed by plain dicts.

Used by the CLI and the test suite. Each call returns copies, so callers
only see their changes after saving them back, as with a real database.
"""

import logging
from dataclasses import replace

from kioku.domain.progress.models import LearnerProgress, ReviewSession
from kioku.domain.progress.ports import ProgressRepository, SessionRepository
from kioku.domain.review.models import ReviewableItem, ReviewLogEntry, ScheduleUpdate
from kioku.domain.review.ports import ItemRepository

logger = logging.getLogger(__name__)


class InMemoryItemRepository(ItemRepository):
    """Items keyed by (user_id, item_id); last writer wins."""

    def __init__(self):
        self._items: dict[tuple[str, str], ReviewableItem] = {}
        self.history: list[ReviewLogEntry] = []

    def add_item(self, user_id: str, item: ReviewableItem) -> None:
        self._items[(user_id, item.id)] = item

    async def get_item(self, user_id: str, item_id: str) -> ReviewableItem | None:
        return self._items.get((user_id, item_id))

    async def list_items(self, user_id: str) -> list[ReviewableItem]:
        return [item for (owner, _), item in self._items.items() if owner == user_id]

    async def save_schedule(self, user_id: str, item_id: str, update: ScheduleUpdate) -> None:
        key = (user_id, item_id)
        if key not in self._items:
            logger.warning(f"Ignoring schedule for unknown item {item_id}")
            return
        self._items[key] = replace(
            self._items[key],
            state=update.state,
            next_review_at=update.next_review_at,
            last_reviewed_at=update.last_reviewed_at,
        )

    async def append_review_log(self, entry: ReviewLogEntry) -> None:
        self.history.append(entry)


class InMemoryProgressRepository(ProgressRepository):
    def __init__(self):
        self._progress: dict[str, LearnerProgress] = {}

    async def get_progress(self, user_id: str) -> LearnerProgress | None:
        return self._progress.get(user_id)

    async def save_progress(self, user_id: str, progress: LearnerProgress) -> None:
        self._progress[user_id] = progress


class InMemorySessionRepository(SessionRepository):
    def __init__(self):
        self._sessions: dict[str, ReviewSession] = {}

    async def add_session(self, session: ReviewSession) -> None:
        self._sessions[session.id] = replace(session)

    async def get_session(self, user_id: str, session_id: str) -> ReviewSession | None:
        session = self._sessions.get(session_id)
        if session is None or session.user_id != user_id:
            return None
        return replace(session)

    async def save_session(self, session: ReviewSession) -> None:
        self._sessions[session.id] = replace(session)
