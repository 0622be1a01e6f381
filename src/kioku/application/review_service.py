"""
Review Service — Application layer orchestrator for review sessions.

Runs the review-submission workflow: load the item, schedule it, record the
review, and credit the learner's progress. The scheduling math itself lives
in kioku.application.scheduler and stays pure.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field
from ulid import ULID

from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.application.progress.streak import today_date_string
from kioku.application.progress.tracker import apply_review, apply_session_completion
from kioku.application.queue_builder import QueueBuildResult, build_review_queue
from kioku.application.scheduler.review import get_grade_options, process_review
from kioku.application.utils.numbers import accuracy_percent
from kioku.domain.constants import DEFAULT_DAILY_GOAL, DEFAULT_QUEUE_LIMIT
from kioku.domain.exceptions import ItemNotFoundError, SessionNotFoundError
from kioku.domain.progress.models import (
    LearnerProgress,
    ReviewSession,
    SessionSummary,
    SessionType,
)
from kioku.domain.progress.ports import ProgressRepository, SessionRepository
from kioku.domain.review.models import Grade, GradeOption, ReviewLogEntry, ScheduleUpdate
from kioku.domain.review.ports import ItemRepository

logger = logging.getLogger(__name__)


class ReviewSubmission(BaseModel):
    """A single graded answer, as submitted by the review UI."""

    session_id: str
    item_id: str
    item_type: Literal["kanji", "vocab"]
    question_type: Literal["meaning", "reading"]
    grade: Grade
    response_time_ms: int | None = Field(default=None, gt=0)
    consecutive_correct: int = Field(default=0, ge=0)


@dataclass(frozen=True)
class ReviewResult:
    xp_earned: int
    was_correct: bool
    update: ScheduleUpdate


def generate_session_id() -> str:
    """Generate a sortable session ID using ULID."""
    return f"session_{ULID()}"


class ReviewService:
    """
    Application service for review sessions.

    Holds no state of its own besides its collaborators, so one instance
    can serve concurrent requests.
    """

    def __init__(
        self,
        items: ItemRepository,
        progress: ProgressRepository,
        sessions: SessionRepository,
        settings: SchedulerSettings | None = None,
        daily_goal: int = DEFAULT_DAILY_GOAL,
        queue_limit: int = DEFAULT_QUEUE_LIMIT,
    ):
        """
        Args:
            items: Repository (port) for reviewable items.
            progress: Repository (port) for learner progress.
            sessions: Repository (port) for review sessions.
            settings: Tuning overrides for scheduling and XP.
            daily_goal: Goal given to learners on their first progress record.
            queue_limit: Queue size used when get_queue is called without a limit.
        """
        self._items = items
        self._progress = progress
        self._sessions = sessions
        self._settings = settings or DEFAULT_SETTINGS
        self._daily_goal = daily_goal
        self._queue_limit = queue_limit

    async def start_session(
        self, user_id: str, session_type: SessionType, now: datetime | None = None
    ) -> ReviewSession:
        if session_type not in ("kanji", "vocab", "mixed"):
            raise ValueError(f"Unknown session type: {session_type!r}")

        session = ReviewSession(
            id=generate_session_id(),
            user_id=user_id,
            session_type=session_type,
            started_at=now or datetime.now(timezone.utc),
        )
        await self._sessions.add_session(session)
        logger.info(f"Started {session_type} session {session.id} for {user_id}")
        return session

    async def submit_review(
        self,
        user_id: str,
        submission: ReviewSubmission | dict,
        now: datetime | None = None,
    ) -> ReviewResult:
        """
        Apply one graded review.

        Raises:
            pydantic.ValidationError: Malformed submission.
            ItemNotFoundError: The learner has no item of that type with that id.
            SessionNotFoundError: The session does not belong to the learner.
        """
        if not isinstance(submission, ReviewSubmission):
            submission = ReviewSubmission.model_validate(submission)
        now = now or datetime.now(timezone.utc)
        today = today_date_string(now)

        item = await self._items.get_item(user_id, submission.item_id)
        if item is None or item.item_type != submission.item_type:
            raise ItemNotFoundError(user_id, submission.item_id)

        session = await self._sessions.get_session(user_id, submission.session_id)
        if session is None:
            raise SessionNotFoundError(user_id, submission.session_id)

        grade = submission.grade
        update = process_review(grade, item.state, now, self._settings)
        await self._items.save_schedule(user_id, item.id, update)

        await self._items.append_review_log(
            ReviewLogEntry(
                user_id=user_id,
                session_id=session.id,
                item_id=item.id,
                item_type=submission.item_type,
                question_type=submission.question_type,
                quality=grade.quality,
                was_correct=grade.is_correct,
                reviewed_at=now,
                response_time_ms=submission.response_time_ms,
            )
        )

        credited = apply_review(
            await self._load_progress(user_id),
            grade,
            today,
            submission.consecutive_correct,
            self._settings,
        )
        await self._progress.save_progress(user_id, credited.progress)

        session.items_reviewed += 1
        if grade.is_correct:
            session.items_correct += 1
        session.xp_earned += credited.xp_earned
        await self._sessions.save_session(session)

        logger.info(
            f"Reviewed {item.id} ({grade.value}) for {user_id}: "
            f"next in {update.interval_days}d, {update.confidence_level.value}, "
            f"+{credited.xp_earned} XP"
        )
        return ReviewResult(xp_earned=credited.xp_earned, was_correct=grade.is_correct, update=update)

    async def complete_session(
        self, user_id: str, session_id: str, now: datetime | None = None
    ) -> SessionSummary:
        """
        Close a session and award the completion bonus.

        The bonus is paid whatever the session contained. Completing an already
        completed session returns its summary without awarding the bonus again.
        """
        now = now or datetime.now(timezone.utc)
        session = await self._sessions.get_session(user_id, session_id)
        if session is None:
            raise SessionNotFoundError(user_id, session_id)

        if session.is_completed:
            logger.warning(f"Session {session_id} already completed; not re-awarding XP")
            return self._summarize(session)

        credited = apply_session_completion(
            await self._load_progress(user_id), today_date_string(now), self._settings
        )
        await self._progress.save_progress(user_id, credited.progress)
        session.xp_earned += credited.xp_earned

        session.completed_at = now
        await self._sessions.save_session(session)
        logger.info(f"Completed session {session_id}: {session.items_reviewed} reviewed")
        return self._summarize(session)

    async def get_queue(
        self,
        user_id: str,
        queue_type: SessionType = "mixed",
        limit: int | None = None,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> QueueBuildResult:
        """Due items to study next, plus the learner's full due counts."""
        now = now or datetime.now(timezone.utc)
        items = await self._items.list_items(user_id)
        result = build_review_queue(
            items, now, queue_type, self._queue_limit if limit is None else limit, rng
        )
        logger.info(
            f"Built {queue_type} queue of {len(result.items)} for {user_id} "
            f"({result.total_due.total} due)"
        )
        return result

    async def preview(
        self, user_id: str, item_id: str, streak_bonus: int = 0
    ) -> list[GradeOption]:
        """Grade button previews for an item."""
        item = await self._items.get_item(user_id, item_id)
        if item is None:
            raise ItemNotFoundError(user_id, item_id)
        return get_grade_options(item.state, streak_bonus, self._settings)

    async def _load_progress(self, user_id: str) -> LearnerProgress:
        progress = await self._progress.get_progress(user_id)
        if progress is None:
            logger.info(f"Creating progress for {user_id}")
            return LearnerProgress(daily_goal=self._daily_goal)
        return progress

    def _summarize(self, session: ReviewSession) -> SessionSummary:
        completed_at = session.completed_at
        duration = completed_at - session.started_at
        return SessionSummary(
            session_id=session.id,
            items_reviewed=session.items_reviewed,
            items_correct=session.items_correct,
            accuracy=accuracy_percent(session.items_correct, session.items_reviewed),
            xp_earned=session.xp_earned,
            duration_ms=int(duration.total_seconds() * 1000),
            completed_at=completed_at,
        )
