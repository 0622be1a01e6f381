"""
Learner Stats Service — Application layer orchestrator.

Coordinates fetching items and progress from the repositories and
summarizing them with computed metrics.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.application.progress.streak import today_date_string
from kioku.application.progress.tracker import daily_reviews_for
from kioku.application.progress.xp import calculate_level, get_level_title
from kioku.application.queue_builder import DueCounts
from kioku.application.utils.numbers import accuracy_percent
from kioku.domain.constants import DEFAULT_DAILY_GOAL
from kioku.domain.progress.models import LearnerProgress
from kioku.domain.progress.ports import ProgressRepository
from kioku.domain.review.ports import ItemRepository

from .metrics_calculator import ForecastDay, ProficiencyProfile, ProgressMetricsCalculator

logger = logging.getLogger(__name__)


@dataclass
class LearnerStats:
    """Dashboard snapshot for a learner."""

    xp: int
    level: int
    level_title: str
    xp_in_level: int
    xp_for_next: int
    current_streak: int
    longest_streak: int
    total_reviews: int
    total_correct: int
    accuracy: int  # percent
    daily_goal: int
    daily_reviews_today: int
    due: DueCounts
    proficiency: ProficiencyProfile


class LearnerStatsService:
    """
    Application service for learner statistics.

    Depends on the repository abstractions, not concrete adapters.
    """

    def __init__(
        self,
        items: ItemRepository,
        progress: ProgressRepository,
        calculator: ProgressMetricsCalculator | None = None,
        settings: SchedulerSettings | None = None,
        daily_goal: int = DEFAULT_DAILY_GOAL,
    ):
        """
        Args:
            items: Repository (port) for reviewable items.
            progress: Repository (port) for learner progress.
            calculator: Optional custom calculator; uses default if not provided.
            settings: Tuning overrides for level computation.
            daily_goal: Goal reported for learners without a progress record.
        """
        self._items = items
        self._progress = progress
        self._calc = calculator or ProgressMetricsCalculator()
        self._settings = settings or DEFAULT_SETTINGS
        self._daily_goal = daily_goal

    async def get_stats(self, user_id: str, now: datetime | None = None) -> LearnerStats:
        """
        Build the stats snapshot. Learners without progress get zeroed stats.
        """
        now = now or datetime.now(timezone.utc)
        today = today_date_string(now)

        progress = await self._progress.get_progress(user_id)
        if progress is None:
            progress = LearnerProgress(daily_goal=self._daily_goal)
        items = await self._items.list_items(user_id)

        level_info = calculate_level(progress.xp, self._settings)
        due = DueCounts(
            kanji=sum(1 for i in items if i.item_type == "kanji" and i.is_due(now)),
            vocab=sum(1 for i in items if i.item_type == "vocab" and i.is_due(now)),
        )
        proficiency = self._calc.estimate_proficiency(
            [i.state for i in items if i.item_type == "kanji"],
            [i.state for i in items if i.item_type == "vocab"],
        )

        return LearnerStats(
            xp=progress.xp,
            level=level_info.level,
            level_title=get_level_title(level_info.level),
            xp_in_level=level_info.xp_in_level,
            xp_for_next=level_info.xp_for_next,
            current_streak=progress.current_streak,
            longest_streak=progress.longest_streak,
            total_reviews=progress.total_reviews,
            total_correct=progress.total_correct,
            accuracy=accuracy_percent(progress.total_correct, progress.total_reviews),
            daily_goal=progress.daily_goal,
            daily_reviews_today=daily_reviews_for(progress, today),
            due=due,
            proficiency=proficiency,
        )

    async def get_forecast(
        self, user_id: str, now: datetime | None = None, days: int = 7
    ) -> list[ForecastDay]:
        """Upcoming review load per day."""
        now = now or datetime.now(timezone.utc)
        items = await self._items.list_items(user_id)
        return self._calc.build_forecast(items, now, days)
