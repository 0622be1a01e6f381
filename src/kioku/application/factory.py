"""
Service Factory
Centralizes wiring the application services from the resolved configuration.
"""

from kioku.application.config import AppConfig
from kioku.application.review_service import ReviewService
from kioku.application.stats.service import LearnerStatsService
from kioku.domain.progress.ports import ProgressRepository, SessionRepository
from kioku.domain.review.ports import ItemRepository


def get_review_service(
    config: AppConfig,
    items: ItemRepository,
    progress: ProgressRepository,
    sessions: SessionRepository,
) -> ReviewService:
    """
    Returns a ReviewService tuned by config (scheduler settings, daily goal, queue size).
    """
    return ReviewService(
        items=items,
        progress=progress,
        sessions=sessions,
        settings=config.scheduler,
        daily_goal=config.daily_goal,
        queue_limit=config.queue_limit,
    )


def get_stats_service(
    config: AppConfig,
    items: ItemRepository,
    progress: ProgressRepository,
) -> LearnerStatsService:
    """
    Returns a LearnerStatsService using the configured level curve and daily goal.
    """
    return LearnerStatsService(
        items=items,
        progress=progress,
        settings=config.scheduler,
        daily_goal=config.daily_goal,
    )
