"""
Domain models for learner progress and review sessions.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from kioku.domain.constants import DEFAULT_DAILY_GOAL

SessionType = Literal["kanji", "vocab", "mixed"]


@dataclass(frozen=True)
class LevelInfo:
    level: int
    xp_in_level: int
    xp_for_next: int


@dataclass(frozen=True)
class StreakState:
    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class LearnerProgress:
    """
    Aggregate gamification state, one per learner.

    Attributes:
        xp: Total experience points earned.
        level: Level derived from xp.
        current_streak: Consecutive days with a review, ending at last_review_date.
        longest_streak: Historical maximum of current_streak.
        last_review_date: UTC calendar date (YYYY-MM-DD) of the last review, if any.
        total_reviews: Graded reviews across all items.
        total_correct: Graded reviews that were hits.
        daily_reviews_today: Reviews counted on daily_reviews_date.
        daily_reviews_date: Date the daily counter refers to.
        daily_goal: Reviews per day the learner aims for.
    """

    xp: int = 0
    level: int = 1
    current_streak: int = 0
    longest_streak: int = 0
    last_review_date: str | None = None
    total_reviews: int = 0
    total_correct: int = 0
    daily_reviews_today: int = 0
    daily_reviews_date: str | None = None
    daily_goal: int = DEFAULT_DAILY_GOAL

    def __post_init__(self):
        for name in ("xp", "current_streak", "longest_streak", "total_reviews", "total_correct"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.total_correct > self.total_reviews:
            raise ValueError("total_correct cannot exceed total_reviews")


@dataclass
class ReviewSession:
    """A run of reviews started and (eventually) completed by a learner."""

    id: str
    user_id: str
    session_type: SessionType
    started_at: datetime
    completed_at: datetime | None = None
    items_reviewed: int = 0
    items_correct: int = 0
    xp_earned: int = 0

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass(frozen=True)
class SessionSummary:
    session_id: str
    items_reviewed: int
    items_correct: int
    accuracy: int  # percent
    xp_earned: int
    duration_ms: int
    completed_at: datetime
