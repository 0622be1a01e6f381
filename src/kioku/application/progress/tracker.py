"""
Applies review and session events to a learner's progress aggregate.

Pure functions: each returns a new LearnerProgress instead of mutating.
"""

from dataclasses import dataclass, replace

from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.domain.progress.models import LearnerProgress
from kioku.domain.review.models import Grade

from .streak import parse_day, update_streak
from .xp import calculate_level, calculate_xp, get_session_completion_xp


@dataclass(frozen=True)
class ProgressUpdate:
    progress: LearnerProgress
    xp_earned: int


def apply_review(
    progress: LearnerProgress | None,
    grade: Grade | str,
    today: str,
    streak_bonus: int = 0,
    settings: SchedulerSettings | None = None,
) -> ProgressUpdate:
    """
    Credit one graded review.

    Args:
        progress: Current progress, or None for a learner's first review.
        grade: Grade given for the review.
        today: UTC day string of the review.
        streak_bonus: Consecutive correct answers in the current session.
    """
    settings = settings or DEFAULT_SETTINGS
    grade = Grade(grade)
    progress = progress or LearnerProgress()

    xp_earned = calculate_xp(grade, streak_bonus, settings)
    xp = progress.xp + xp_earned
    streak = update_streak(
        progress.last_review_date, progress.current_streak, progress.longest_streak, today
    )
    is_new_day = progress.daily_reviews_date != today

    updated = replace(
        progress,
        xp=xp,
        level=calculate_level(xp, settings).level,
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        last_review_date=today,
        total_reviews=progress.total_reviews + 1,
        total_correct=progress.total_correct + (1 if grade.is_correct else 0),
        daily_reviews_today=1 if is_new_day else progress.daily_reviews_today + 1,
        daily_reviews_date=today,
    )
    return ProgressUpdate(progress=updated, xp_earned=xp_earned)


def apply_session_completion(
    progress: LearnerProgress,
    today: str,
    settings: SchedulerSettings | None = None,
) -> ProgressUpdate:
    """Award the fixed session-completion bonus."""
    settings = settings or DEFAULT_SETTINGS
    xp_earned = get_session_completion_xp(settings)
    xp = progress.xp + xp_earned
    streak = update_streak(
        progress.last_review_date, progress.current_streak, progress.longest_streak, today
    )

    updated = replace(
        progress,
        xp=xp,
        level=calculate_level(xp, settings).level,
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        last_review_date=today,
    )
    return ProgressUpdate(progress=updated, xp_earned=xp_earned)


def daily_reviews_for(progress: LearnerProgress | None, today: str) -> int:
    """Reviews done on `today`; a stale daily counter reads as zero."""
    parse_day(today)
    if progress is None or progress.daily_reviews_date != today:
        return 0
    return progress.daily_reviews_today
