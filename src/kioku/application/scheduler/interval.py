"""
Modified SM-2 interval and ease calculation.

This is a pure computation module with no I/O. The same function backs both
the committed update and the interval previews on the grade buttons, so it
must stay deterministic.
"""

import logging
from datetime import datetime, timedelta

from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.application.utils.numbers import round_half_up
from kioku.domain.review.models import Grade, IntervalResult, MemoryState

logger = logging.getLogger(__name__)


def clamp_ease(ease: float, settings: SchedulerSettings = DEFAULT_SETTINGS) -> float:
    """Round ease to 2 decimals and enforce the floor."""
    return max(settings.min_ease_factor, round_half_up(ease * 100) / 100)


def add_days(moment: datetime, days: int) -> datetime:
    """
    Advance by whole calendar days.

    Aware datetimes keep their wall-clock time, so a review at 09:00 stays
    due at 09:00 even across a DST change.
    """
    return moment + timedelta(days=days)


def calculate_next_interval(
    grade: Grade | str,
    current: MemoryState,
    settings: SchedulerSettings | None = None,
) -> IntervalResult:
    """
    Calculate the next interval and ease for a grade, WITHOUT mutating anything.

    Args:
        grade: Grade chosen by the learner.
        current: Memory state before the review.
        settings: Tuning overrides; defaults to the reference tuning.

    Returns:
        IntervalResult with the new interval (days, >= 1) and ease (>= floor).

    Raises:
        ValueError: Unknown grade, or an ease already below the floor.
    """
    settings = settings or DEFAULT_SETTINGS
    grade = Grade(grade)
    if current.ease_factor < settings.min_ease_factor:
        raise ValueError(
            f"ease_factor {current.ease_factor} is below the floor {settings.min_ease_factor}"
        )

    quality = grade.quality
    interval = current.interval_days

    if not grade.is_correct:
        # Wrong: reset to 1 day, penalize ease
        return IntervalResult(
            interval_days=1,
            ease_factor=clamp_ease(current.ease_factor - settings.ease_penalty, settings),
        )

    miss_weight = 5 - quality
    new_ease = clamp_ease(
        current.ease_factor + (0.1 - miss_weight * (0.08 + miss_weight * 0.02)),
        settings,
    )

    # Learning sequence for new/early items
    steps = settings.learning_steps
    if current.review_count < len(steps):
        multiplier = settings.easy_learning_multiplier if grade is Grade.EASY else 1
        return IntervalResult(
            interval_days=steps[current.review_count] * multiplier,
            ease_factor=new_ease,
        )

    # SM-2 graduated items
    if interval == 0:
        new_interval = 1
    elif interval == 1:
        new_interval = settings.graduation_interval
    else:
        new_interval = round_half_up(interval * new_ease)

    if grade is Grade.HARD:
        # Always advance past the current interval
        new_interval = max(round_half_up(new_interval * settings.hard_interval_factor), interval + 1)
    elif grade is Grade.EASY:
        new_interval = round_half_up(new_interval * settings.easy_interval_bonus)

    logger.debug(f"{grade.value}: interval {interval} -> {new_interval}, ease -> {new_ease}")
    return IntervalResult(interval_days=max(1, new_interval), ease_factor=new_ease)
