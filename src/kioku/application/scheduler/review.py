"""
Review processing and grade previews.

Stateless and side-effect free: everything is passed in and returned.
"""

from datetime import datetime, timezone

from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.application.progress.xp import calculate_xp
from kioku.application.utils.format import format_interval
from kioku.domain.review.models import (
    GRADE_ORDER,
    Grade,
    GradeOption,
    MemoryState,
    ScheduleUpdate,
)

from .confidence import compute_confidence
from .interval import add_days, calculate_next_interval


def process_review(
    grade: Grade | str,
    current: MemoryState,
    now: datetime | None = None,
    settings: SchedulerSettings | None = None,
) -> ScheduleUpdate:
    """
    Process a review and produce the full update to apply to the item.

    Args:
        grade: Grade chosen by the learner.
        current: Memory state before the review.
        now: Review instant. Pass it explicitly for deterministic results;
            defaults to the current UTC time.
        settings: Tuning overrides.
    """
    settings = settings or DEFAULT_SETTINGS
    grade = Grade(grade)
    if now is None:
        now = datetime.now(timezone.utc)

    was_correct = grade.is_correct
    result = calculate_next_interval(grade, current, settings)

    review_count = current.review_count + 1
    times_correct = current.times_correct + (1 if was_correct else 0)

    return ScheduleUpdate(
        interval_days=result.interval_days,
        ease_factor=result.ease_factor,
        review_count=review_count,
        times_correct=times_correct,
        confidence_level=compute_confidence(
            review_count, times_correct, result.interval_days, was_correct, settings
        ),
        next_review_at=add_days(now, result.interval_days),
        last_reviewed_at=now,
    )


def get_grade_options(
    current: MemoryState,
    streak_bonus: int = 0,
    settings: SchedulerSettings | None = None,
) -> list[GradeOption]:
    """
    Build the four grade button options with their preview intervals and XP.
    """
    settings = settings or DEFAULT_SETTINGS
    options = []
    for grade in GRADE_ORDER:
        interval_days = calculate_next_interval(grade, current, settings).interval_days
        options.append(
            GradeOption(
                grade=grade,
                quality=grade.quality,
                next_interval_days=interval_days,
                xp=calculate_xp(grade, streak_bonus, settings),
                label=format_interval(interval_days),
            )
        )
    return options
