"""XP rewards, levels and level titles."""

from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.domain.constants import LEVEL_TITLES, TOP_LEVEL_TITLE
from kioku.domain.progress.models import LevelInfo
from kioku.domain.review.models import Grade


def calculate_xp(
    grade: Grade | str,
    streak_bonus: int = 0,
    settings: SchedulerSettings | None = None,
) -> int:
    """
    XP for a single graded review.

    The streak bonus (consecutive correct answers) is only paid out on hits;
    a miss earns the flat base reward whatever the streak.
    """
    settings = settings or DEFAULT_SETTINGS
    grade = Grade(grade)
    if streak_bonus < 0:
        raise ValueError(f"streak_bonus must be >= 0, got {streak_bonus}")

    base = settings.xp_rewards[grade.value]
    bonus = streak_bonus * settings.streak_bonus_multiplier if grade.is_correct else 0
    return base + bonus


def calculate_level(total_xp: int, settings: SchedulerSettings | None = None) -> LevelInfo:
    """Flat curve: every level costs the same amount of XP."""
    settings = settings or DEFAULT_SETTINGS
    if total_xp < 0:
        raise ValueError(f"total_xp must be >= 0, got {total_xp}")

    per_level = settings.xp_per_level
    return LevelInfo(
        level=total_xp // per_level + 1,
        xp_in_level=total_xp % per_level,
        xp_for_next=per_level,
    )


def get_session_completion_xp(settings: SchedulerSettings | None = None) -> int:
    return (settings or DEFAULT_SETTINGS).session_completion_xp


def get_level_title(level: int) -> str:
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    for max_level, title in LEVEL_TITLES:
        if level <= max_level:
            return title
    return TOP_LEVEL_TITLE
