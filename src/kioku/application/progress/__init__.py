# Application Progress Package
from .streak import parse_day, today_date_string, update_streak
from .tracker import ProgressUpdate, apply_review, apply_session_completion, daily_reviews_for
from .xp import calculate_level, calculate_xp, get_level_title, get_session_completion_xp

__all__ = [
    "ProgressUpdate",
    "apply_review",
    "apply_session_completion",
    "calculate_level",
    "calculate_xp",
    "daily_reviews_for",
    "get_level_title",
    "get_session_completion_xp",
    "parse_day",
    "today_date_string",
    "update_streak",
]
