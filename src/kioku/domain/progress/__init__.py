# Domain Progress Package
from .models import LearnerProgress, LevelInfo, ReviewSession, SessionSummary, StreakState
from .ports import ProgressRepository, SessionRepository

__all__ = [
    "LearnerProgress",
    "LevelInfo",
    "ReviewSession",
    "SessionSummary",
    "StreakState",
    "ProgressRepository",
    "SessionRepository",
]
