# Domain Review Package
from .models import (
    GRADE_ORDER,
    ConfidenceLevel,
    Grade,
    GradeOption,
    IntervalResult,
    MemoryState,
    ReviewableItem,
    ReviewLogEntry,
    ScheduleUpdate,
)
from .ports import ItemRepository

__all__ = [
    "GRADE_ORDER",
    "ConfidenceLevel",
    "Grade",
    "GradeOption",
    "IntervalResult",
    "MemoryState",
    "ReviewableItem",
    "ReviewLogEntry",
    "ScheduleUpdate",
    "ItemRepository",
]
