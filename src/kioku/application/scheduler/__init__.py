# Application Scheduler Package
from .confidence import compute_confidence
from .interval import add_days, calculate_next_interval, clamp_ease
from .review import get_grade_options, process_review

__all__ = [
    "add_days",
    "calculate_next_interval",
    "clamp_ease",
    "compute_confidence",
    "get_grade_options",
    "process_review",
]
