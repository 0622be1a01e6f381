# Application Stats Package
from .metrics_calculator import (
    ConfidenceBreakdown,
    ForecastDay,
    ProficiencyProfile,
    ProgressMetricsCalculator,
)
from .service import LearnerStats, LearnerStatsService

__all__ = [
    "ConfidenceBreakdown",
    "ForecastDay",
    "ProficiencyProfile",
    "ProgressMetricsCalculator",
    "LearnerStats",
    "LearnerStatsService",
]
