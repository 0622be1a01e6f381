"""
Domain models for spaced repetition reviews.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

from kioku.domain.constants import STARTING_EASE_FACTOR

ItemType = Literal["kanji", "vocab"]
QuestionType = Literal["meaning", "reading"]


class Grade(str, Enum):
    """
    Learner's self-reported recall quality.

    Grade mapping (user-facing -> SM-2 quality):
        again -> 1  (wrong, reset)
        hard  -> 3  (correct but struggled)
        good  -> 4  (solid recall)
        easy  -> 5  (instant, effortless)
    """

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @property
    def quality(self) -> int:
        return _GRADE_TO_QUALITY[self]

    @property
    def is_correct(self) -> bool:
        """A grade with quality below 3 is a miss."""
        return self.quality >= 3


_GRADE_TO_QUALITY = {
    Grade.AGAIN: 1,
    Grade.HARD: 3,
    Grade.GOOD: 4,
    Grade.EASY: 5,
}

# Fixed display order for grade buttons
GRADE_ORDER = (Grade.AGAIN, Grade.HARD, Grade.GOOD, Grade.EASY)


class ConfidenceLevel(str, Enum):
    """Coarse mastery classification, derived from review history."""

    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    KNOWN = "known"


@dataclass(frozen=True)
class MemoryState:
    """
    Scheduling state of a single learnable item.

    Attributes:
        interval_days: Days until next review after the last scheduling.
        ease_factor: Interval growth multiplier (higher = easier item).
        review_count: Total graded reviews ever applied.
        times_correct: Reviews graded as correct (quality >= 3).
        confidence_level: Classification recomputed on every review.
    """

    interval_days: int
    ease_factor: float
    review_count: int
    times_correct: int
    confidence_level: ConfidenceLevel

    def __post_init__(self):
        if self.interval_days < 0:
            raise ValueError(f"interval_days must be >= 0, got {self.interval_days}")
        if self.review_count < 0:
            raise ValueError(f"review_count must be >= 0, got {self.review_count}")
        if not 0 <= self.times_correct <= self.review_count:
            raise ValueError(
                f"times_correct must be within [0, review_count={self.review_count}], "
                f"got {self.times_correct}"
            )
        # Accept raw strings coming from storage
        object.__setattr__(self, "confidence_level", ConfidenceLevel(self.confidence_level))
        if (self.review_count == 0) != (self.confidence_level is ConfidenceLevel.NEW):
            raise ValueError(
                f"confidence_level '{self.confidence_level.value}' is inconsistent "
                f"with review_count={self.review_count}"
            )

    @classmethod
    def initial(cls, ease_factor: float = STARTING_EASE_FACTOR) -> "MemoryState":
        """State of an item that has just entered the collection."""
        return cls(
            interval_days=1,
            ease_factor=ease_factor,
            review_count=0,
            times_correct=0,
            confidence_level=ConfidenceLevel.NEW,
        )


@dataclass(frozen=True)
class IntervalResult:
    interval_days: int
    ease_factor: float


@dataclass(frozen=True)
class ScheduleUpdate:
    """
    Full result of applying one graded review to an item.

    Created fresh on every review; callers persist it verbatim.
    """

    interval_days: int
    ease_factor: float
    review_count: int
    times_correct: int
    confidence_level: ConfidenceLevel
    next_review_at: datetime
    last_reviewed_at: datetime

    @property
    def state(self) -> MemoryState:
        return MemoryState(
            interval_days=self.interval_days,
            ease_factor=self.ease_factor,
            review_count=self.review_count,
            times_correct=self.times_correct,
            confidence_level=self.confidence_level,
        )


@dataclass(frozen=True)
class GradeOption:
    """Preview of what choosing a grade would do, shown on the grade buttons."""

    grade: Grade
    quality: int
    next_interval_days: int
    xp: int
    label: str


@dataclass(frozen=True)
class ReviewableItem:
    """
    A kanji or vocabulary item together with its scheduling state.

    next_review_at is None for items that have never been scheduled.
    """

    id: str
    item_type: ItemType
    state: MemoryState
    next_review_at: datetime | None = None
    prompt: str | None = None
    last_reviewed_at: datetime | None = None

    def is_due(self, now: datetime) -> bool:
        return self.next_review_at is None or self.next_review_at <= now


@dataclass(frozen=True)
class ReviewLogEntry:
    """A single entry in the review history."""

    user_id: str
    session_id: str
    item_id: str
    item_type: ItemType
    question_type: QuestionType
    quality: int
    was_correct: bool
    reviewed_at: datetime
    response_time_ms: int | None = None
