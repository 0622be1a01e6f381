"""
Metrics calculator for deriving insights from item states.

This is a pure computation module with no I/O.
"""

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import Iterable

from kioku.domain.constants import (
    FORECAST_DAYS,
    JLPT_THRESHOLDS,
    N5_PARTIAL_KANJI,
    N5_PARTIAL_VOCAB,
)
from kioku.domain.review.models import ConfidenceLevel, MemoryState, ReviewableItem


@dataclass
class ConfidenceBreakdown:
    """Item counts per confidence level."""

    counts: dict[ConfidenceLevel, int] = field(
        default_factory=lambda: {level: 0 for level in ConfidenceLevel}
    )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def known(self) -> int:
        """Items the learner can be said to know: reviewing or known."""
        return self.counts[ConfidenceLevel.REVIEWING] + self.counts[ConfidenceLevel.KNOWN]

    def as_dict(self) -> dict[str, int]:
        return {level.value: count for level, count in self.counts.items()}


@dataclass
class ProficiencyProfile:
    estimated_jlpt_level: int | None
    kanji: ConfidenceBreakdown
    vocab: ConfidenceBreakdown

    @property
    def total_items(self) -> int:
        return self.kanji.total + self.vocab.total

    @property
    def total_known(self) -> int:
        return self.kanji.known + self.vocab.known


@dataclass
class ForecastDay:
    date: str  # YYYY-MM-DD, UTC
    kanji: int
    vocab: int

    @property
    def total(self) -> int:
        return self.kanji + self.vocab


class ProgressMetricsCalculator:
    """
    Computes aggregate metrics from item memory states.

    Stateless and side-effect free.
    """

    def confidence_breakdown(self, states: Iterable[MemoryState]) -> ConfidenceBreakdown:
        breakdown = ConfidenceBreakdown()
        for state in states:
            breakdown.counts[state.confidence_level] += 1
        return breakdown

    def estimate_proficiency(
        self,
        kanji_states: Iterable[MemoryState],
        vocab_states: Iterable[MemoryState],
    ) -> ProficiencyProfile:
        """
        Estimate a JLPT level from how many kanji and words are known.
        """
        kanji = self.confidence_breakdown(kanji_states)
        vocab = self.confidence_breakdown(vocab_states)
        return ProficiencyProfile(
            estimated_jlpt_level=self._estimate_jlpt_level(kanji.known, vocab.known),
            kanji=kanji,
            vocab=vocab,
        )

    def build_forecast(
        self,
        items: Iterable[ReviewableItem],
        now: datetime,
        days: int = FORECAST_DAYS,
    ) -> list[ForecastDay]:
        """
        Count reviews due on each of the next `days` UTC calendar days.

        Today's bucket also holds everything overdue and never-scheduled items.
        """
        if days < 1:
            raise ValueError(f"days must be >= 1, got {days}")

        now_utc = now.astimezone(timezone.utc) if now.tzinfo else now.replace(tzinfo=timezone.utc)
        start = datetime.combine(now_utc.date(), time.min, tzinfo=timezone.utc)
        forecast = [
            ForecastDay(date=(start + timedelta(days=i)).date().isoformat(), kanji=0, vocab=0)
            for i in range(days)
        ]

        for item in items:
            bucket = self._bucket_for(item, start, days)
            if bucket is None:
                continue
            if item.item_type == "kanji":
                forecast[bucket].kanji += 1
            else:
                forecast[bucket].vocab += 1

        return forecast

    def _bucket_for(self, item: ReviewableItem, start: datetime, days: int) -> int | None:
        if item.next_review_at is None:
            return 0

        due = item.next_review_at
        if due.tzinfo is None:
            due = due.replace(tzinfo=timezone.utc)

        offset = (due - start) // timedelta(days=1)
        if offset < 0:
            return 0  # Overdue
        if offset >= days:
            return None
        return offset

    def _estimate_jlpt_level(self, kanji_known: int, vocab_known: int) -> int | None:
        """
        JLPT level thresholds (approximate):
        N5: ~80 kanji, ~800 vocab ... N1: ~2000 kanji, ~10000 vocab
        """
        if kanji_known == 0 and vocab_known == 0:
            return None

        for level, kanji_needed, vocab_needed in JLPT_THRESHOLDS:
            if kanji_known >= kanji_needed and vocab_known >= vocab_needed:
                return level

        # Below N5: credit partial progress toward it
        if kanji_known >= N5_PARTIAL_KANJI or vocab_known >= N5_PARTIAL_VOCAB:
            return 5
        return None
