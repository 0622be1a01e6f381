"""
Daily review streak tracking.

Day strings are ISO calendar dates (YYYY-MM-DD) interpreted as UTC days, so
a learner's streak never breaks because of DST or a local/UTC mismatch.
"""

import re
from datetime import date, datetime, timezone

from kioku.domain.progress.models import StreakState

_DAY_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_day(value: str) -> date:
    """
    Parse a YYYY-MM-DD day string.

    Raises:
        ValueError: The string is not a plain calendar date.
    """
    if not isinstance(value, str) or not _DAY_RE.fullmatch(value):
        raise ValueError(f"Expected a YYYY-MM-DD date string, got {value!r}")
    return date.fromisoformat(value)


def today_date_string(now: datetime | None = None) -> str:
    """UTC calendar date of `now` (or of the current instant) as YYYY-MM-DD."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date().isoformat()


def update_streak(
    last_review_date: str | None,
    current_streak: int,
    longest_streak: int,
    today: str,
) -> StreakState:
    """
    Given the last review date and today's date, return the updated streak.

    Must be called at most once per calendar day per learner; calling it
    again on the same day is a no-op, but the caller owns that discipline.

    Raises:
        ValueError: Malformed dates, negative streaks, or today earlier
            than the last review date.
    """
    if current_streak < 0 or longest_streak < 0:
        raise ValueError("Streak counters must be >= 0")

    today_day = parse_day(today)

    if not last_review_date:
        return StreakState(current_streak=1, longest_streak=max(longest_streak, 1))

    gap = (today_day - parse_day(last_review_date)).days

    if gap == 0:
        return StreakState(current_streak=current_streak, longest_streak=longest_streak)

    if gap < 0:
        raise ValueError(f"today ({today}) is earlier than last review date ({last_review_date})")

    if gap == 1:
        new_streak = current_streak + 1
        return StreakState(current_streak=new_streak, longest_streak=max(longest_streak, new_streak))

    # Streak broken (missed a day or more)
    return StreakState(current_streak=1, longest_streak=max(longest_streak, current_streak))
