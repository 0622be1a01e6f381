from datetime import datetime, timedelta, timezone

import pytest

from kioku.application.progress.streak import parse_day, today_date_string, update_streak
from kioku.domain.progress.models import StreakState


class TestUpdateStreak:
    def test_first_review_ever(self):
        assert update_streak(None, 0, 0, "2026-02-27") == StreakState(1, 1)

    def test_empty_last_date_starts_fresh(self):
        assert update_streak("", 0, 4, "2026-02-27") == StreakState(1, 4)

    def test_same_day_is_unchanged(self):
        assert update_streak("2026-02-27", 3, 5, "2026-02-27") == StreakState(3, 5)

    def test_consecutive_day_increments(self):
        assert update_streak("2026-02-27", 3, 3, "2026-02-28") == StreakState(4, 4)
        assert update_streak("2026-02-27", 3, 10, "2026-02-28") == StreakState(4, 10)

    def test_consecutive_across_year_end(self):
        assert update_streak("2026-12-31", 1, 1, "2027-01-01") == StreakState(2, 2)

    def test_consecutive_on_leap_day(self):
        assert update_streak("2028-02-28", 6, 6, "2028-02-29") == StreakState(7, 7)

    def test_gap_resets_current_keeps_longest(self):
        assert update_streak("2026-02-25", 5, 7, "2026-02-27") == StreakState(1, 7)
        assert update_streak("2026-02-25", 5, 5, "2026-02-27") == StreakState(1, 5)

    def test_daily_run(self):
        state = StreakState(0, 0)
        last = None
        day = datetime(2026, 2, 20)
        for _ in range(5):
            today = day.date().isoformat()
            state = update_streak(last, state.current_streak, state.longest_streak, today)
            last = today
            day += timedelta(days=1)
        assert state == StreakState(5, 5)

    @pytest.mark.parametrize(
        "bad",
        ["2026/02/27", "27-02-2026", "20260227", "yesterday", "2026-W09-5", "2026-02-30", "2026-2-27 "],
    )
    def test_malformed_dates_rejected(self, bad):
        with pytest.raises(ValueError):
            update_streak(bad, 1, 1, "2026-02-27")
        with pytest.raises(ValueError):
            update_streak(None, 0, 0, bad)

    def test_week_date_is_not_a_day(self):
        # 2026-W09-5 is 2026-02-27 in ISO week notation
        with pytest.raises(ValueError):
            update_streak("2026-W09-5", 1, 1, "2026-02-28")

    def test_today_before_last_review_rejected(self):
        with pytest.raises(ValueError):
            update_streak("2026-02-27", 2, 2, "2026-02-26")

    def test_negative_counters_rejected(self):
        with pytest.raises(ValueError):
            update_streak(None, -1, 0, "2026-02-27")


def test_parse_day():
    assert parse_day("2026-02-27").isoformat() == "2026-02-27"


class TestTodayDateString:
    def test_uses_utc_calendar_day(self):
        tokyo = timezone(timedelta(hours=9))
        assert today_date_string(datetime(2026, 2, 28, 5, 0, tzinfo=tokyo)) == "2026-02-27"

    def test_naive_datetime_used_as_is(self):
        assert today_date_string(datetime(2026, 2, 27, 23, 59)) == "2026-02-27"

    def test_defaults_to_now(self):
        assert today_date_string() == datetime.now(timezone.utc).date().isoformat()
