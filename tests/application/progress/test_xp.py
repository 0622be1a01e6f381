import pytest

from kioku.application.config import SchedulerSettings
from kioku.application.progress.xp import (
    calculate_level,
    calculate_xp,
    get_level_title,
    get_session_completion_xp,
)
from kioku.domain.progress.models import LevelInfo


class TestCalculateXp:
    @pytest.mark.parametrize("streak", [0, 1, 5, 100])
    def test_miss_never_gets_streak_bonus(self, streak):
        assert calculate_xp("again", streak) == 2

    def test_base_rewards(self):
        assert calculate_xp("hard") == 10
        assert calculate_xp("good") == 10
        assert calculate_xp("easy") == 15

    def test_streak_bonus_on_hits(self):
        assert calculate_xp("good", 3) == 16
        assert calculate_xp("easy", 2) == 19

    def test_negative_streak_rejected(self):
        with pytest.raises(ValueError):
            calculate_xp("good", -1)

    def test_custom_rewards(self):
        settings = SchedulerSettings(xp_rewards={"again": 0, "hard": 5, "good": 8, "easy": 12})
        assert calculate_xp("good", 1, settings) == 10


class TestCalculateLevel:
    def test_zero_xp(self):
        assert calculate_level(0) == LevelInfo(level=1, xp_in_level=0, xp_for_next=500)

    def test_mid_level(self):
        assert calculate_level(750) == LevelInfo(level=2, xp_in_level=250, xp_for_next=500)

    def test_level_boundaries(self):
        assert calculate_level(499).level == 1
        assert calculate_level(500) == LevelInfo(level=2, xp_in_level=0, xp_for_next=500)

    def test_negative_xp_rejected(self):
        with pytest.raises(ValueError):
            calculate_level(-1)


@pytest.mark.parametrize(
    "level,title",
    [
        (1, "Beginner"),
        (5, "Beginner"),
        (6, "Student"),
        (10, "Student"),
        (11, "Reader"),
        (20, "Reader"),
        (21, "Expert"),
        (35, "Expert"),
        (36, "Master"),
        (120, "Master"),
    ],
)
def test_level_titles(level, title):
    assert get_level_title(level) == title


def test_level_title_rejects_zero():
    with pytest.raises(ValueError):
        get_level_title(0)


def test_session_completion_xp():
    assert get_session_completion_xp() == 25
    assert get_session_completion_xp(SchedulerSettings(session_completion_xp=40)) == 40
