from datetime import datetime, timezone

import pytest

from kioku.domain.review.models import ConfidenceLevel, MemoryState


@pytest.fixture
def now():
    """Fixed review instant so schedules are deterministic."""
    return datetime(2026, 2, 27, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def fresh_state():
    return MemoryState.initial()


@pytest.fixture
def graduated_state():
    """An item past its learning steps with a 3 day interval."""
    return MemoryState(
        interval_days=3,
        ease_factor=2.5,
        review_count=2,
        times_correct=2,
        confidence_level=ConfidenceLevel.LEARNING,
    )


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "KIOKU_DAILY_GOAL",
        "KIOKU_QUEUE_LIMIT",
        "KIOKU_VERBOSE",
        "KIOKU_SCHEDULER__XP_PER_LEVEL",
        "KIOKU_SCHEDULER__STARTING_EASE_FACTOR",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
