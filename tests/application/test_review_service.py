"""Tests for the review workflow and learner stats services."""

import random
from datetime import timedelta

import pytest
from pydantic import ValidationError

from kioku.application.review_service import ReviewService, ReviewSubmission
from kioku.application.stats.service import LearnerStatsService
from kioku.domain.exceptions import ItemNotFoundError, SessionNotFoundError
from kioku.domain.review.models import ConfidenceLevel, MemoryState, ReviewableItem
from kioku.infrastructure.adapters.memory_store import (
    InMemoryItemRepository,
    InMemoryProgressRepository,
    InMemorySessionRepository,
)

USER = "user_1"


@pytest.fixture
def items():
    repo = InMemoryItemRepository()
    repo.add_item(USER, ReviewableItem(id="k1", item_type="kanji", prompt="水", state=MemoryState.initial()))
    repo.add_item(USER, ReviewableItem(id="v1", item_type="vocab", prompt="水曜日", state=MemoryState.initial()))
    return repo


@pytest.fixture
def progress():
    return InMemoryProgressRepository()


@pytest.fixture
def sessions():
    return InMemorySessionRepository()


@pytest.fixture
def service(items, progress, sessions):
    return ReviewService(items=items, progress=progress, sessions=sessions)


def submission(session_id, grade="good", item_id="k1", **kwargs):
    return {
        "session_id": session_id,
        "item_id": item_id,
        "item_type": "vocab" if item_id.startswith("v") else "kanji",
        "question_type": "meaning",
        "grade": grade,
        **kwargs,
    }


@pytest.mark.asyncio
async def test_start_session(service, now):
    session = await service.start_session(USER, "mixed", now)

    assert session.id.startswith("session_")
    assert session.started_at == now
    assert not session.is_completed


@pytest.mark.asyncio
async def test_start_session_rejects_unknown_type(service, now):
    with pytest.raises(ValueError):
        await service.start_session(USER, "grammar", now)


@pytest.mark.asyncio
async def test_submit_review_updates_everything(service, items, progress, sessions, now):
    session = await service.start_session(USER, "kanji", now)

    result = await service.submit_review(
        USER, submission(session.id, consecutive_correct=3, response_time_ms=1800), now
    )

    assert result.xp_earned == 16
    assert result.was_correct is True
    assert result.update.interval_days == 1
    assert result.update.confidence_level is ConfidenceLevel.LEARNING

    stored = await items.get_item(USER, "k1")
    assert stored.state.review_count == 1
    assert stored.next_review_at == now + timedelta(days=1)
    assert stored.last_reviewed_at == now

    assert len(items.history) == 1
    assert items.history[0].quality == 4
    assert items.history[0].response_time_ms == 1800

    learner = await progress.get_progress(USER)
    assert learner.xp == 16
    assert learner.current_streak == 1
    assert learner.last_review_date == "2026-02-27"

    stored_session = await sessions.get_session(USER, session.id)
    assert (stored_session.items_reviewed, stored_session.items_correct) == (1, 1)
    assert stored_session.xp_earned == 16


@pytest.mark.asyncio
async def test_submit_miss(service, progress, now):
    session = await service.start_session(USER, "kanji", now)
    result = await service.submit_review(
        USER, ReviewSubmission(**submission(session.id, grade="again", consecutive_correct=4)), now
    )

    assert result.was_correct is False
    assert result.xp_earned == 2
    learner = await progress.get_progress(USER)
    assert (learner.total_reviews, learner.total_correct) == (1, 0)


@pytest.mark.asyncio
async def test_submit_invalid_payload(service, now):
    session = await service.start_session(USER, "kanji", now)
    with pytest.raises(ValidationError):
        await service.submit_review(USER, submission(session.id, grade="perfect"), now)
    with pytest.raises(ValidationError):
        await service.submit_review(USER, submission(session.id, consecutive_correct=-1), now)


@pytest.mark.asyncio
async def test_submit_unknown_item(service, now):
    session = await service.start_session(USER, "kanji", now)
    with pytest.raises(ItemNotFoundError):
        await service.submit_review(USER, submission(session.id, item_id="missing"), now)


@pytest.mark.asyncio
async def test_submit_with_wrong_item_type(service, items, progress, now):
    session = await service.start_session(USER, "mixed", now)
    with pytest.raises(ItemNotFoundError):
        await service.submit_review(USER, submission(session.id, item_type="vocab"), now)

    assert items.history == []
    assert (await items.get_item(USER, "k1")).state.review_count == 0
    assert await progress.get_progress(USER) is None


@pytest.mark.asyncio
async def test_submit_other_users_session(service, now):
    session = await service.start_session("someone_else", "kanji", now)
    with pytest.raises(SessionNotFoundError):
        await service.submit_review(USER, submission(session.id), now)


@pytest.mark.asyncio
async def test_complete_session(service, progress, now):
    session = await service.start_session(USER, "kanji", now)
    await service.submit_review(USER, submission(session.id, consecutive_correct=3), now)
    await service.submit_review(USER, submission(session.id, item_id="v1", grade="again"), now)

    summary = await service.complete_session(USER, session.id, now + timedelta(minutes=5))

    assert summary.items_reviewed == 2
    assert summary.items_correct == 1
    assert summary.accuracy == 50
    assert summary.xp_earned == 16 + 2 + 25
    assert summary.duration_ms == 300_000
    assert (await progress.get_progress(USER)).xp == 43


@pytest.mark.asyncio
async def test_complete_session_twice_awards_once(service, progress, now):
    session = await service.start_session(USER, "kanji", now)
    await service.submit_review(USER, submission(session.id), now)

    await service.complete_session(USER, session.id, now)
    summary = await service.complete_session(USER, session.id, now + timedelta(hours=1))

    assert summary.xp_earned == 35
    assert summary.completed_at == now
    assert (await progress.get_progress(USER)).xp == 35


@pytest.mark.asyncio
async def test_complete_empty_session_still_pays_bonus(service, progress, now):
    session = await service.start_session(USER, "vocab", now)
    summary = await service.complete_session(USER, session.id, now)

    assert summary.items_reviewed == 0
    assert summary.xp_earned == 25
    assert summary.accuracy == 0

    learner = await progress.get_progress(USER)
    assert learner.xp == 25
    assert learner.total_reviews == 0
    assert (learner.current_streak, learner.last_review_date) == (1, "2026-02-27")


@pytest.mark.asyncio
async def test_first_progress_uses_configured_daily_goal(items, progress, sessions, now):
    service = ReviewService(items=items, progress=progress, sessions=sessions, daily_goal=30)
    session = await service.start_session(USER, "kanji", now)
    await service.submit_review(USER, submission(session.id), now)

    assert (await progress.get_progress(USER)).daily_goal == 30


@pytest.mark.asyncio
async def test_complete_unknown_session(service, now):
    with pytest.raises(SessionNotFoundError):
        await service.complete_session(USER, "session_missing", now)


@pytest.mark.asyncio
async def test_get_queue(service, items, now):
    for n in range(12):
        items.add_item(
            USER, ReviewableItem(id=f"extra{n}", item_type="kanji", state=MemoryState.initial())
        )

    result = await service.get_queue(USER, "kanji", now=now)
    assert len(result.items) == 10
    assert result.total_due.kanji == 13
    assert result.total_due.vocab == 1

    mixed = await service.get_queue(USER, "mixed", limit=4, now=now, rng=random.Random(3))
    assert [i.item_type for i in mixed.items].count("vocab") == 1
    assert len(mixed.items) == 3


@pytest.mark.asyncio
async def test_get_queue_uses_configured_limit(items, progress, sessions, now):
    service = ReviewService(items=items, progress=progress, sessions=sessions, queue_limit=1)
    result = await service.get_queue(USER, "vocab", now=now)
    assert [i.id for i in result.items] == ["v1"]


@pytest.mark.asyncio
async def test_preview(service):
    options = await service.preview(USER, "k1", streak_bonus=1)
    assert [o.next_interval_days for o in options] == [1, 1, 1, 2]
    assert [o.xp for o in options] == [2, 12, 12, 17]

    with pytest.raises(ItemNotFoundError):
        await service.preview(USER, "missing")


@pytest.mark.asyncio
async def test_learner_stats(service, items, progress, now):
    session = await service.start_session(USER, "kanji", now)
    await service.submit_review(USER, submission(session.id), now)

    stats_service = LearnerStatsService(items=items, progress=progress)
    stats = await stats_service.get_stats(USER, now)

    assert stats.xp == 10
    assert stats.level == 1
    assert stats.level_title == "Beginner"
    assert stats.xp_in_level == 10
    assert stats.accuracy == 100
    assert stats.daily_reviews_today == 1
    assert stats.current_streak == 1
    # k1 is now due tomorrow; v1 was never scheduled
    assert (stats.due.kanji, stats.due.vocab) == (0, 1)
    assert stats.proficiency.kanji.counts[ConfidenceLevel.LEARNING] == 1
    assert stats.proficiency.estimated_jlpt_level is None

    forecast = await stats_service.get_forecast(USER, now)
    assert (forecast[0].kanji, forecast[0].vocab) == (0, 1)
    assert forecast[1].kanji == 1


@pytest.mark.asyncio
async def test_learner_stats_for_newcomer(items, progress, now):
    stats_service = LearnerStatsService(items=items, progress=progress, daily_goal=20)
    stats = await stats_service.get_stats("nobody", now)
    assert stats.xp == 0
    assert stats.level == 1
    assert stats.accuracy == 0
    assert stats.due.total == 0
    assert stats.daily_goal == 20
