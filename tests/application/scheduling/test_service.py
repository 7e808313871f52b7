import asyncio
from contextlib import nullcontext
from dataclasses import replace
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from revkids.application.scheduling.ingestion import ExerciseAttempt
from revkids.application.scheduling.service import ReviewService
from revkids.domain.scheduling.policy import DEFAULT_POLICY
from revkids.infrastructure.adapters.memory_repository import InMemoryCardRepository


@pytest.fixture
def mock_repo():
    repo = AsyncMock()
    repo.lock = MagicMock(return_value=nullcontext())
    return repo


def _attempt(item_id="add-7", **overrides):
    fields = {"item_id": item_id, "score": 90, "completed": True, "time_spent": 60}
    fields.update(overrides)
    return ExerciseAttempt(**fields)


@pytest.mark.asyncio
async def test_first_attempt_creates_card(mock_repo, now):
    mock_repo.get_card.return_value = None
    service = ReviewService(repo=mock_repo)

    outcome = await service.record_attempt("kid-1", _attempt(), now=now)

    mock_repo.get_card.assert_awaited_once_with("kid-1", "add-7")
    mock_repo.save_card.assert_awaited_once_with(outcome.card)
    mock_repo.lock.assert_called_once_with("kid-1", "add-7")
    assert outcome.quality == 5.0
    assert outcome.card.repetition_number == 1
    assert outcome.card.interval == 1
    assert outcome.card.next_review == now + timedelta(days=1)
    assert outcome.card.total_reviews == 1


@pytest.mark.asyncio
async def test_existing_card_is_rescheduled(mock_repo, make_card, now):
    mock_repo.get_card.return_value = make_card(
        "add-7", easiness_factor=2.5, repetition_number=2, interval=6, total_reviews=2
    )
    service = ReviewService(repo=mock_repo)

    outcome = await service.record_attempt(
        "kid-1", _attempt(score=20, hints_used=3, time_spent=300), now=now
    )

    assert outcome.quality < 2.5
    assert outcome.result.repetition_number == 1
    assert outcome.card.interval == 1
    assert outcome.card.easiness_factor == pytest.approx(2.35)
    assert outcome.card.total_reviews == 3


@pytest.mark.asyncio
async def test_reporting_reads_learner_cards(make_card, now):
    repo = InMemoryCardRepository(
        [
            make_card("a", next_review=now - timedelta(days=1), easiness_factor=1.4),
            make_card("b", next_review=now + timedelta(days=2)),
            make_card("c", learner_id="kid-2"),
        ]
    )
    service = ReviewService(repo=repo)

    schedule = await service.get_schedule("kid-1", now=now)
    progress = await service.get_progress("kid-1")
    recs = await service.get_recommendations("kid-1", now=now)

    assert [c.item_id for c in schedule.due] == ["a"]
    assert [c.item_id for c in schedule.upcoming] == ["b"]
    assert progress.total_cards == 2
    assert progress.difficult == 1
    assert recs[0].item_ids == ("a",)


@pytest.mark.asyncio
async def test_custom_policy_daily_budget(make_card, now):
    repo = InMemoryCardRepository(
        [make_card(f"i{n}", next_review=now - timedelta(days=n + 1)) for n in range(5)]
    )
    service = ReviewService(repo=repo, policy=replace(DEFAULT_POLICY, max_cards_per_day=2))

    schedule = await service.get_schedule("kid-1", now=now)

    assert len(schedule.due) == 2


class YieldingCardRepository(InMemoryCardRepository):
    """Hands control back to the event loop between reading a card and returning it."""

    async def get_card(self, learner_id, item_id):
        card = await super().get_card(learner_id, item_id)
        await asyncio.sleep(0)
        return card


class UnlockedCardRepository(YieldingCardRepository):
    def lock(self, learner_id, item_id):
        return nullcontext()


@pytest.mark.asyncio
async def test_concurrent_attempts_on_same_item_are_serialized(now):
    repo = YieldingCardRepository()
    service = ReviewService(repo=repo)

    await asyncio.gather(*(service.record_attempt("kid-1", _attempt(), now=now) for _ in range(3)))

    card = await repo.get_card("kid-1", "add-7")
    assert card.total_reviews == 3
    assert card.repetition_number == 3


@pytest.mark.asyncio
async def test_concurrent_attempts_without_lock_lose_updates(now):
    repo = UnlockedCardRepository()
    service = ReviewService(repo=repo)

    await asyncio.gather(*(service.record_attempt("kid-1", _attempt(), now=now) for _ in range(3)))

    card = await repo.get_card("kid-1", "add-7")
    assert card.total_reviews == 1
    assert card.repetition_number == 1
