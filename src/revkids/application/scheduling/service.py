"""
Review Service — Application layer orchestrator.

Coordinates loading cards from the repository, running the pure scheduling
engine, and writing the updated card back.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from revkids.domain.scheduling.models import (
    NewCard,
    ProgressStats,
    Recommendation,
    SpacedRepetitionCard,
    StudySchedule,
    SuperMemoResult,
)
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy
from revkids.domain.scheduling.ports import CardRepository

from .cards import apply_review
from .ingestion import ExerciseAttempt, response_from_attempt
from .planner import get_study_schedule
from .progress import analyze_learning_progress, get_personalized_recommendations
from .quality import calculate_quality
from .scheduler import calculate_next_review

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of recording one attempt."""

    card: SpacedRepetitionCard
    result: SuperMemoResult
    quality: float


class ReviewService:
    """
    Application service for recording reviews and reporting on a learner's cards.

    Follows Dependency Inversion: depends on the CardRepository abstraction,
    not concrete adapter implementations.
    """

    def __init__(
        self,
        repo: CardRepository,
        policy: SchedulerPolicy | None = None,
    ):
        """
        Args:
            repo: The repository (port) for loading and storing cards.
            policy: Optional custom policy; uses the default tables if not provided.
        """
        self._repo = repo
        self._policy = policy or DEFAULT_POLICY

    async def record_attempt(
        self,
        learner_id: str,
        attempt: ExerciseAttempt,
        now: datetime | None = None,
    ) -> ReviewOutcome:
        """
        Score an attempt, reschedule the card and persist it.

        A first attempt on an item creates the card.
        """
        now = now or datetime.now()
        response = response_from_attempt(attempt)
        quality = calculate_quality(response, self._policy)

        async with self._repo.lock(learner_id, attempt.item_id):
            stored = await self._repo.get_card(learner_id, attempt.item_id)
            card = stored or NewCard(learner_id=learner_id, item_id=attempt.item_id)

            result = calculate_next_review(card, quality, now=now, policy=self._policy)
            updated = apply_review(card, result, quality, response=response, now=now)
            await self._repo.save_card(updated)

        logger.info(
            f"Reviewed {learner_id}/{attempt.item_id}: quality={quality} "
            f"interval={result.interval}d next={result.next_review_date:%Y-%m-%d}"
            + (" (new card)" if stored is None else "")
        )
        return ReviewOutcome(card=updated, result=result, quality=quality)

    async def get_schedule(
        self,
        learner_id: str,
        max_cards_per_day: int | None = None,
        now: datetime | None = None,
    ) -> StudySchedule:
        cards = await self._repo.list_cards(learner_id)
        return get_study_schedule(cards, max_cards_per_day, now=now, policy=self._policy)

    async def get_progress(self, learner_id: str) -> ProgressStats:
        cards = await self._repo.list_cards(learner_id)
        return analyze_learning_progress(cards, self._policy)

    async def get_recommendations(
        self, learner_id: str, now: datetime | None = None
    ) -> list[Recommendation]:
        cards = await self._repo.list_cards(learner_id)
        return get_personalized_recommendations(cards, now=now, policy=self._policy)
