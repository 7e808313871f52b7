"""
Card lifecycle helpers: creating a fresh card and folding a result into it.

Cards are frozen; both helpers return new instances.
"""

from dataclasses import replace
from datetime import datetime

from revkids.domain.scheduling.models import (
    CardInput,
    ExerciseResponse,
    NewCard,
    SpacedRepetitionCard,
    SuperMemoResult,
)
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy


def create_card(
    learner_id: str,
    item_id: str,
    now: datetime | None = None,
    policy: SchedulerPolicy = DEFAULT_POLICY,
) -> SpacedRepetitionCard:
    """Create the card stored on a learner's first response to an item."""
    now = now or datetime.now()
    return SpacedRepetitionCard(
        learner_id=learner_id,
        item_id=item_id,
        next_review=now,
        easiness_factor=policy.initial_easiness,
        repetition_number=0,
        interval=policy.initial_interval,
    )


def apply_review(
    card: CardInput,
    result: SuperMemoResult,
    quality: float,
    response: ExerciseResponse | None = None,
    now: datetime | None = None,
) -> SpacedRepetitionCard:
    """
    Fold a SuperMemoResult into a card, returning the updated copy.

    Tracking counters (total reviews, correct answers, average response
    time) are only advanced when the response is supplied.
    """
    now = now or datetime.now()

    if isinstance(card, NewCard):
        if card.learner_id is None or card.item_id is None:
            raise ValueError("NewCard needs learner_id and item_id to be stored")
        card = create_card(card.learner_id, card.item_id, now)

    total_reviews = card.total_reviews
    correct_answers = card.correct_answers
    average_time = card.average_response_time

    if response is not None:
        total_reviews += 1
        if response.is_correct:
            correct_answers += 1
        average_time = (
            average_time * card.total_reviews + response.time_spent
        ) / total_reviews

    return replace(
        card,
        easiness_factor=result.easiness_factor,
        repetition_number=result.repetition_number,
        interval=result.interval,
        last_review=now,
        next_review=result.next_review_date,
        quality=quality,
        total_reviews=total_reviews,
        correct_answers=correct_answers,
        average_response_time=average_time,
    )
