"""
Review scheduler: a SuperMemo-2 variant for young learners.

Differences from canonical SM-2:
- Success threshold is 2.5 instead of 3.
- A failure steps the repetition count back by one instead of zeroing it.
- A failure costs 0.15 EF instead of the full SM-2 penalty.
- Intervals are capped per maturity bucket (3/7/14/30 days).

Stateless and side-effect free. Pass `now` for deterministic output.
"""

import logging
from datetime import datetime, timedelta

from revkids.application.utils.numeric import clamp, round_half_up
from revkids.domain import constants as c
from revkids.domain.scheduling.models import (
    CardInput,
    Difficulty,
    NewCard,
    SchedulingState,
    SuperMemoResult,
)
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy

logger = logging.getLogger(__name__)


def resolve_state(
    card: CardInput | None, policy: SchedulerPolicy = DEFAULT_POLICY
) -> SchedulingState:
    """
    Normalize a new or existing card into scheduler input.

    New cards get EF=initial, repetition 0 and interval 0. Existing values
    are pulled back into range.
    """
    if card is None or isinstance(card, NewCard):
        return SchedulingState(
            easiness_factor=policy.initial_easiness,
            repetition_number=0,
            interval=0,
            next_review=None,
        )

    return SchedulingState(
        easiness_factor=clamp(card.easiness_factor, policy.min_easiness, policy.max_easiness),
        repetition_number=max(0, int(card.repetition_number)),
        interval=max(0, int(card.interval)),
        next_review=card.next_review,
    )


def calculate_next_review(
    card: CardInput | None,
    quality: float,
    now: datetime | None = None,
    policy: SchedulerPolicy = DEFAULT_POLICY,
) -> SuperMemoResult:
    """
    Compute the next scheduling state for a card after a review.

    Args:
        card: Existing card, NewCard, or None for an item with no history.
        quality: Quality score (0-5), usually from calculate_quality().
        now: Reference time. Defaults to the current local time.
        policy: Scheduling tables.

    Returns:
        SuperMemoResult with updated EF, repetition, interval and due date.
    """
    now = now or datetime.now()
    state = resolve_state(card, policy)
    quality = clamp(quality, c.MIN_QUALITY, c.MAX_QUALITY)

    if quality >= policy.success_threshold:
        easiness, repetition, interval = _process_success(state, quality, policy)
    else:
        easiness, repetition, interval = _process_failure(state, policy)

    interval = apply_interval_limits(interval, repetition, policy)
    easiness = clamp(round_half_up(easiness, 2), policy.min_easiness, policy.max_easiness)
    should_review = state.next_review is None or now >= state.next_review

    logger.debug(
        f"quality={quality} ef={state.easiness_factor}->{easiness} "
        f"rep={state.repetition_number}->{repetition} interval={interval}"
    )

    return SuperMemoResult(
        easiness_factor=easiness,
        repetition_number=repetition,
        interval=interval,
        next_review_date=now + timedelta(days=interval),
        should_review=should_review,
        difficulty=classify_difficulty(easiness, repetition, policy),
    )


def _process_success(
    state: SchedulingState, quality: float, policy: SchedulerPolicy
) -> tuple[float, int, int]:
    repetition = state.repetition_number + 1

    if repetition == 1:
        interval = policy.initial_interval
    elif repetition == 2:
        interval = policy.second_interval
    else:
        interval = int(round_half_up(state.interval * state.easiness_factor))

    # EF' = EF + (0.1 - d * (0.08 + d * 0.02)), d = 5 - q
    d = 5 - quality
    easiness = state.easiness_factor + (
        c.EASINESS_FORMULA_BASE
        - d * (c.EASINESS_FORMULA_LINEAR + d * c.EASINESS_FORMULA_QUADRATIC)
    )
    easiness = clamp(easiness, policy.min_easiness, policy.max_easiness)

    return easiness, repetition, interval


def _process_failure(state: SchedulingState, policy: SchedulerPolicy) -> tuple[float, int, int]:
    repetition = max(0, state.repetition_number - 1)
    easiness = max(policy.min_easiness, state.easiness_factor - policy.easiness_penalty)
    return easiness, repetition, c.MIN_INTERVAL


def apply_interval_limits(
    interval: int, repetition_number: int, policy: SchedulerPolicy = DEFAULT_POLICY
) -> int:
    """Cap an interval by the maturity bucket of the new repetition number."""
    return max(c.MIN_INTERVAL, min(interval, policy.interval_cap(repetition_number)))


def classify_difficulty(
    easiness_factor: float, repetition_number: int, policy: SchedulerPolicy = DEFAULT_POLICY
) -> Difficulty:
    if repetition_number <= 1:
        return Difficulty.BEGINNER
    if easiness_factor >= policy.easy_threshold:
        return Difficulty.EASY
    if easiness_factor >= policy.medium_threshold:
        return Difficulty.MEDIUM
    if easiness_factor >= policy.hard_threshold:
        return Difficulty.HARD
    return Difficulty.VERY_HARD
