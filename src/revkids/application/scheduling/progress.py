"""
Progress analyzer and rule-based study advisor.

This is a pure computation module with no I/O.
"""

from datetime import datetime, timedelta

from revkids.application.utils.numeric import round_half_up
from revkids.domain.scheduling.models import (
    ProgressStats,
    Recommendation,
    RecommendationKind,
    SpacedRepetitionCard,
)
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy


def is_mastered(card: SpacedRepetitionCard, policy: SchedulerPolicy = DEFAULT_POLICY) -> bool:
    return (
        card.easiness_factor >= policy.mastered_easiness
        and card.repetition_number >= policy.mastered_min_repetitions
    )


def is_difficult(card: SpacedRepetitionCard, policy: SchedulerPolicy = DEFAULT_POLICY) -> bool:
    return card.easiness_factor <= policy.difficult_easiness


def analyze_learning_progress(
    cards: list[SpacedRepetitionCard], policy: SchedulerPolicy = DEFAULT_POLICY
) -> ProgressStats:
    """
    Aggregate a learner's cards into mastery statistics.

    A card that is both mastered and difficult cannot exist under the
    default thresholds (EF >= 2.2 vs EF <= 1.6), so the three buckets
    always add up to the total.
    """
    if not cards:
        return ProgressStats(
            total_cards=0,
            mastered=0,
            learning=0,
            difficult=0,
            average_easiness=policy.initial_easiness,
            average_interval=0.0,
            success_rate=0.0,
        )

    total = len(cards)
    mastered = sum(1 for card in cards if is_mastered(card, policy))
    difficult = sum(1 for card in cards if is_difficult(card, policy))
    successful = sum(
        1
        for card in cards
        if card.easiness_factor >= policy.success_easiness
        and card.quality >= policy.success_quality
    )

    return ProgressStats(
        total_cards=total,
        mastered=mastered,
        learning=total - mastered - difficult,
        difficult=difficult,
        average_easiness=round_half_up(sum(card.easiness_factor for card in cards) / total, 2),
        average_interval=round_half_up(sum(card.interval for card in cards) / total, 1),
        success_rate=round_half_up(successful / total, 2),
    )


def get_personalized_recommendations(
    cards: list[SpacedRepetitionCard],
    now: datetime | None = None,
    policy: SchedulerPolicy = DEFAULT_POLICY,
) -> list[Recommendation]:
    """
    Produce study recommendations. Each rule is evaluated independently.

    Rules:
    - Difficult items (EF <= 1.6) -> focus on them.
    - More than 15 items due -> prioritize the 10 earliest.
    - Fewer than 30% of items practiced in the last 7 days -> study more often.
    """
    now = now or datetime.now()
    recommendations: list[Recommendation] = []

    difficult = [card for card in cards if is_difficult(card, policy)]
    if difficult:
        recommendations.append(
            Recommendation(
                kind=RecommendationKind.FOCUS_DIFFICULT,
                action="Focus on difficult items with extra practice",
                reason=f"{len(difficult)} items need additional attention",
                item_ids=tuple(card.item_id for card in difficult),
            )
        )

    due = [card for card in cards if card.next_review <= now]
    if len(due) > policy.review_overload_threshold:
        earliest = sorted(due, key=lambda card: card.next_review)
        recommendations.append(
            Recommendation(
                kind=RecommendationKind.PRIORITIZE_REVIEWS,
                action="Prioritize reviews to avoid overload",
                reason=f"{len(due)} items are due for review",
                item_ids=tuple(card.item_id for card in earliest[: policy.max_recommended_items]),
            )
        )

    recent_cutoff = now - timedelta(days=policy.recent_practice_days)
    recent = [
        card for card in cards if card.last_review is not None and card.last_review >= recent_cutoff
    ]
    if len(recent) < len(cards) * policy.min_practice_rate:
        recommendations.append(
            Recommendation(
                kind=RecommendationKind.INCREASE_FREQUENCY,
                action="Increase study frequency",
                reason="Regular practice helps maintain learning progress",
            )
        )

    return recommendations
