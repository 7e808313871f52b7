"""
Scheduling policy tables.

Immutable configuration passed into every engine operation. Defaults are
tuned for children aged 6-11: short caps on intervals and a soft failure
penalty.
"""

from dataclasses import dataclass, field

from revkids.domain import constants as c


@dataclass(frozen=True)
class QualityWeights:
    """Additive weights used to turn a raw response into a 0-5 quality score."""

    correct: float = 3.0
    incorrect_few_hints: float = 1.0
    incorrect_many_hints: float = 0.5
    time_good_min: float = 0.5
    time_good_max: float = 2.0
    time_ok_max: float = 3.0
    time_good: float = 1.0
    time_ok: float = 0.5
    hints_none: float = 1.0
    hints_reasonable: float = 0.5
    hints_reasonable_max: int = 2
    confidence_max: float = 5.0
    confidence_bonus: float = 0.5
    expected_times: tuple[int, ...] = c.EXPECTED_TIMES


@dataclass(frozen=True)
class SchedulerPolicy:
    quality: QualityWeights = field(default_factory=QualityWeights)

    min_easiness: float = c.MIN_EASINESS_FACTOR
    max_easiness: float = c.MAX_EASINESS_FACTOR
    initial_easiness: float = c.INITIAL_EASINESS_FACTOR
    easiness_penalty: float = c.EASINESS_PENALTY
    success_threshold: float = c.SUCCESS_QUALITY_THRESHOLD

    initial_interval: int = c.INITIAL_INTERVAL
    second_interval: int = c.SECOND_INTERVAL
    interval_caps: tuple[tuple[int, int], ...] = c.INTERVAL_CAPS
    max_interval: int = c.MAX_INTERVAL

    easy_threshold: float = c.EASY_THRESHOLD
    medium_threshold: float = c.MEDIUM_THRESHOLD
    hard_threshold: float = c.HARD_THRESHOLD

    max_cards_per_day: int = c.DEFAULT_MAX_CARDS_PER_DAY
    schedule_days: int = c.SCHEDULE_DAYS

    mastered_easiness: float = c.MASTERED_EASINESS
    mastered_min_repetitions: int = c.MASTERED_MIN_REPETITIONS
    difficult_easiness: float = c.DIFFICULT_EASINESS
    success_easiness: float = c.SUCCESS_EASINESS
    success_quality: float = c.SUCCESS_QUALITY

    review_overload_threshold: int = c.REVIEW_OVERLOAD_THRESHOLD
    recent_practice_days: int = c.RECENT_PRACTICE_DAYS
    min_practice_rate: float = c.MIN_PRACTICE_RATE
    max_recommended_items: int = c.MAX_RECOMMENDED_ITEMS

    def interval_cap(self, repetition_number: int) -> int:
        """Maximum interval allowed for a given maturity bucket."""
        for max_repetition, cap in self.interval_caps:
            if repetition_number <= max_repetition:
                return cap
        return self.max_interval


DEFAULT_POLICY = SchedulerPolicy()
