"""
Quality estimator: raw learner response -> 0-5 quality score.

Scoring breakdown (additive, then clamped to [0, 5] and rounded to 0.5):
- Correctness: 0.5-3 points (correct = 3, incorrect = 1 or 0.5 by hints)
- Pacing: 0-1 points (natural pace = 1, slow but engaged = 0.5)
- Hint usage: 0-1 points (none = 1, reasonable = 0.5)
- Confidence: 0-0.5 bonus, only when self-reported
"""

import math

from revkids.application.utils.numeric import clamp, round_to_half
from revkids.domain import constants as c
from revkids.domain.scheduling.models import ExerciseResponse
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy


def expected_time_for_difficulty(
    difficulty: float, policy: SchedulerPolicy = DEFAULT_POLICY
) -> int:
    """Expected completion time in seconds for a difficulty tier (clamped to 0-5)."""
    times = policy.quality.expected_times
    tier = int(clamp(math.floor(difficulty), 0, len(times) - 1))
    return times[tier]


def calculate_quality(
    response: ExerciseResponse, policy: SchedulerPolicy = DEFAULT_POLICY
) -> float:
    w = policy.quality
    quality = 0.0

    if response.is_correct:
        quality += w.correct
    elif response.hints_used <= 1:
        quality += w.incorrect_few_hints
    else:
        quality += w.incorrect_many_hints

    # Too fast means guessing, too slow means struggling
    ratio = response.time_spent / expected_time_for_difficulty(response.difficulty, policy)
    if w.time_good_min <= ratio <= w.time_good_max:
        quality += w.time_good
    elif w.time_good_max < ratio <= w.time_ok_max:
        quality += w.time_ok

    if response.hints_used == 0:
        quality += w.hints_none
    elif response.hints_used <= w.hints_reasonable_max:
        quality += w.hints_reasonable

    if response.confidence is not None:
        quality += (response.confidence / w.confidence_max) * w.confidence_bonus

    return round_to_half(clamp(quality, c.MIN_QUALITY, c.MAX_QUALITY))
