"""
Domain models for spaced-repetition scheduling.

These are pure data structures with no I/O or external dependencies.
Cards are frozen: the engine always returns new instances.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Union

from revkids.domain import constants as c


class Difficulty(str, Enum):
    """Diagnostic difficulty bucket derived from EF and repetition count."""

    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very_hard"


class RecommendationKind(str, Enum):
    FOCUS_DIFFICULT = "focus_difficult"
    PRIORITIZE_REVIEWS = "prioritize_reviews"
    INCREASE_FREQUENCY = "increase_frequency"


@dataclass(frozen=True)
class ExerciseResponse:
    """
    One learner interaction, as packaged by the ingestion layer.

    Attributes:
        is_correct: Whether the answer was right.
        time_spent: Seconds spent on the item.
        hints_used: Number of hints revealed.
        difficulty: Nominal difficulty tier of the item (0-5).
        confidence: Optional self-reported confidence (0-5).
    """

    is_correct: bool
    time_spent: float
    hints_used: int = 0
    difficulty: int = c.DEFAULT_DIFFICULTY_LEVEL
    confidence: float | None = None


@dataclass(frozen=True)
class NewCard:
    """An item the learner has never answered. Scheduled with defaults."""

    learner_id: str | None = None
    item_id: str | None = None


@dataclass(frozen=True)
class SpacedRepetitionCard:
    """
    Scheduling state for one (learner, item) pair.

    Owned by the persistence layer; the engine reads it and returns copies.
    """

    learner_id: str
    item_id: str
    next_review: datetime
    easiness_factor: float = c.INITIAL_EASINESS_FACTOR
    repetition_number: int = 0
    interval: int = c.INITIAL_INTERVAL
    last_review: datetime | None = None
    quality: float = 0.0

    # Performance tracking
    total_reviews: int = 0
    correct_answers: int = 0
    average_response_time: float = 0.0


CardInput = Union[NewCard, SpacedRepetitionCard]


@dataclass(frozen=True)
class SchedulingState:
    """Normalized scheduler input, resolved from a CardInput."""

    easiness_factor: float
    repetition_number: int
    interval: int
    next_review: datetime | None


@dataclass(frozen=True)
class SuperMemoResult:
    """Output of one scheduling step. Folded back into the card by the caller."""

    easiness_factor: float
    repetition_number: int
    interval: int
    next_review_date: datetime
    should_review: bool
    difficulty: Difficulty


@dataclass(frozen=True)
class ScheduleDay:
    date: date
    cards: list[SpacedRepetitionCard] = field(default_factory=list)


@dataclass(frozen=True)
class StudySchedule:
    due: list[SpacedRepetitionCard]
    upcoming: list[SpacedRepetitionCard]
    schedule: list[ScheduleDay]


@dataclass(frozen=True)
class ProgressStats:
    total_cards: int
    mastered: int
    learning: int
    difficult: int
    average_easiness: float
    average_interval: float
    success_rate: float


@dataclass(frozen=True)
class Recommendation:
    kind: RecommendationKind
    action: str
    reason: str
    item_ids: tuple[str, ...] = ()
