# Domain Scheduling Package
from .models import (
    CardInput,
    Difficulty,
    ExerciseResponse,
    NewCard,
    ProgressStats,
    Recommendation,
    RecommendationKind,
    ScheduleDay,
    SchedulingState,
    SpacedRepetitionCard,
    StudySchedule,
    SuperMemoResult,
)
from .policy import DEFAULT_POLICY, QualityWeights, SchedulerPolicy
from .ports import CardRepository

__all__ = [
    "CardInput",
    "Difficulty",
    "ExerciseResponse",
    "NewCard",
    "ProgressStats",
    "Recommendation",
    "RecommendationKind",
    "ScheduleDay",
    "SchedulingState",
    "SpacedRepetitionCard",
    "StudySchedule",
    "SuperMemoResult",
    "DEFAULT_POLICY",
    "QualityWeights",
    "SchedulerPolicy",
    "CardRepository",
]
