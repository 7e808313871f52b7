# Application Scheduling Package
from .cards import apply_review, create_card
from .ingestion import ExerciseAttempt, response_from_attempt
from .planner import get_study_schedule
from .progress import analyze_learning_progress, get_personalized_recommendations
from .quality import calculate_quality, expected_time_for_difficulty
from .scheduler import (
    apply_interval_limits,
    calculate_next_review,
    classify_difficulty,
    resolve_state,
)
from .service import ReviewOutcome, ReviewService

__all__ = [
    "apply_review",
    "create_card",
    "ExerciseAttempt",
    "response_from_attempt",
    "get_study_schedule",
    "analyze_learning_progress",
    "get_personalized_recommendations",
    "calculate_quality",
    "expected_time_for_difficulty",
    "apply_interval_limits",
    "calculate_next_review",
    "classify_difficulty",
    "resolve_state",
    "ReviewOutcome",
    "ReviewService",
]
