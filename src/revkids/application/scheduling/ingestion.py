"""
Response ingestion: validates a raw exercise attempt and packages it into
the ExerciseResponse shape the engine consumes.

Malformed attempts are rejected here with a pydantic ValidationError so
that the engine only ever sees well-typed input.
"""

from typing import Literal

from pydantic import BaseModel, Field

from revkids.domain import constants as c
from revkids.domain.scheduling.models import ExerciseResponse


class ExerciseAttempt(BaseModel):
    item_id: str = Field(min_length=1)
    score: float = Field(ge=0, le=100)
    completed: bool
    time_spent: float = Field(ge=0)
    difficulty_level: int | None = Field(default=None, ge=0, le=5)
    difficulty_label: Literal["easy", "medium", "hard"] | None = None
    hints_used: int = Field(default=0, ge=0)
    confidence: float | None = Field(default=None, ge=0, le=5)


def resolve_difficulty(attempt: ExerciseAttempt) -> int:
    """Explicit level wins, then the item's label, then medium."""
    if attempt.difficulty_level is not None:
        return attempt.difficulty_level
    if attempt.difficulty_label is not None:
        return c.DIFFICULTY_LABELS[attempt.difficulty_label]
    return c.DEFAULT_DIFFICULTY_LEVEL


def response_from_attempt(attempt: ExerciseAttempt) -> ExerciseResponse:
    return ExerciseResponse(
        is_correct=attempt.completed and attempt.score >= c.CORRECT_SCORE_THRESHOLD,
        time_spent=attempt.time_spent,
        hints_used=attempt.hints_used,
        difficulty=resolve_difficulty(attempt),
        confidence=attempt.confidence,
    )
