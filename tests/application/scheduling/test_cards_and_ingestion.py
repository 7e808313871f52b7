from datetime import timedelta

import pytest
from pydantic import ValidationError

from revkids.application.scheduling.cards import apply_review, create_card
from revkids.application.scheduling.ingestion import ExerciseAttempt, response_from_attempt
from revkids.application.scheduling.scheduler import calculate_next_review
from revkids.domain.scheduling.models import ExerciseResponse, NewCard


# --- Card lifecycle ---


def test_create_card_uses_lifecycle_defaults(now):
    card = create_card("kid-1", "add-7", now=now)
    assert card.easiness_factor == 2.5
    assert card.repetition_number == 0
    assert card.interval == 1
    assert card.next_review == now
    assert card.last_review is None
    assert card.total_reviews == 0


def test_apply_review_folds_result_into_copy(make_card, now):
    card = make_card(
        repetition_number=2,
        interval=6,
        total_reviews=2,
        correct_answers=1,
        average_response_time=30.0,
    )
    response = ExerciseResponse(is_correct=True, time_spent=60, difficulty=2)
    result = calculate_next_review(card, 5, now=now)

    updated = apply_review(card, result, 5, response=response, now=now)

    assert updated is not card
    assert card.repetition_number == 2
    assert updated.repetition_number == 3
    assert updated.interval == 7
    assert updated.quality == 5
    assert updated.last_review == now
    assert updated.next_review == updated.last_review + timedelta(days=updated.interval)
    assert updated.total_reviews == 3
    assert updated.correct_answers == 2
    assert updated.average_response_time == pytest.approx(40.0)


def test_apply_review_without_response_keeps_counters(make_card, now):
    card = make_card(total_reviews=4, correct_answers=3, average_response_time=25.0)
    result = calculate_next_review(card, 1, now=now)
    updated = apply_review(card, result, 1, now=now)
    assert updated.total_reviews == 4
    assert updated.correct_answers == 3
    assert updated.average_response_time == 25.0
    assert updated.last_review == now


def test_apply_review_on_new_card_creates_it(now):
    new = NewCard("kid-1", "read-3")
    response = ExerciseResponse(is_correct=False, time_spent=20)
    result = calculate_next_review(new, 2, now=now)

    card = apply_review(new, result, 2, response=response, now=now)

    assert card.learner_id == "kid-1"
    assert card.item_id == "read-3"
    assert card.repetition_number == 0
    assert card.total_reviews == 1
    assert card.correct_answers == 0
    assert card.average_response_time == 20


def test_apply_review_on_anonymous_new_card_is_rejected(now):
    result = calculate_next_review(None, 4, now=now)
    with pytest.raises(ValueError):
        apply_review(NewCard(), result, 4, now=now)


# --- Ingestion ---


def test_attempt_maps_to_response():
    attempt = ExerciseAttempt(
        item_id="add-7", score=85, completed=True, time_spent=42, hints_used=1, confidence=4
    )
    response = response_from_attempt(attempt)
    assert response == ExerciseResponse(
        is_correct=True, time_spent=42, hints_used=1, difficulty=3, confidence=4
    )


@pytest.mark.parametrize(
    "score, completed, expected",
    [(70, True, True), (69.5, True, False), (100, False, False)],
)
def test_correctness_needs_completion_and_passing_score(score, completed, expected):
    attempt = ExerciseAttempt(item_id="x", score=score, completed=completed, time_spent=10)
    assert response_from_attempt(attempt).is_correct is expected


@pytest.mark.parametrize(
    "level, label, expected",
    [(0, "hard", 0), (None, "easy", 1), (None, "medium", 3), (None, "hard", 5), (None, None, 3)],
)
def test_difficulty_resolution(level, label, expected):
    attempt = ExerciseAttempt(
        item_id="x",
        score=50,
        completed=True,
        time_spent=10,
        difficulty_level=level,
        difficulty_label=label,
    )
    assert response_from_attempt(attempt).difficulty == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"time_spent": -1},
        {"score": 120},
        {"hints_used": -2},
        {"confidence": 7},
        {"difficulty_level": 6},
        {"difficulty_label": "impossible"},
        {"item_id": ""},
    ],
)
def test_malformed_attempts_are_rejected(overrides):
    fields = {"item_id": "x", "score": 50, "completed": True, "time_spent": 10}
    fields.update(overrides)
    with pytest.raises(ValidationError):
        ExerciseAttempt(**fields)
