"""Centralized constants for the revkids scheduling engine.

All magic numbers live here so the policy tables, the engine and the
reporting layer import from a single source of truth.
"""

# ---------- Easiness factor ----------
MIN_EASINESS_FACTOR = 1.3
MAX_EASINESS_FACTOR = 2.5
INITIAL_EASINESS_FACTOR = 2.5
EASINESS_PENALTY = 0.15  # Applied on failure, gentler than canonical SM-2

# EF' = EF + (BASE - d * (LINEAR + d * QUADRATIC)), d = 5 - quality
EASINESS_FORMULA_BASE = 0.1
EASINESS_FORMULA_LINEAR = 0.08
EASINESS_FORMULA_QUADRATIC = 0.02

# ---------- Quality ----------
MIN_QUALITY = 0.0
MAX_QUALITY = 5.0
SUCCESS_QUALITY_THRESHOLD = 2.5

# Expected seconds per difficulty tier 0..5
EXPECTED_TIMES = (30, 45, 60, 90, 120, 180)

# ---------- Intervals (days) ----------
INITIAL_INTERVAL = 1
SECOND_INTERVAL = 6
MIN_INTERVAL = 1

# (max repetition number, max interval); last bucket is open-ended
INTERVAL_CAPS = ((2, 3), (4, 7), (8, 14))
MAX_INTERVAL = 30

# ---------- Difficulty classification ----------
EASY_THRESHOLD = 2.3
MEDIUM_THRESHOLD = 2.0
HARD_THRESHOLD = 1.6

# ---------- Study planner ----------
DEFAULT_MAX_CARDS_PER_DAY = 10
SCHEDULE_DAYS = 7

# ---------- Progress analysis ----------
MASTERED_EASINESS = 2.2
MASTERED_MIN_REPETITIONS = 3
DIFFICULT_EASINESS = 1.6
SUCCESS_EASINESS = 2.0
SUCCESS_QUALITY = 3

# ---------- Recommendations ----------
REVIEW_OVERLOAD_THRESHOLD = 15
RECENT_PRACTICE_DAYS = 7
MIN_PRACTICE_RATE = 0.3
MAX_RECOMMENDED_ITEMS = 10

# ---------- Response ingestion ----------
CORRECT_SCORE_THRESHOLD = 70
DEFAULT_DIFFICULTY_LEVEL = 3
DIFFICULTY_LABELS = {"easy": 1, "medium": 3, "hard": 5}
