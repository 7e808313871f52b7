"""
Study planner for a learner's card snapshot.

Partitions cards into:
1. Due today (capped at the daily review budget)
2. Upcoming within the next week
3. A 7-day calendar, one bucket per date
"""

from datetime import datetime, timedelta

from revkids.application.utils.numeric import start_of_day
from revkids.domain.scheduling.models import ScheduleDay, SpacedRepetitionCard, StudySchedule
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy


def _by_due_date(card: SpacedRepetitionCard) -> datetime:
    return card.next_review


def get_study_schedule(
    cards: list[SpacedRepetitionCard],
    max_cards_per_day: int | None = None,
    now: datetime | None = None,
    policy: SchedulerPolicy = DEFAULT_POLICY,
) -> StudySchedule:
    """
    Build the study plan for a snapshot of cards.

    Args:
        cards: All of a learner's cards.
        max_cards_per_day: Daily review budget (default: policy value, 10).
        now: Reference time; only its date is used.
        policy: Scheduling tables.

    Returns:
        StudySchedule with due, upcoming and a per-day calendar.
    """
    limit = policy.max_cards_per_day if max_cards_per_day is None else max(0, max_cards_per_day)
    today = start_of_day(now or datetime.now())
    horizon = today + timedelta(days=policy.schedule_days)

    # sorted() is stable, so equal due dates keep input order
    due = sorted((card for card in cards if card.next_review <= today), key=_by_due_date)
    upcoming = sorted(
        (card for card in cards if today < card.next_review <= horizon), key=_by_due_date
    )

    schedule = []
    for offset in range(policy.schedule_days):
        day = (today + timedelta(days=offset)).date()
        cards_for_day = [card for card in cards if card.next_review.date() == day]
        schedule.append(ScheduleDay(date=day, cards=cards_for_day[:limit]))

    return StudySchedule(due=due[:limit], upcoming=upcoming, schedule=schedule)
