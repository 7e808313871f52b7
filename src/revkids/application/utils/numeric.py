"""Numeric and date helpers shared by every scheduling component."""

import math
from datetime import datetime


def clamp(value: float, lower: float, upper: float) -> float:
    """Constrain value to [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with ties going up (2.5 -> 3, 0.125 -> 0.13 at 2 digits).

    Unlike the built-in round(), exact halves never round to even.
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_to_half(value: float) -> float:
    """Round to the nearest 0.5, ties up."""
    return math.floor(value * 2 + 0.5) / 2


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)
