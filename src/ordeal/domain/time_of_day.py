"""Time-of-day progression."""
from __future__ import annotations

from typing import Dict, Tuple

from ordeal.core.types import TIMES_OF_DAY, TimeOfDay

PERIOD_HOURS: Dict[TimeOfDay, int] = {
    "dawn": 2,
    "morning": 4,
    "midday": 3,
    "afternoon": 4,
    "dusk": 2,
    "night": 9,
}

DAYLIGHT: frozenset[TimeOfDay] = frozenset({"morning", "midday", "afternoon"})
DARK: frozenset[TimeOfDay] = frozenset({"dusk", "night"})


def advance_time(current: TimeOfDay, hours: float) -> Tuple[TimeOfDay, float]:
    """Advance through the day cycle.

    Position inside a period is not tracked: a period is left only when the
    remaining hours cover its whole length. Returns the new period and the
    hours counted toward elapsed time.
    """
    index = TIMES_OF_DAY.index(current)
    remaining = hours
    total = 0.0
    while remaining > 0:
        length = PERIOD_HOURS[TIMES_OF_DAY[index]]
        if remaining >= length:
            remaining -= length
            total += length
            index = (index + 1) % len(TIMES_OF_DAY)
        else:
            total += remaining
            remaining = 0
    return TIMES_OF_DAY[index], total


def hours_until_dark(current: TimeOfDay) -> int:
    """Hours of daylight left counting from the start of the current period."""
    if current == "night":
        return 0
    hours = 0
    for name in TIMES_OF_DAY[TIMES_OF_DAY.index(current):]:
        if name == "night":
            break
        hours += PERIOD_HOURS[name]
    return hours


def is_dark(period: TimeOfDay) -> bool:
    return period in DARK
