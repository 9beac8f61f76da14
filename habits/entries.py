"""Daily entry extraction: one value per calendar day from the raw log."""

from __future__ import annotations

from typing import Callable

from habits.errors import HabitConfigError
from habits.models import NO, YES_MANUAL, Habit
from habits.timestamp import Timestamp

RawValueLookup = Callable[[Timestamp], "int | None"]


def compute_entries(
    habit: Habit,
    from_day: Timestamp,
    to_day: Timestamp,
    raw_value: RawValueLookup,
) -> list[int]:
    """Build the entry list for ``[from_day, to_day]``, oldest first.

    Every day in the interval counts as applicable, so days with no log
    read as NO and SKIP is never produced here. Boolean habits collapse
    any positive magnitude to YES_MANUAL; numeric habits keep the raw
    (x1000) magnitude.
    """
    if from_day.is_newer_than(to_day):
        raise HabitConfigError(f"Inverted interval: {from_day} is after {to_day}")

    entries = []
    for offset in range(to_day.day - from_day.day + 1):
        value = raw_value(from_day.plus(offset))
        if value is None:
            entries.append(NO)
        elif habit.is_numerical:
            entries.append(value)
        else:
            entries.append(YES_MANUAL if value > 0 else NO)
    return entries
