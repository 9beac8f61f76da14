"""Per-day and per-month completion data for calendars and bar charts.

Works straight off the raw log; strength scores are not involved.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from datetime import date

from habits.errors import HabitConfigError
from habits.models import YES_MANUAL, Habit, MonthBucket
from habits.store import CompletionStore
from habits.timestamp import SECONDS_PER_DAY, Timestamp

logger = logging.getLogger(__name__)


def _month_end(month_start: date) -> date:
    last = calendar.monthrange(month_start.year, month_start.month)[1]
    return month_start.replace(day=last)


def _shift_month(d: date, months: int) -> date:
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def day_map_for_habit(
    habit: Habit,
    from_date: date,
    to_date: date,
    store: CompletionStore,
) -> dict[int, int]:
    """Fold raw log rows in ``[from_date, to_date]`` into {midnight seconds: value}.

    Yes/no habits record YES_MANUAL for any positive magnitude; numeric
    habits sum every magnitude logged on the day.
    """
    if from_date > to_date:
        raise HabitConfigError(f"Inverted interval: {from_date} is after {to_date}")

    from_ts = Timestamp.from_date(from_date).seconds
    to_ts = Timestamp.from_date(to_date).seconds + SECONDS_PER_DAY - 1
    day_map: dict[int, int] = defaultdict(int)
    for timestamp, value in store.raw_log_rows(habit.id, from_ts, to_ts):
        key = Timestamp.from_seconds(timestamp).seconds
        if habit.is_numerical:
            day_map[key] += value
        elif value > 0:
            day_map[key] = YES_MANUAL
    return dict(day_map)


def is_done(habit: Habit, value: int) -> bool:
    """Whether a day-map value marks the day as done (presence only, no target check)."""
    if habit.is_numerical:
        return value > 0
    return value == YES_MANUAL


def month_starts(months_back: int, today: date) -> list[date]:
    """First day of each of the last *months_back* months, oldest first, ending with today's."""
    if months_back < 1:
        raise HabitConfigError(f"months_back must be at least 1, got {months_back}")
    current = today.replace(day=1)
    return [_shift_month(current, -offset) for offset in range(months_back - 1, -1, -1)]


def month_buckets(
    habit: Habit,
    months_back: int,
    store: CompletionStore,
    today: date,
) -> list[MonthBucket]:
    """Count done days per calendar month, oldest month first."""
    starts = month_starts(months_back, today)
    day_map = day_map_for_habit(habit, starts[0], _month_end(starts[-1]), store)

    counts: dict[date, int] = {start: 0 for start in starts}
    for key, value in day_map.items():
        if is_done(habit, value):
            counts[Timestamp.from_seconds(key).to_date().replace(day=1)] += 1

    logger.debug("Bucketed %d logged days for habit %d into %d months", len(day_map), habit.id, len(starts))
    return [MonthBucket(month_start=start, count=counts[start]) for start in starts]
