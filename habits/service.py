"""Entry points used by the presentation layer.

Each call reads what it needs from the store and computes from scratch;
nothing is cached between calls.
"""

from __future__ import annotations

from datetime import date

from habits import workspace
from habits.buckets import day_map_for_habit, month_buckets
from habits.entries import compute_entries
from habits.errors import HabitConfigError
from habits.models import YES_MANUAL, Habit, MonthBucket, Score
from habits.scores import ScoreList
from habits.store import CompletionStore, InMemoryStore, WorkspaceStore
from habits.timestamp import Timestamp


def _store_today(store: CompletionStore) -> date:
    """Today in the timezone of the store's workspace (env root for other stores)."""
    if isinstance(store, WorkspaceStore):
        return workspace.today(store.root)
    return workspace.today()


def compute_scores(
    habit: Habit,
    window_days: int,
    store: CompletionStore,
    today: date | None = None,
) -> list[Score]:
    """Strength for each of the last *window_days* days ending today, oldest first."""
    if window_days < 1:
        raise HabitConfigError(f"window_days must be at least 1, got {window_days}")
    if today is None:
        today = _store_today(store)

    to_day = Timestamp.from_date(today)
    from_day = to_day.minus(window_days - 1)

    # Same per-day fold as the calendar, so both read a day identically.
    day_map = day_map_for_habit(habit, from_day.to_date(), today, store)
    entries = compute_entries(habit, from_day, to_day, lambda day: day_map.get(day.seconds))
    scores = ScoreList.recompute(
        frequency=habit.frequency,
        is_numerical=habit.is_numerical,
        numerical_type=habit.numerical_type,
        target_value=habit.target_value,
        entries=entries,
        from_day=from_day,
    )
    return list(reversed(scores.get_by_interval(from_day, to_day)))


def compute_month_buckets(
    habit: Habit,
    months_back: int,
    store: CompletionStore,
    today: date | None = None,
) -> list[MonthBucket]:
    """Done-day counts for the last *months_back* calendar months, oldest first."""
    if today is None:
        today = _store_today(store)
    return month_buckets(habit, months_back, store, today)


def done_today(store: WorkspaceStore | InMemoryStore, today: date | None = None) -> set[int]:
    """Ids of habits with a positive repetition logged today."""
    if today is None:
        today = _store_today(store)
    reps = store.repetitions_for_day(Timestamp.from_date(today))
    return {habit_id for habit_id, rep in reps.items() if rep.value > 0}


def toggle_repetition(habit: Habit, day: date, store: WorkspaceStore | InMemoryStore) -> bool:
    """Flip a day between done and not done. Returns True if the day is now done."""
    ts = Timestamp.from_date(day)
    if store.raw_log_value(habit.id, ts) is not None:
        store.delete_repetition(habit.id, ts.seconds)
        return False
    store.add_repetition(habit.id, ts.seconds, YES_MANUAL)
    return True
