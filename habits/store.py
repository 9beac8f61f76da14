"""Completion log storage.

The scoring and bucketing code only needs two reads from a store: a
single-day lookup and a timestamp range scan. ``WorkspaceStore`` keeps the
log in the workspace directory (habits.yaml + repetitions.json);
``InMemoryStore`` holds it in a dict.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from habits.errors import HabitNotFoundError
from habits.fileio import read_json, read_yaml, write_json_atomic
from habits.models import Habit, Repetition
from habits.timestamp import Timestamp
from habits.workspace import habits_path, repetitions_path, workspace_root

logger = logging.getLogger(__name__)


class CompletionStore(Protocol):
    def raw_log_value(self, habit_id: int, day: Timestamp) -> int | None:
        ...

    def raw_log_rows(self, habit_id: int, from_ts: int, to_ts: int) -> list[tuple[int, int]]:
        ...


# ── In-memory ─────────────────────────────────────────────────


class InMemoryStore:
    """Dict-backed store keyed by (habit id, midnight timestamp)."""

    def __init__(self, repetitions: list[Repetition] | None = None) -> None:
        self._rows: dict[tuple[int, int], Repetition] = {}
        for rep in repetitions or []:
            self.add_repetition(rep.habit, rep.timestamp, rep.value, rep.notes)

    def raw_log_value(self, habit_id: int, day: Timestamp) -> int | None:
        rep = self._rows.get((habit_id, day.seconds))
        return rep.value if rep else None

    def raw_log_rows(self, habit_id: int, from_ts: int, to_ts: int) -> list[tuple[int, int]]:
        rows = [
            (rep.timestamp, rep.value)
            for (hid, ts), rep in self._rows.items()
            if hid == habit_id and from_ts <= ts <= to_ts
        ]
        return sorted(rows)

    def add_repetition(self, habit_id: int, timestamp: int, value: int, notes: str = "") -> Repetition:
        ts = Timestamp.from_seconds(timestamp).seconds
        rep = Repetition(habit=habit_id, timestamp=ts, value=value, notes=notes)
        self._rows[(habit_id, ts)] = rep
        return rep

    def delete_repetition(self, habit_id: int, timestamp: int) -> bool:
        ts = Timestamp.from_seconds(timestamp).seconds
        return self._rows.pop((habit_id, ts), None) is not None

    def repetitions_for_day(self, day: Timestamp) -> dict[int, Repetition]:
        return {hid: rep for (hid, ts), rep in self._rows.items() if ts == day.seconds}


# ── Workspace files ───────────────────────────────────────────


class WorkspaceStore:
    """Store backed by habits.yaml and repetitions.json under a workspace root.

    Repetitions are re-read on every call so that writes from other
    processes are picked up; writes replace the whole file atomically.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = root if root is not None else workspace_root()

    # Habits (read-only)

    def load_habits(self, include_archived: bool = False) -> list[Habit]:
        data = read_yaml(habits_path(self.root))
        if isinstance(data, dict):
            data = data.get("habits")
        habits = [Habit.from_dict(h) for h in (data or []) if isinstance(h, dict)]
        if include_archived:
            return habits
        return [h for h in habits if not h.archived]

    def load_habit(self, habit_id: int) -> Habit:
        for habit in self.load_habits(include_archived=True):
            if habit.id == habit_id:
                return habit
        raise HabitNotFoundError(f"Habit #{habit_id} not found")

    # Repetitions

    def _load_repetitions(self) -> list[Repetition]:
        data = read_json(repetitions_path(self.root), default=[])
        return [Repetition.from_dict(r) for r in data if isinstance(r, dict)]

    def _save_repetitions(self, reps: list[Repetition]) -> None:
        reps = sorted(reps, key=lambda r: (r.habit, r.timestamp))
        write_json_atomic(repetitions_path(self.root), [r.to_dict() for r in reps])

    def raw_log_value(self, habit_id: int, day: Timestamp) -> int | None:
        """Sum of every value logged for the habit on *day*, or None if nothing was."""
        values = [rep.value for rep in self._load_repetitions() if rep.habit == habit_id and rep.day == day]
        return sum(values) if values else None

    def raw_log_rows(self, habit_id: int, from_ts: int, to_ts: int) -> list[tuple[int, int]]:
        rows = [
            (rep.timestamp, rep.value)
            for rep in self._load_repetitions()
            if rep.habit == habit_id and from_ts <= rep.timestamp <= to_ts
        ]
        return sorted(rows)

    def repetitions_for_day(self, day: Timestamp) -> dict[int, Repetition]:
        """Repetitions logged on *day*, keyed by habit id."""
        return {rep.habit: rep for rep in self._load_repetitions() if rep.day == day}

    def add_repetition(self, habit_id: int, timestamp: int, value: int, notes: str = "") -> Repetition:
        """Insert or replace the repetition for (habit, day)."""
        ts = Timestamp.from_seconds(timestamp).seconds
        rep = Repetition(habit=habit_id, timestamp=ts, value=value, notes=notes)
        reps = [r for r in self._load_repetitions() if not (r.habit == habit_id and r.day.seconds == ts)]
        reps.append(rep)
        self._save_repetitions(reps)
        logger.info("Logged repetition habit=%d day=%s value=%d", habit_id, Timestamp.from_seconds(ts), value)
        return rep

    def delete_repetition(self, habit_id: int, timestamp: int) -> bool:
        ts = Timestamp.from_seconds(timestamp).seconds
        reps = self._load_repetitions()
        kept = [r for r in reps if not (r.habit == habit_id and r.day.seconds == ts)]
        if len(kept) == len(reps):
            return False
        self._save_repetitions(kept)
        logger.info("Deleted repetition habit=%d day=%s", habit_id, Timestamp.from_seconds(ts))
        return True
