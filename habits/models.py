"""Typed dataclasses for the habits data model.

Habits and repetitions use from_dict/to_dict for YAML/JSON serialization.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from habits.errors import HabitConfigError
from habits.timestamp import Timestamp


# ── Entries ───────────────────────────────────────────────────

# Per-day entry values. Numeric habits store the logged magnitude instead.
SKIP = -1
NO = 0
YES_MANUAL = 1

# Numeric repetitions are stored with three implied decimal places.
NUMERIC_SCALE = 1000.0

BOOLEAN_HABIT = 0
NUMERICAL_HABIT = 1


class NumericalHabitType(Enum):
    AT_LEAST = 0
    AT_MOST = 1


# ── Frequency ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Frequency:
    """Target rate as "numerator times per denominator days"."""

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        if self.numerator <= 0 or self.denominator <= 0:
            raise HabitConfigError(
                f"Invalid frequency {self.numerator}/{self.denominator}: both parts must be positive"
            )

    def to_float(self) -> float:
        return self.numerator / self.denominator


# ── Habit ─────────────────────────────────────────────────────


@dataclass
class Habit:
    id: int = 0
    name: str = ""
    question: str = ""
    description: str = ""
    type: int = BOOLEAN_HABIT
    freq_num: int = 1
    freq_den: int = 1
    target_type: int = NumericalHabitType.AT_LEAST.value
    target_value: float = 0.0
    unit: str = ""
    archived: bool = False
    color: int = 0
    uuid: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        return cls(
            id=int(d.get("id", 0)),
            name=str(d.get("name", "")),
            question=str(d.get("question") or ""),
            description=str(d.get("description") or ""),
            type=int(d.get("type", BOOLEAN_HABIT)),
            freq_num=int(d.get("freq_num", 1)),
            freq_den=int(d.get("freq_den", 1)),
            target_type=int(d.get("target_type", NumericalHabitType.AT_LEAST.value)),
            target_value=float(d.get("target_value", 0.0)),
            unit=str(d.get("unit") or ""),
            archived=bool(d.get("archived", False)),
            color=int(d.get("color", 0)),
            uuid=str(d.get("uuid") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "freq_num": self.freq_num,
            "freq_den": self.freq_den,
        }
        if self.question:
            d["question"] = self.question
        if self.description:
            d["description"] = self.description
        if self.is_numerical:
            d["target_type"] = self.target_type
            d["target_value"] = self.target_value
            if self.unit:
                d["unit"] = self.unit
        if self.archived:
            d["archived"] = True
        if self.color:
            d["color"] = self.color
        if self.uuid:
            d["uuid"] = self.uuid
        return d

    @property
    def frequency(self) -> Frequency:
        return Frequency(self.freq_num, self.freq_den)

    @property
    def is_numerical(self) -> bool:
        return self.type == NUMERICAL_HABIT

    @property
    def numerical_type(self) -> NumericalHabitType:
        try:
            return NumericalHabitType(self.target_type)
        except ValueError:
            raise HabitConfigError(f"Habit #{self.id} has unknown target_type {self.target_type}")


# ── Repetitions ───────────────────────────────────────────────


@dataclass
class Repetition:
    habit: int = 0
    timestamp: int = 0  # unix seconds, midnight UTC
    value: int = 0
    notes: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Repetition:
        return cls(
            habit=int(d.get("habit", 0)),
            timestamp=int(d.get("timestamp", 0)),
            value=int(d.get("value", 0)),
            notes=str(d.get("notes") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "habit": self.habit,
            "timestamp": self.timestamp,
            "value": self.value,
        }
        if self.notes:
            d["notes"] = self.notes
        return d

    @property
    def day(self) -> Timestamp:
        return Timestamp.from_seconds(self.timestamp)


# ── Scores & buckets ──────────────────────────────────────────


@dataclass(frozen=True)
class Score:
    timestamp: Timestamp
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.timestamp.day,
            "date": str(self.timestamp),
            "value": self.value,
        }


@dataclass(frozen=True)
class MonthBucket:
    month_start: date
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"monthStart": self.month_start.isoformat(), "count": self.count}
