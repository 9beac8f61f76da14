"""Habit strength scores.

A habit's strength on a given day blends the previous day's strength with
how much of the target was met over a trailing window:

    score = previous * m + percentage * (1 - m),  m = 0.5 ** (sqrt(freq) / 13)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping, Sequence

from habits.errors import HabitConfigError
from habits.models import (
    NUMERIC_SCALE,
    SKIP,
    YES_MANUAL,
    Frequency,
    NumericalHabitType,
    Score,
)
from habits.timestamp import Timestamp

logger = logging.getLogger(__name__)

DECAY_DIVISOR = 13


def compute_score(freq: float, previous: float, percentage: float) -> float:
    """One step of the exponential smoothing recurrence."""
    multiplier = math.pow(0.5, math.sqrt(freq) / DECAY_DIVISOR)
    score = previous * multiplier
    score += percentage * (1 - multiplier)
    return score


def _numeric_percentage(normalized: float, target: float, at_most: bool) -> float:
    if not at_most:
        return min(1.0, normalized / target) if target > 0 else 1.0
    if target > 0:
        return min(max(1 - (normalized - target) / target, 0.0), 1.0)
    return 0.0 if normalized > 0 else 1.0


class ScoreList:
    """Immutable day -> Score mapping produced by a single recompute."""

    def __init__(self, scores: Mapping[Timestamp, Score] | None = None) -> None:
        self._map: dict[Timestamp, Score] = dict(scores or {})

    def __getitem__(self, timestamp: Timestamp) -> Score:
        """Score for *timestamp*; days never computed read as 0.0."""
        found = self._map.get(timestamp)
        if found is None:
            return Score(timestamp, 0.0)
        return found

    def lookup(self, timestamp: Timestamp) -> Score | None:
        return self._map.get(timestamp)

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[Score]:
        for key in sorted(self._map):
            yield self._map[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreList):
            return NotImplemented
        return self._map == other._map

    def get_by_interval(self, from_day: Timestamp, to_day: Timestamp) -> list[Score]:
        """Scores from *to_day* back to *from_day*, newest first."""
        if from_day.is_newer_than(to_day):
            return []
        result = []
        current = to_day
        while not current.is_older_than(from_day):
            result.append(self[current])
            current = current.minus(1)
        return result

    @classmethod
    def recompute(
        cls,
        frequency: Frequency,
        is_numerical: bool,
        numerical_type: NumericalHabitType,
        target_value: float,
        entries: Sequence[int],
        from_day: Timestamp,
    ) -> ScoreList:
        """Walk *entries* (oldest first, starting at *from_day*) and score every day."""
        if not entries:
            raise HabitConfigError("Cannot compute scores over an empty entry list")
        if frequency.numerator <= 0 or frequency.denominator <= 0:
            raise HabitConfigError(f"Invalid frequency {frequency.numerator}/{frequency.denominator}")

        freq = frequency.to_float()
        numerator = frequency.numerator
        denominator = frequency.denominator
        # Non-daily yes/no habits get a wider window; the ratio is unchanged.
        if not is_numerical and freq < 1.0:
            numerator *= 2
            denominator *= 2

        at_most = numerical_type == NumericalHabitType.AT_MOST
        previous = 1.0 if is_numerical and at_most else 0.0
        rolling_sum = 0.0
        scores: dict[Timestamp, Score] = {}

        for i, value in enumerate(entries):
            expired = entries[i - denominator] if i >= denominator else None

            if is_numerical:
                rolling_sum += max(0, value)
                if expired is not None:
                    rolling_sum -= max(0, expired)
                if value != SKIP:
                    normalized = rolling_sum / NUMERIC_SCALE
                    percentage = _numeric_percentage(normalized, target_value, at_most)
                    previous = compute_score(freq, previous, percentage)
            else:
                if value == YES_MANUAL:
                    rolling_sum += 1
                if expired == YES_MANUAL:
                    rolling_sum -= 1
                if value != SKIP:
                    percentage = min(1.0, rolling_sum / numerator)
                    previous = compute_score(freq, previous, percentage)

            day = from_day.plus(i)
            scores[day] = Score(day, previous)

        logger.debug(
            "Recomputed %d scores from %s (freq=%d/%d, numerical=%s)",
            len(scores), from_day, frequency.numerator, frequency.denominator, is_numerical,
        )
        return cls(scores)
