"""Day-granular timestamps: whole days since 1970-01-01 (UTC midnight)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

SECONDS_PER_DAY = 86_400

_EPOCH = date(1970, 1, 1)


@dataclass(frozen=True, order=True)
class Timestamp:
    """A calendar day as an integer count of days since the Unix epoch."""

    day: int

    @classmethod
    def from_seconds(cls, seconds: int) -> Timestamp:
        return cls(int(seconds) // SECONDS_PER_DAY)

    @classmethod
    def from_date(cls, d: date) -> Timestamp:
        return cls((d - _EPOCH).days)

    @property
    def seconds(self) -> int:
        """Unix time of this day's midnight (UTC)."""
        return self.day * SECONDS_PER_DAY

    def to_date(self) -> date:
        return _EPOCH + timedelta(days=self.day)

    def plus(self, offset: int) -> Timestamp:
        return Timestamp(self.day + offset)

    def minus(self, offset: int) -> Timestamp:
        return Timestamp(self.day - offset)

    def is_newer_than(self, other: Timestamp) -> bool:
        return self.day > other.day

    def is_older_than(self, other: Timestamp) -> bool:
        return self.day < other.day

    def __str__(self) -> str:
        return self.to_date().isoformat()
