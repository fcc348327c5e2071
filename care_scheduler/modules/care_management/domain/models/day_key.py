# 📄 File: care_scheduler/modules/care_management/domain/models/day_key.py
# 🧭 Purpose (Layman Explanation):
# A "day key" is the scheduler's way of naming one calendar day (like
# 2025-04-06) so that two moments a person would call "the same day" always
# get the same name, whatever time or timezone they were written with.
# 🧪 Purpose (Technical Summary):
# Immutable value object (year, month, day) with structural equality and
# ordering, ISO rendering, calendar arithmetic and half-open day ranges.
# 🔗 Dependencies:
# dataclasses, datetime
# 🔄 Connected Modules / Calls From:
# date_normalizer.py, task_matcher.py, recurrence_generator.py, task filters,
# query handlers, API schemas

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator


@dataclass(frozen=True, order=True)
class DayKey:
    """
    Canonical calendar-day identifier in the reference calendar.

    Equality and ordering compare (year, month, day) component-wise.
    Construction validates the components as a real calendar date.
    """

    year: int
    month: int
    day: int

    def __post_init__(self):
        # Raises ValueError for impossible days such as 2025-02-30
        date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "DayKey":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def plus_days(self, days: int) -> "DayKey":
        return DayKey.from_date(self.to_date() + timedelta(days=days))

    def days_until(self, other: "DayKey") -> int:
        return (other.to_date() - self.to_date()).days

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class DayRange:
    """Half-open range of days: start included, end excluded."""

    start: DayKey
    end: DayKey

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Day range end {self.end} is before start {self.start}")

    @classmethod
    def single(cls, day: DayKey) -> "DayRange":
        return cls(day, day.plus_days(1))

    @classmethod
    def around(cls, day: DayKey, padding_days: int = 1) -> "DayRange":
        return cls(day.plus_days(-padding_days), day.plus_days(padding_days + 1))

    @classmethod
    def month(cls, year: int, month: int) -> "DayRange":
        start = DayKey(year, month, 1)
        end = DayKey(year + 1, 1, 1) if month == 12 else DayKey(year, month + 1, 1)
        return cls(start, end)

    def __contains__(self, day: DayKey) -> bool:
        return self.start <= day < self.end

    def __iter__(self) -> Iterator[DayKey]:
        current = self.start
        while current < self.end:
            yield current
            current = current.plus_days(1)

    def __len__(self) -> int:
        return self.start.days_until(self.end)
