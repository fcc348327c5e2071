# 📄 File: care_scheduler/modules/care_management/domain/services/date_normalizer.py
# 🧭 Purpose (Layman Explanation):
# Decides which calendar day any date or timestamp belongs to, using one fixed
# "home" timezone for the whole app, so a watering planned for late evening
# never slips onto the next day just because it was stored in UTC.
# 🧪 Purpose (Technical Summary):
# Pure, stateless DateLike -> DayKey normalization. Date-only inputs keep their
# components; full timestamps are converted into the reference zone and the
# day is composed from year/month/day fields. Also converts caller input into
# aware due datetimes and moves due datetimes by whole calendar days.
# 🔗 Dependencies:
# datetime, zoneinfo, re, care_scheduler.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# task_matcher.py, recurrence_generator.py, command/query handlers,
# SQLAlchemy task store (due_day column), API path parameters

"""
Date normalization for the care scheduler.

Accepted inputs (``DateLike``):

- ``DayKey``: returned as-is
- ``datetime.date``: its own components
- ``"YYYY-MM-DD"``: its own components, never routed through a timestamp
- ``datetime.datetime`` or an ISO 8601 timestamp string: aware values are
  converted to the reference zone, naive values are read as reference-zone
  wall clock

Anything else raises ``InvalidDateError``.
"""

import re
from datetime import date, datetime, time, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from care_scheduler.modules.care_management.domain.models.day_key import DayKey
from care_scheduler.shared.config.settings import Settings
from care_scheduler.shared.core.exceptions import InvalidDateError

DateLike = Union[DayKey, date, datetime, str]

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateNormalizer:
    """
    Turns date values into DayKeys in a single reference timezone.

    Instances hold only immutable configuration and are safe to share
    between concurrent callers.
    """

    def __init__(self, reference_zone: Union[tzinfo, str] = "UTC", default_due_time: time = time(8, 0)):
        if isinstance(reference_zone, str):
            reference_zone = ZoneInfo(reference_zone)
        self._zone = reference_zone
        self._default_due_time = default_due_time

    @classmethod
    def from_settings(cls, settings: Settings) -> "DateNormalizer":
        return cls(settings.reference_zone, settings.default_due_time)

    @property
    def reference_zone(self) -> tzinfo:
        return self._zone

    @property
    def default_due_time(self) -> time:
        return self._default_due_time

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    def normalize(self, value: DateLike) -> DayKey:
        """
        Normalize a date value to its DayKey.

        Args:
            value: DayKey, date, datetime or ISO 8601 string

        Returns:
            DayKey of the value in the reference calendar

        Raises:
            InvalidDateError: If the value cannot be parsed as a date
        """
        parsed = self._parse(value)
        if isinstance(parsed, DayKey):
            return parsed
        return self._day_of_datetime(parsed)

    def normalize_as_date_only(self, value: DateLike) -> str:
        """Render a value's DayKey as a date-only ``YYYY-MM-DD`` string."""
        return self.normalize(value).isoformat()

    def same_day(self, left: DateLike, right: DateLike) -> bool:
        return self.normalize(left) == self.normalize(right)

    def today(self, now: Optional[datetime] = None) -> DayKey:
        """Current day in the reference zone."""
        return self._day_of_datetime(now or datetime.now(self._zone))

    # =========================================================================
    # DUE DATETIMES
    # =========================================================================

    def to_datetime(self, value: DateLike) -> datetime:
        """
        Convert a caller-supplied due date into an aware reference-zone datetime.

        Day-only values get the default due time.

        Raises:
            InvalidDateError: If the value cannot be parsed as a date
        """
        parsed = self._parse(value)
        if isinstance(parsed, DayKey):
            return self.at_day(parsed)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=self._zone)
        return parsed.astimezone(self._zone)

    def at_day(self, day: DayKey, at: Optional[time] = None) -> datetime:
        """Aware datetime for a day at a wall-clock time in the reference zone."""
        if at is None:
            at = self._default_due_time
        return datetime(
            day.year, day.month, day.day,
            at.hour, at.minute, at.second, at.microsecond,
            tzinfo=self._zone,
        )

    def shift(self, value: DateLike, days: int) -> datetime:
        """
        Move a due datetime by whole calendar days, keeping its wall-clock time.

        ``normalize(shift(v, n)) == normalize(v).plus_days(n)`` holds across
        DST transitions because the move is done on the calendar day.
        """
        local = self.to_datetime(value)
        day = self._day_of_datetime(local).plus_days(days)
        return self.at_day(day, local.time())

    # =========================================================================
    # PARSING
    # =========================================================================

    def _parse(self, value: DateLike) -> Union[DayKey, datetime]:
        if isinstance(value, DayKey):
            return value
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return DayKey.from_date(value)
        if isinstance(value, str):
            return self._parse_string(value)
        raise InvalidDateError(value)

    def _parse_string(self, value: str) -> Union[DayKey, datetime]:
        text = value.strip()
        if not text:
            raise InvalidDateError(value)

        if _DATE_ONLY.match(text):
            try:
                return DayKey.from_date(date.fromisoformat(text))
            except ValueError:
                raise InvalidDateError(value)

        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise InvalidDateError(value)

    def _day_of_datetime(self, value: datetime) -> DayKey:
        if value.tzinfo is not None:
            value = value.astimezone(self._zone)
        return DayKey(value.year, value.month, value.day)
