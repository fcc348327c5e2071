# tests/test_date_normalizer.py

from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

import pytest

from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.shared.core.exceptions import InvalidDateError

PARIS = ZoneInfo("Europe/Paris")


def test_date_only_string_keeps_its_components(normalizer: DateNormalizer) -> None:
    assert normalizer.normalize("2025-04-06") == DayKey(2025, 4, 6)


def test_date_only_string_is_never_shifted_by_the_reference_zone() -> None:
    far_west = DateNormalizer("Pacific/Honolulu")
    far_east = DateNormalizer("Pacific/Kiritimati")

    assert far_west.normalize("2025-04-06") == DayKey(2025, 4, 6)
    assert far_east.normalize("2025-04-06") == DayKey(2025, 4, 6)


def test_day_key_and_date_inputs(normalizer: DateNormalizer) -> None:
    key = DayKey(2025, 4, 6)
    assert normalizer.normalize(key) is key
    assert normalizer.normalize(date(2025, 4, 6)) == key


def test_utc_timestamp_late_evening_lands_on_next_paris_day(
    normalizer: DateNormalizer,
    utc_normalizer: DateNormalizer,
) -> None:
    # 23:30 UTC is 01:30 the next day in Paris (CEST, UTC+2)
    assert normalizer.normalize("2025-04-06T23:30:00Z") == DayKey(2025, 4, 7)
    assert utc_normalizer.normalize("2025-04-06T23:30:00Z") == DayKey(2025, 4, 6)


def test_offset_timestamp_is_converted_before_taking_the_day(
    normalizer: DateNormalizer,
    utc_normalizer: DateNormalizer,
) -> None:
    value = "2025-04-06T00:30:00+02:00"
    assert normalizer.normalize(value) == DayKey(2025, 4, 6)
    assert utc_normalizer.normalize(value) == DayKey(2025, 4, 5)


def test_naive_datetime_is_read_as_reference_wall_clock(normalizer: DateNormalizer) -> None:
    assert normalizer.normalize(datetime(2025, 4, 6, 23, 59)) == DayKey(2025, 4, 6)
    assert normalizer.normalize("2025-04-06T00:00:00") == DayKey(2025, 4, 6)


@pytest.mark.parametrize(
    "value",
    ["2025-04-06", "2025-04-06T23:30:00Z", "2025-12-31T23:59:59+01:00", date(2024, 2, 29)],
)
def test_normalization_is_idempotent(normalizer: DateNormalizer, value) -> None:
    once = normalizer.normalize(value)
    assert normalizer.normalize(once) == once
    assert normalizer.normalize(once.isoformat()) == once


def test_same_day_compares_structurally(normalizer: DateNormalizer) -> None:
    assert normalizer.same_day("2025-04-06", "2025-04-06T21:00:00+00:00")
    assert not normalizer.same_day("2025-04-06", "2025-04-06T22:30:00+00:00")


@pytest.mark.parametrize("value", ["", "   ", "not-a-date", "2025-02-30", "2025-13-01", "06/04/2025", 12345, None])
def test_unparsable_values_raise_invalid_date(normalizer: DateNormalizer, value) -> None:
    with pytest.raises(InvalidDateError) as excinfo:
        normalizer.normalize(value)

    assert excinfo.value.value == value
    assert excinfo.value.error_code == "INVALID_DATE"
    assert excinfo.value.status_code == 422


def test_to_datetime_gives_day_only_values_the_default_due_time(normalizer: DateNormalizer) -> None:
    due = normalizer.to_datetime("2025-04-01")

    assert due == datetime(2025, 4, 1, 8, 0, tzinfo=PARIS)
    assert due.tzinfo is not None


def test_to_datetime_converts_aware_values_into_the_reference_zone(normalizer: DateNormalizer) -> None:
    due = normalizer.to_datetime("2025-04-01T16:30:00Z")

    assert due.utcoffset().total_seconds() == 2 * 3600
    assert (due.hour, due.minute) == (18, 30)


def test_at_day_uses_explicit_time_when_given(normalizer: DateNormalizer) -> None:
    due = normalizer.at_day(DayKey(2025, 4, 6), time(19, 15))
    assert due == datetime(2025, 4, 6, 19, 15, tzinfo=PARIS)

    midnight = normalizer.at_day(DayKey(2025, 4, 6), time(0, 0))
    assert midnight.hour == 0


def test_shift_moves_by_calendar_days_across_dst(normalizer: DateNormalizer) -> None:
    # Paris switches to summer time on 2025-03-30
    start = normalizer.to_datetime("2025-03-29T08:00:00")
    shifted = normalizer.shift(start, 2)

    assert normalizer.normalize(shifted) == DayKey(2025, 3, 31)
    assert (shifted.hour, shifted.minute) == (8, 0)


def test_today_uses_the_reference_zone(normalizer: DateNormalizer) -> None:
    now = datetime(2025, 4, 5, 22, 30, tzinfo=timezone.utc)
    assert normalizer.today(now) == DayKey(2025, 4, 6)


def test_day_key_arithmetic_and_rendering() -> None:
    day = DayKey(2025, 2, 27)

    assert day.plus_days(2) == DayKey(2025, 3, 1)
    assert day.days_until(DayKey(2025, 3, 6)) == 7
    assert str(DayKey(2025, 4, 6)) == "2025-04-06"
    assert DayKey(2025, 4, 6) < DayKey(2025, 4, 7)

    with pytest.raises(ValueError):
        DayKey(2025, 2, 30)


def test_day_range_is_half_open() -> None:
    april = DayRange.month(2025, 4)

    assert DayKey(2025, 4, 1) in april
    assert DayKey(2025, 4, 30) in april
    assert DayKey(2025, 5, 1) not in april
    assert len(april) == 30
    assert len(DayRange.month(2024, 12)) == 31
    assert list(DayRange.around(DayKey(2025, 4, 6))) == [
        DayKey(2025, 4, 5),
        DayKey(2025, 4, 6),
        DayKey(2025, 4, 7),
    ]
