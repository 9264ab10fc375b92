from __future__ import annotations

import random
from datetime import date

import pytest

from attendance_client.attendance.calendar import (
    DateRange,
    default_range,
    first_weekday,
    month_grid,
    percentage,
    summarize,
)
from attendance_client.attendance.model import AttendanceRecord
from attendance_client.core.enums import AttendanceStatus
from attendance_client.core.exceptions import ValidationError


def rec(day: str, status: AttendanceStatus) -> AttendanceRecord:
    y, m, d = (int(p) for p in day.split("-"))
    return AttendanceRecord(roll_number="A1", class_name="X", date=date(y, m, d), status=status)


FEB = DateRange(start=date(2024, 2, 1), end=date(2024, 2, 29))


def test_percentage_counts_on_duty_as_attended():
    records = [
        rec("2024-02-10", AttendanceStatus.PRESENT),
        rec("2024-02-11", AttendanceStatus.ABSENT),
        rec("2024-02-12", AttendanceStatus.ON_DUTY),
    ]

    assert percentage(records, FEB) == 67


def test_percentage_of_nothing_is_zero():
    assert percentage([], FEB) == 0


def test_percentage_ignores_records_outside_range():
    records = [
        rec("2024-01-31", AttendanceStatus.ABSENT),
        rec("2024-02-01", AttendanceStatus.PRESENT),
        rec("2024-02-29", AttendanceStatus.LEAVE),
        rec("2024-03-01", AttendanceStatus.ABSENT),
    ]

    assert percentage(records, FEB) == 50


def test_percentage_rounds_half_up():
    records = [rec("2024-02-01", AttendanceStatus.PRESENT)] + [
        rec(f"2024-02-{d:02d}", AttendanceStatus.ABSENT) for d in range(2, 9)
    ]

    # 1 of 8 = 12.5%
    assert percentage(records, FEB) == 13


def test_percentage_is_order_independent():
    records = [
        rec(f"2024-02-{d:02d}", s)
        for d, s in zip(range(1, 13), list(AttendanceStatus) * 3)
    ]
    expected = percentage(records, FEB)

    shuffled = list(records)
    random.Random(7).shuffle(shuffled)

    assert percentage(shuffled, FEB) == expected
    assert percentage(reversed(records), FEB) == expected


def test_summarize_counts_by_status():
    records = [
        rec("2024-02-10", AttendanceStatus.PRESENT),
        rec("2024-02-11", AttendanceStatus.PRESENT),
        rec("2024-02-12", AttendanceStatus.LEAVE),
    ]

    counts = summarize(records, FEB)

    assert counts[AttendanceStatus.PRESENT] == 2
    assert counts[AttendanceStatus.LEAVE] == 1
    assert counts[AttendanceStatus.ABSENT] == 0


def test_leap_february_grid():
    grid = month_grid([], 2024, 2)

    # 2024-02-01 was a Thursday
    assert first_weekday(2024, 2) == 4
    assert grid.leading_blanks == 4
    assert len(grid.days) == 29
    assert len(grid.cells) == 4 + 29
    assert all(not c.in_current_month and c.day is None for c in grid.cells[:4])
    assert [c.day for c in grid.days] == list(range(1, 30))


@pytest.mark.parametrize(
    "year,month,days",
    [(2023, 2, 28), (2100, 2, 28), (2000, 2, 29), (2024, 4, 30), (2024, 12, 31)],
)
def test_month_lengths(year, month, days):
    assert len(month_grid([], year, month).days) == days


def test_sunday_start_has_no_blanks():
    # 2023-10-01 was a Sunday
    assert month_grid([], 2023, 10).leading_blanks == 0


def test_grid_annotates_exact_days():
    records = [
        rec("2024-02-10", AttendanceStatus.PRESENT),
        rec("2024-03-10", AttendanceStatus.ABSENT),
    ]

    grid = month_grid(records, 2024, 2)

    by_day = {c.day: c for c in grid.days}
    assert by_day[10].status == AttendanceStatus.PRESENT
    assert by_day[10].css_class == "present"
    assert by_day[11].status is None
    assert by_day[11].css_class == "none"


def test_grid_is_rebuilt_identically():
    records = [rec("2024-02-10", AttendanceStatus.LEAVE)]

    assert month_grid(records, 2024, 2) == month_grid(records, 2024, 2)


def test_default_range_is_first_of_month_to_today():
    r = default_range(2024, 2, date(2024, 2, 20))

    assert r.start == date(2024, 2, 1)
    assert r.end == date(2024, 2, 20)


def test_default_range_for_future_month_collapses():
    r = default_range(2024, 3, date(2024, 2, 20))

    assert r.start == r.end == date(2024, 3, 1)


def test_inverted_range_is_rejected():
    with pytest.raises(ValidationError):
        DateRange(start=date(2024, 2, 2), end=date(2024, 2, 1))
