"""Calendar and percentage views over one student's attendance records.

Everything here is a pure function of its inputs: nothing is cached, and every
call rebuilds its output from the full record list.
"""

from __future__ import annotations

import calendar
import math
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord
from .status_cycle import display_class

ATTENDED = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.ON_DUTY})


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] day range."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(f"Range start {self.start} is after end {self.end}")

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CalendarCell:
    day: Optional[int]
    status: Optional[AttendanceStatus]
    in_current_month: bool

    @property
    def css_class(self) -> str:
        return display_class(self.status) if self.in_current_month else "blank"


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    leading_blanks: int
    cells: tuple[CalendarCell, ...]

    @property
    def days(self) -> tuple[CalendarCell, ...]:
        return self.cells[self.leading_blanks:]


def first_weekday(year: int, month: int) -> int:
    """Day of week of the 1st, Sunday = 0 ... Saturday = 6."""

    monday_based, _ = calendar.monthrange(year, month)
    return (monday_based + 1) % 7


def month_grid(records: Iterable[AttendanceRecord], year: int, month: int) -> MonthGrid:
    by_day = {r.date: r.status for r in records}
    blanks = first_weekday(year, month)
    _, days_in_month = calendar.monthrange(year, month)

    cells = [CalendarCell(day=None, status=None, in_current_month=False) for _ in range(blanks)]
    for day in range(1, days_in_month + 1):
        cells.append(CalendarCell(day=day, status=by_day.get(date(year, month, day)), in_current_month=True))

    return MonthGrid(year=year, month=month, leading_blanks=blanks, cells=tuple(cells))


def summarize(records: Iterable[AttendanceRecord], date_range: DateRange) -> Counter:
    """Count of each status among records inside the range."""

    return Counter(r.status for r in records if r.date in date_range)


def percentage(records: Iterable[AttendanceRecord], date_range: DateRange) -> int:
    """Share of in-range records that count as attended, rounded half up. 0 when none."""

    counts = summarize(records, date_range)
    total = sum(counts.values())
    if not total:
        return 0
    attended = sum(counts[s] for s in ATTENDED)
    return math.floor(100 * attended / total + 0.5)


def default_range(year: int, month: int, today: date) -> DateRange:
    """First day of the displayed month through today."""

    start = date(year, month, 1)
    return DateRange(start=start, end=max(today, start))
