from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..api.response import ApiResult, ErrorCode
from ..common.datetime_utils import format_iso_date, today_local
from ..core.constants import NO_ATTENDANCE_PLACEHOLDER
from .calendar import DateRange, MonthGrid, default_range, month_grid, percentage, summarize
from .model import AttendanceRecord, Notice
from .repository import AttendanceRepository
from .status_cycle import STATUS_ORDER, display_class

logger = logging.getLogger("attendance_client.attendance.service")


@dataclass(frozen=True)
class AttendanceRowUI:
    date: str
    class_name: str
    status: str
    css_class: str


@dataclass(frozen=True)
class MyAttendanceView:
    grid: MonthGrid
    date_range: DateRange
    percentage: int
    counts: dict[str, int]
    rows: tuple[AttendanceRowUI, ...] = ()
    placeholder: Optional[str] = None
    notice: Optional[Notice] = None


class StudentAttendanceService:
    """Use case: a student looks at their own attendance.

    Fetches `GET /attendance` once per call and derives every view from the
    returned list. An owner-configured range wins over the per-month default.
    """

    def __init__(self, attendance: AttendanceRepository, *, configured_range: Optional[DateRange] = None):
        self._attendance = attendance
        self._configured_range = configured_range

    @property
    def configured_range(self) -> Optional[DateRange]:
        return self._configured_range

    def range_for(self, year: int, month: int, today: date) -> DateRange:
        if self._configured_range is not None:
            return self._configured_range
        return default_range(year, month, today)

    async def load(self, *, year: Optional[int] = None, month: Optional[int] = None, today: Optional[date] = None) -> MyAttendanceView:
        today = today or today_local()
        year = year or today.year
        month = month or today.month

        try:
            result = await self._attendance.list_mine()
        except Exception as e:
            logger.exception("Attendance fetch failed")
            result = ApiResult.fail(str(e), error=ErrorCode.TRANSPORT_ERROR)
        records: tuple[AttendanceRecord, ...] = tuple(result.data.get("records", ())) if result.success else ()
        notice = None
        if not result.success:
            logger.warning("Could not load attendance: %s", result.message)
            notice = Notice(message=result.message or "Could not load attendance", category="danger")

        return self.build_view(records, year=year, month=month, today=today, notice=notice)

    def build_view(
        self,
        records: tuple[AttendanceRecord, ...],
        *,
        year: int,
        month: int,
        today: date,
        notice: Optional[Notice] = None,
    ) -> MyAttendanceView:
        date_range = self.range_for(year, month, today)
        counts = summarize(records, date_range)

        return MyAttendanceView(
            grid=month_grid(records, year, month),
            date_range=date_range,
            percentage=percentage(records, date_range),
            counts={s.value: counts.get(s, 0) for s in STATUS_ORDER},
            rows=tuple(self._to_ui(r) for r in sorted(records, key=lambda r: r.date, reverse=True)),
            placeholder=None if records else NO_ATTENDANCE_PLACEHOLDER,
            notice=notice,
        )

    def _to_ui(self, r: AttendanceRecord) -> AttendanceRowUI:
        return AttendanceRowUI(
            date=format_iso_date(r.date),
            class_name=r.class_name or "-",
            status=r.status.value,
            css_class=display_class(r.status),
        )
