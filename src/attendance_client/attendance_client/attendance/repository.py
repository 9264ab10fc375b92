from __future__ import annotations

from datetime import date
from typing import Protocol

from ..api.response import ApiResult
from ..core.enums import AttendanceStatus


class AttendanceRepository(Protocol):
    """Attendance endpoints. Successful reads carry data["records"] as AttendanceRecord tuples."""

    async def get_by_date(self, *, class_name: str, work_date: date) -> ApiResult:
        raise NotImplementedError

    async def mark(
        self,
        *,
        roll_number: str,
        class_name: str,
        status: AttendanceStatus,
        work_date: date,
    ) -> ApiResult:
        raise NotImplementedError

    async def list_mine(self) -> ApiResult:
        raise NotImplementedError
