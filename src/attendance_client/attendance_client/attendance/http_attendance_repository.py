from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..api.client import ApiClient
from ..api.payload import MalformedPayload, list_field, optional_str
from ..api.response import ApiResult, ErrorCode
from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger("attendance_client.attendance.http_attendance_repository")


def record_from_payload(raw: Any) -> Optional[AttendanceRecord]:
    """One wire record, or None when it cannot be placed on a day with a known status."""

    if not isinstance(raw, dict):
        return None

    roll_number = optional_str(raw.get("rollNumber"))
    status = AttendanceStatus.from_wire(raw.get("status"))
    if not roll_number or status is None:
        return None

    try:
        work_date = parse_iso_date(raw.get("date", ""))
    except ValueError:
        return None

    return AttendanceRecord(
        roll_number=roll_number,
        class_name=optional_str(raw.get("className")) or "",
        date=work_date,
        status=status,
    )


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    async def get_by_date(self, *, class_name: str, work_date: date) -> ApiResult:
        result = await self._api.post(
            "/owner/attendance/by-date",
            {"className": class_name, "date": format_iso_date(work_date)},
        )
        return self._parse_records(result)

    async def mark(
        self,
        *,
        roll_number: str,
        class_name: str,
        status: AttendanceStatus,
        work_date: date,
    ) -> ApiResult:
        return await self._api.post(
            "/owner/attendance",
            {
                "rollNumber": roll_number,
                "className": class_name,
                "status": status.value,
                "date": format_iso_date(work_date),
            },
        )

    async def list_mine(self) -> ApiResult:
        result = await self._api.get("/attendance")
        return self._parse_records(result)

    @staticmethod
    def _parse_records(result: ApiResult) -> ApiResult:
        if not result.success:
            return result

        try:
            raw_records = list_field(result.data, "records")
        except MalformedPayload as e:
            return ApiResult.fail(f"Malformed records payload: {e}", error=ErrorCode.MALFORMED_RESPONSE)

        records = []
        for raw in raw_records:
            rec = record_from_payload(raw)
            if rec is None:
                logger.warning("Dropping attendance record with unknown status or date: %r", raw)
                continue
            records.append(rec)
        return result.with_data({"records": tuple(records)})
