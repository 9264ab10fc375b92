from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .api.client import ApiClient, ApiConfig
from .attendance.calendar import DateRange
from .attendance.editor import AttendanceEditor
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import StudentAttendanceService
from .cache.store import EntityCache
from .common.datetime_utils import parse_iso_date
from .common.validators import require_non_empty, require_positive
from .core.constants import DEFAULT_REQUEST_TIMEOUT
from .core.exceptions import ConfigurationError, ValidationError
from .permissions.gate import PermissionGate
from .users.http_roster_repository import HttpRosterRepository
from .users.service import RosterService
from .users.session import UserSession


@dataclass(frozen=True)
class Container:
    api: ApiClient

    roster_repo: HttpRosterRepository
    attendance_repo: HttpAttendanceRepository

    cache: EntityCache
    session: UserSession
    permission_gate: PermissionGate

    roster_service: RosterService
    attendance_editor: AttendanceEditor
    student_attendance_service: StudentAttendanceService

    async def aclose(self) -> None:
        await self.attendance_editor.drain()
        await self.api.aclose()


def _configured_range(start: Optional[str], end: Optional[str]) -> Optional[DateRange]:
    if not start and not end:
        return None
    if not start or not end:
        raise ConfigurationError("ATTENDANCE_RANGE_START and ATTENDANCE_RANGE_END must be set together")
    try:
        return DateRange(start=parse_iso_date(start), end=parse_iso_date(end))
    except (ValueError, ValidationError) as e:
        raise ConfigurationError(f"Invalid attendance range: {e}") from e


def build_container(
    *,
    api_config: dict,
    token: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Container:
    try:
        config = ApiConfig(
            base_url=require_non_empty(api_config["base_url"], "API base URL"),
            timeout=require_positive(float(api_config.get("timeout", DEFAULT_REQUEST_TIMEOUT)), "Request timeout"),
        )
    except (KeyError, ValueError, ValidationError) as e:
        raise ConfigurationError(f"Invalid API settings: {e}") from e

    api = ApiClient(config, token=token, transport=transport)

    roster_repo = HttpRosterRepository(api)
    attendance_repo = HttpAttendanceRepository(api)

    cache = EntityCache(roster_repo)
    session = UserSession()
    permission_gate = PermissionGate()
    permission_gate.bind(session)

    roster_service = RosterService(cache)
    attendance_editor = AttendanceEditor(
        cache,
        attendance_repo,
        revert_failed_writes=bool(api_config.get("revert_failed_writes", False)),
    )
    student_attendance_service = StudentAttendanceService(
        attendance_repo,
        configured_range=_configured_range(api_config.get("range_start"), api_config.get("range_end")),
    )

    return Container(
        api=api,
        roster_repo=roster_repo,
        attendance_repo=attendance_repo,
        cache=cache,
        session=session,
        permission_gate=permission_gate,
        roster_service=roster_service,
        attendance_editor=attendance_editor,
        student_attendance_service=student_attendance_service,
    )
