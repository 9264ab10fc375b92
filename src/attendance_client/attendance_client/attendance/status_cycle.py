"""The attendance status cycle.

Marks rotate Present -> Absent -> On Duty -> Leave -> Present. A control with no
mark (or a mark this client does not recognize) always starts at Present.
"""

from __future__ import annotations

from typing import Union

from ..core.constants import NOT_MARKED_LABEL
from ..core.enums import AttendanceStatus

STATUS_ORDER: tuple[AttendanceStatus, ...] = (
    AttendanceStatus.PRESENT,
    AttendanceStatus.ABSENT,
    AttendanceStatus.ON_DUTY,
    AttendanceStatus.LEAVE,
)

_CSS_CLASS = {
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.ABSENT: "absent",
    AttendanceStatus.ON_DUTY: "od",
    AttendanceStatus.LEAVE: "leave",
}

StatusLike = Union[AttendanceStatus, str, None]


def next_status(current: StatusLike) -> AttendanceStatus:
    status = AttendanceStatus.from_wire(current)
    if status is None:
        return STATUS_ORDER[0]
    idx = STATUS_ORDER.index(status)
    return STATUS_ORDER[(idx + 1) % len(STATUS_ORDER)]


def display_class(status: StatusLike) -> str:
    return _CSS_CLASS.get(AttendanceStatus.from_wire(status), "none")


def display_label(status: StatusLike) -> str:
    parsed = AttendanceStatus.from_wire(status)
    return parsed.value if parsed else NOT_MARKED_LABEL
