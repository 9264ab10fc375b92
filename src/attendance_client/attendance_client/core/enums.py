from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Roles as reported by the backend for every user record."""

    STUDENT = "student"
    STAFF = "staff"
    OWNER = "owner"

    @classmethod
    def from_wire(cls, value: object) -> "Role":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None


class AttendanceStatus(str, Enum):
    """Attendance marks in cycle order. Values are what the backend stores."""

    PRESENT = "Present"
    ABSENT = "Absent"
    ON_DUTY = "On Duty (O/D)"
    LEAVE = "Leave"

    @classmethod
    def from_wire(cls, value: object) -> Optional["AttendanceStatus"]:
        """Map a wire value onto a status; anything unrecognized is None (unset)."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _STATUS_ALIASES.get(value.strip())


_STATUS_ALIASES = {
    **{s.value: s for s in AttendanceStatus},
    "On Duty": AttendanceStatus.ON_DUTY,
    "OD": AttendanceStatus.ON_DUTY,
    "O/D": AttendanceStatus.ON_DUTY,
}


class WriteState(str, Enum):
    """Lifecycle of one editor control with respect to the server of record."""

    SEEDED = "SEEDED"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"


class EditorPhase(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    EMPTY = "EMPTY"
    READY = "READY"


class Affordance(str, Enum):
    """Self-service actions that can be locked per user."""

    SAVE_PROFILE = "SAVE_PROFILE"
    UPLOAD_PHOTO = "UPLOAD_PHOTO"
    REGISTER_FACE = "REGISTER_FACE"
