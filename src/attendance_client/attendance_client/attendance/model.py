from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..core.enums import AttendanceStatus, EditorPhase, WriteState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one mark for one student on one day."""

    roll_number: str
    class_name: str
    date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class Selection:
    class_name: str
    date: date


@dataclass(frozen=True)
class AttendanceSnapshot:
    """Roll number -> status for one (class, date). Missing keys are unset."""

    selection: Selection
    statuses: Mapping[str, AttendanceStatus]

    def status_for(self, roll_number: str) -> Optional[AttendanceStatus]:
        return self.statuses.get(roll_number)


@dataclass(frozen=True)
class Notice:
    """User-visible message, categorized like a flash message."""

    message: str
    category: str = "warning"


@dataclass(frozen=True)
class StudentControl:
    """Read-model for one cycle button in the attendance editor."""

    roll_number: str
    name: str
    status: Optional[AttendanceStatus]
    label: str
    css_class: str
    write_state: WriteState
    enabled: bool


@dataclass(frozen=True)
class EditorView:
    selection: Optional[Selection]
    phase: EditorPhase
    controls: tuple[StudentControl, ...] = ()
    placeholder: Optional[str] = None
