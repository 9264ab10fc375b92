from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..api.response import ApiResult, ErrorCode
from ..cache.store import EntityCache
from ..common.datetime_utils import format_iso_date
from ..core.constants import NO_STUDENTS_PLACEHOLDER
from ..core.enums import AttendanceStatus, EditorPhase, WriteState
from ..users.service import markable_for_class
from .model import AttendanceSnapshot, EditorView, Notice, Selection, StudentControl
from .repository import AttendanceRepository
from .status_cycle import display_class, display_label, next_status

logger = logging.getLogger("attendance_client.attendance.editor")


@dataclass
class _ControlState:
    roll_number: str
    name: str
    # Last status the server is known to hold: the seed, then every confirmed write.
    server_status: Optional[AttendanceStatus]
    status: Optional[AttendanceStatus]
    write_state: WriteState = WriteState.SEEDED
    write_seq: int = 0


class AttendanceEditor:
    """Marks attendance for one (class, date) selection at a time.

    `select()` joins the cached roster with the server's marks for that day and
    builds one control per student. `activate()` cycles a control's status
    immediately and sends the write in the background; writes are not
    serialized and may land in any order.

    Every select bumps a generation counter. Fetch and write results carry the
    generation they were issued under and are dropped if the selection has
    changed since, so a slow response never paints over the current view.
    """

    def __init__(
        self,
        cache: EntityCache,
        attendance: AttendanceRepository,
        *,
        revert_failed_writes: bool = False,
    ):
        self._cache = cache
        self._attendance = attendance
        self._revert_failed_writes = bool(revert_failed_writes)

        self._generation = 0
        self._selection: Optional[Selection] = None
        self._phase = EditorPhase.IDLE
        self._placeholder: Optional[str] = None
        self._controls: dict[str, _ControlState] = {}
        self._notices: list[Notice] = []
        self._writes: set[asyncio.Task] = set()

    # === reads ===

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def phase(self) -> EditorPhase:
        return self._phase

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def notices(self) -> tuple[Notice, ...]:
        return tuple(self._notices)

    def drain_notices(self) -> list[Notice]:
        out, self._notices = self._notices, []
        return out

    def view(self) -> EditorView:
        enabled = self._phase == EditorPhase.READY
        controls = tuple(
            StudentControl(
                roll_number=c.roll_number,
                name=c.name,
                status=c.status,
                label=display_label(c.status),
                css_class=display_class(c.status),
                write_state=c.write_state,
                enabled=enabled,
            )
            for c in self._controls.values()
        )
        return EditorView(
            selection=self._selection,
            phase=self._phase,
            controls=controls,
            placeholder=self._placeholder,
        )

    def control(self, roll_number: str) -> Optional[StudentControl]:
        for c in self.view().controls:
            if c.roll_number == roll_number:
                return c
        return None

    # === selection ===

    async def select(self, class_name: str, work_date: date) -> Optional[EditorView]:
        """Rebuild the editor for (class_name, work_date).

        Returns the new view, or None if another select superseded this one
        while it was waiting on the network.
        """

        self._generation += 1
        generation = self._generation
        self._controls = {}
        self._placeholder = None

        if not class_name or work_date is None:
            self._selection = None
            self._phase = EditorPhase.IDLE
            return self.view()

        selection = Selection(class_name=class_name, date=work_date)
        self._selection = selection
        self._phase = EditorPhase.LOADING

        if not self._cache.users:
            refreshed = await self._cache.refresh_users()
            if self._is_stale(generation, "roster bootstrap"):
                return None
            if not refreshed.success:
                self._notify(refreshed.message or "Could not load users", "danger")

        students = markable_for_class(self._cache.users, class_name)
        if not students:
            self._phase = EditorPhase.EMPTY
            self._placeholder = NO_STUDENTS_PLACEHOLDER
            return self.view()

        snapshot, result = await self._fetch_snapshot(selection)
        if self._is_stale(generation, "attendance snapshot"):
            return None
        if not result.success:
            self._notify(f"Could not load existing marks: {result.message}", "warning")

        self._controls = {
            s.roll_number: _ControlState(
                roll_number=s.roll_number,
                name=s.name,
                server_status=snapshot.status_for(s.roll_number),
                status=snapshot.status_for(s.roll_number),
            )
            for s in students
        }
        self._phase = EditorPhase.READY
        return self.view()

    async def _fetch_snapshot(self, selection: Selection) -> tuple[AttendanceSnapshot, ApiResult]:
        try:
            result = await self._attendance.get_by_date(class_name=selection.class_name, work_date=selection.date)
        except Exception as e:
            logger.exception("Snapshot fetch failed for %s on %s", selection.class_name, selection.date)
            result = ApiResult.fail(str(e), error=ErrorCode.TRANSPORT_ERROR)

        statuses: dict[str, AttendanceStatus] = {}
        if result.success:
            for rec in result.data.get("records", ()):
                statuses[rec.roll_number] = rec.status
        return AttendanceSnapshot(selection=selection, statuses=statuses), result

    def _is_stale(self, generation: int, what: str) -> bool:
        if generation == self._generation:
            return False
        logger.debug("Discarding %s for generation %d (current %d)", what, generation, self._generation)
        return True

    # === edits ===

    def activate(self, roll_number: str) -> Optional[asyncio.Task]:
        """Cycle a student's status and submit it.

        Must be called from within the running event loop. Returns the write task,
        or None when the control is not available (no ready selection, unknown roll).
        """

        if self._phase != EditorPhase.READY or self._selection is None:
            return None
        control = self._controls.get(roll_number)
        if control is None:
            return None

        new_status = next_status(control.status)
        control.status = new_status
        control.write_seq += 1
        control.write_state = WriteState.PENDING

        task = asyncio.get_running_loop().create_task(
            self._submit(self._generation, self._selection, roll_number, new_status, control.write_seq)
        )
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)
        return task

    async def _submit(
        self,
        generation: int,
        selection: Selection,
        roll_number: str,
        status: AttendanceStatus,
        seq: int,
    ) -> ApiResult:
        try:
            result = await self._attendance.mark(
                roll_number=roll_number,
                class_name=selection.class_name,
                status=status,
                work_date=selection.date,
            )
        except Exception as e:
            logger.exception("Attendance write failed for %s", roll_number)
            result = ApiResult.fail(str(e), error=ErrorCode.TRANSPORT_ERROR)

        if self._is_stale(generation, f"write result for {roll_number}"):
            # The view moved on, but a rejected mark must still reach the user.
            if not result.success:
                self._notify(
                    f"Could not save {status.value} for {roll_number} in {selection.class_name} "
                    f"on {format_iso_date(selection.date)}: {result.message}",
                    "danger",
                )
            return result

        control = self._controls.get(roll_number)
        if control is None or control.write_seq != seq:
            # A newer activation owns this control's state now.
            return result

        if result.success:
            control.write_state = WriteState.CONFIRMED
            control.server_status = status
            return result

        control.write_state = WriteState.FAILED
        self._notify(f"Could not save {status.value} for {control.name}: {result.message}", "danger")
        if self._revert_failed_writes:
            control.status = control.server_status
        return result

    async def drain(self) -> None:
        """Wait for every in-flight write to resolve."""

        while self._writes:
            await asyncio.gather(*list(self._writes), return_exceptions=True)

    def _notify(self, message: str, category: str) -> None:
        logger.info("notice [%s] %s", category, message)
        self._notices.append(Notice(message=message, category=category))
