from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from ..core.enums import Affordance
from ..users.model import LocksAbsent, LocksPresent, UserRecord
from ..users.session import UserSession

logger = logging.getLogger("attendance_client.permissions.gate")


@dataclass(frozen=True)
class GateState:
    enabled: Mapping[Affordance, bool]

    def is_enabled(self, affordance: Affordance) -> bool:
        return bool(self.enabled.get(affordance, False))


ALL_DISABLED = GateState(enabled={a: False for a in Affordance})
ALL_ENABLED = GateState(enabled={a: True for a in Affordance})


def evaluate(user: Optional[UserRecord]) -> GateState:
    """Which self-service affordances the user may use.

    No user: nothing is available. A user without a lock structure: everything is.
    """

    if user is None:
        return ALL_DISABLED

    locks = user.locks
    if isinstance(locks, LocksAbsent):
        return ALL_ENABLED
    if isinstance(locks, LocksPresent):
        return GateState(
            enabled={
                Affordance.SAVE_PROFILE: not locks.profile_update,
                Affordance.UPLOAD_PHOTO: not locks.photo_upload,
                Affordance.REGISTER_FACE: not locks.face_registration,
            }
        )
    raise TypeError(f"Unsupported locks value: {locks!r}")


class PermissionGate:
    """Keeps affordance availability in step with the session's user."""

    def __init__(self, on_change: Optional[Callable[[GateState], None]] = None):
        self._state = ALL_DISABLED
        self._on_change = on_change

    @property
    def state(self) -> GateState:
        return self._state

    def is_enabled(self, affordance: Affordance) -> bool:
        return self._state.is_enabled(affordance)

    def bind(self, session: UserSession) -> None:
        session.subscribe(self.reevaluate)

    def reevaluate(self, user: Optional[UserRecord]) -> GateState:
        self._state = evaluate(user)
        logger.debug(
            "gate for %s: %s",
            user.roll_number if user else None,
            {a.value: v for a, v in self._state.enabled.items()},
        )
        if self._on_change:
            self._on_change(self._state)
        return self._state
