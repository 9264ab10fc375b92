from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .http_roster_repository import user_from_payload
from .model import UserRecord

logger = logging.getLogger("attendance_client.users.session")

UserListener = Callable[[Optional[UserRecord]], None]


class UserSession:
    """Holds the authenticated user for the lifetime of a session.

    Listeners are called after every replacement (login, profile update response,
    role change, logout) so anything derived from the user can be recomputed.
    """

    def __init__(self, user: Optional[UserRecord] = None):
        self._user = user
        self._listeners: list[UserListener] = []

    @property
    def user(self) -> Optional[UserRecord]:
        return self._user

    def subscribe(self, listener: UserListener) -> None:
        self._listeners.append(listener)
        listener(self._user)

    def set_user(self, user: Optional[UserRecord]) -> None:
        self._user = user
        for listener in list(self._listeners):
            listener(user)

    def apply_user_payload(self, raw: Any) -> bool:
        """Replace the user from a server `user` object. Unusable payloads keep the current user."""

        user = user_from_payload(raw)
        if user is None:
            logger.warning("Ignoring user payload without rollNumber/role")
            return False
        self.set_user(user)
        return True

    def clear(self) -> None:
        self.set_user(None)
