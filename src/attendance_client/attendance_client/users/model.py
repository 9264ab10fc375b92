from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class LocksPresent:
    """Lock flags as sent by the backend. True means the affordance is locked."""

    profile_update: bool = False
    photo_upload: bool = False
    face_registration: bool = False


@dataclass(frozen=True)
class LocksAbsent:
    """Older or partial user payloads carry no lock structure: nothing is locked."""


Locks = Union[LocksPresent, LocksAbsent]

LOCKS_ABSENT = LocksAbsent()


@dataclass(frozen=True)
class UserRecord:
    """Domain entity: one roster entry, keyed by roll number.

    Pure data object; it is only ever rebuilt from a server response.
    """

    name: str
    roll_number: str
    role: Role
    enrolled_class: Optional[str] = None
    email: Optional[str] = None
    locks: Locks = LOCKS_ABSENT
