from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..cache.store import EntityCache
from ..core.constants import MARKABLE_ROLES
from ..core.enums import Role
from .model import UserRecord


def is_markable(user: UserRecord) -> bool:
    return user.role.value in MARKABLE_ROLES


def markable_for_class(users: Iterable[UserRecord], class_name: str) -> list[UserRecord]:
    """Students enrolled in `class_name`, one entry per roll number (first wins)."""

    seen: set[str] = set()
    out: list[UserRecord] = []
    for u in users:
        if u.enrolled_class != class_name or not is_markable(u):
            continue
        if u.roll_number in seen:
            continue
        seen.add(u.roll_number)
        out.append(u)
    return out


def search_users(users: Sequence[UserRecord], query: str = "", role: Optional[Role] = None) -> list[UserRecord]:
    """Case-insensitive substring search over name, roll number and class."""

    q = (query or "").strip().lower()
    out = []
    for u in users:
        hay = f"{u.name} {u.roll_number} {u.enrolled_class or ''}".lower()
        if q and q not in hay:
            continue
        if role is not None and u.role != role:
            continue
        out.append(u)
    return out


class RosterService:
    """Use case: browse the cached roster (user list, per-class student pickers)."""

    def __init__(self, cache: EntityCache):
        self._cache = cache

    async def _ensure_roster(self) -> None:
        if not self._cache.users:
            await self._cache.refresh_users()

    async def search(self, query: str = "", role: Optional[Role] = None) -> list[UserRecord]:
        await self._ensure_roster()
        return search_users(self._cache.users, query, role)

    async def students_in_class(self, class_name: str) -> list[UserRecord]:
        await self._ensure_roster()
        return markable_for_class(self._cache.users, class_name)

    def find(self, roll_number: str) -> Optional[UserRecord]:
        for u in self._cache.users:
            if u.roll_number == roll_number:
                return u
        return None
