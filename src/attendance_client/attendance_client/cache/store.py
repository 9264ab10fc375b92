from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from ..api.response import ApiResult
from ..users.model import UserRecord
from ..users.repository import RosterRepository

logger = logging.getLogger("attendance_client.cache.store")


@dataclass(frozen=True)
class CacheState:
    """One immutable generation of cached entities.

    The store swaps the whole object on refresh, so a reader holding a reference
    never sees a half-replaced list.
    """

    users: tuple[UserRecord, ...] = ()
    classes: tuple[str, ...] = ()
    subjects: tuple[str, ...] = ()
    version: int = 0


@dataclass(frozen=True)
class RefreshResult:
    success: bool
    items: tuple[Any, ...] = ()
    message: Optional[str] = None


class EntityCache:
    """Session-scoped roster/class/subject store.

    Reads are synchronous projections of the last successful refresh. Refreshes
    replace a list wholesale or leave it untouched; they never raise.
    """

    def __init__(self, roster: RosterRepository, *, initial: Optional[CacheState] = None):
        self._roster = roster
        self._state = initial or CacheState()

    # === reads ===

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def users(self) -> tuple[UserRecord, ...]:
        return self._state.users

    @property
    def classes(self) -> tuple[str, ...]:
        return self._state.classes

    @property
    def subjects(self) -> tuple[str, ...]:
        return self._state.subjects

    @property
    def version(self) -> int:
        return self._state.version

    # === refresh ===

    async def refresh_users(self) -> RefreshResult:
        return await self._refresh("users", self._roster.list_users)

    async def refresh_classes(self) -> RefreshResult:
        return await self._refresh("classes", self._roster.list_classes)

    async def refresh_subjects(self) -> RefreshResult:
        return await self._refresh("subjects", self._roster.list_subjects)

    async def refresh_all(self, *, include_users: bool = False) -> dict[str, RefreshResult]:
        """Startup load: classes and subjects, plus the roster for owner/staff sessions."""

        results: dict[str, RefreshResult] = {}
        if include_users:
            results["users"] = await self.refresh_users()
        results["classes"] = await self.refresh_classes()
        results["subjects"] = await self.refresh_subjects()
        return results

    async def _refresh(self, field: str, fetch) -> RefreshResult:
        try:
            result: ApiResult = await fetch()
        except Exception:
            # Repositories normalize their own failures; anything escaping is a bug
            # there, and the cache contract is still "keep what you have".
            logger.exception("Unexpected error refreshing %s", field)
            return RefreshResult(success=False, message=f"Could not load {field}")

        if not result.success:
            logger.warning("Refresh of %s failed, keeping %d cached: %s", field, len(getattr(self._state, field)), result.message)
            return RefreshResult(success=False, message=result.message)

        items = tuple(result.data.get(field, ()))
        current = self._state
        self._state = replace(current, **{field: items}, version=current.version + 1)
        logger.debug("Cached %d %s (version %d)", len(items), field, self._state.version)
        return RefreshResult(success=True, items=items)
