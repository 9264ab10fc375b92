from __future__ import annotations

import logging
from typing import Any, Optional

from ..api.client import ApiClient
from ..api.payload import MalformedPayload, flag, list_field, names, optional_str
from ..api.response import ApiResult, ErrorCode
from ..core.enums import Role
from .model import LOCKS_ABSENT, Locks, LocksPresent, UserRecord
from .repository import RosterRepository

logger = logging.getLogger("attendance_client.users.http_roster_repository")


def locks_from_payload(raw: Any) -> Locks:
    if not isinstance(raw, dict):
        return LOCKS_ABSENT
    return LocksPresent(
        profile_update=flag(raw.get("profileUpdate", False)),
        photo_upload=flag(raw.get("photoUpload", False)),
        face_registration=flag(raw.get("faceRegistration", False)),
    )


def user_from_payload(raw: Any) -> Optional[UserRecord]:
    """Build a UserRecord from one wire object; None when it cannot identify a user."""

    if not isinstance(raw, dict):
        return None

    roll_number = optional_str(raw.get("rollNumber"))
    if not roll_number:
        return None

    try:
        role = Role.from_wire(raw.get("role"))
    except ValueError:
        return None

    return UserRecord(
        name=optional_str(raw.get("name")) or roll_number,
        roll_number=roll_number,
        role=role,
        enrolled_class=optional_str(raw.get("enrolledClass")),
        email=optional_str(raw.get("email")),
        locks=locks_from_payload(raw.get("locks")),
    )


class HttpRosterRepository(RosterRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    async def list_users(self) -> ApiResult:
        result = await self._api.get("/owner/users")
        if not result.success:
            return result

        try:
            raw_users = list_field(result.data, "users")
        except MalformedPayload as e:
            return ApiResult.fail(f"Malformed users payload: {e}", error=ErrorCode.MALFORMED_RESPONSE)

        users = []
        for raw in raw_users:
            user = user_from_payload(raw)
            if user is None:
                logger.warning("Dropping roster entry without usable rollNumber/role: %r", raw)
                continue
            users.append(user)
        return result.with_data({"users": tuple(users)})

    async def list_classes(self) -> ApiResult:
        return await self._list_names("/classes", "classes")

    async def list_subjects(self) -> ApiResult:
        return await self._list_names("/subjects", "subjects")

    async def _list_names(self, path: str, key: str) -> ApiResult:
        result = await self._api.get(path)
        if not result.success:
            return result

        try:
            items = names(list_field(result.data, key), key)
        except MalformedPayload as e:
            return ApiResult.fail(f"Malformed {key} payload: {e}", error=ErrorCode.MALFORMED_RESPONSE)
        return result.with_data({key: items})
