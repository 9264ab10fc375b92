from __future__ import annotations

import pytest

from attendance_client.api.response import ApiResult
from attendance_client.cache.store import EntityCache
from attendance_client.core.enums import Role
from attendance_client.users.model import UserRecord
from attendance_client.users.service import RosterService, search_users


class InMemoryRoster:
    def __init__(self, users):
        self._users = tuple(users)
        self.calls = 0

    async def list_users(self) -> ApiResult:
        self.calls += 1
        return ApiResult.succeed(data={"users": self._users})


@pytest.fixture
def mixed_roster(sample_roster):
    return sample_roster + [
        UserRecord(name="Devi", roll_number="T1", role=Role.STAFF, enrolled_class="X"),
        UserRecord(name="Owner", roll_number="O1", role=Role.OWNER),
    ]


def test_search_matches_name_roll_and_class(mixed_roster):
    assert [u.roll_number for u in search_users(mixed_roster, "asha")] == ["A1"]
    assert [u.roll_number for u in search_users(mixed_roster, "a3")] == ["A3"]
    assert [u.roll_number for u in search_users(mixed_roster, " y ")] == ["A3"]
    assert len(search_users(mixed_roster)) == 5


def test_search_filters_by_role(mixed_roster):
    assert [u.roll_number for u in search_users(mixed_roster, role=Role.STAFF)] == ["T1"]
    assert search_users(mixed_roster, "asha", role=Role.OWNER) == []


@pytest.mark.anyio
async def test_students_in_class_bootstraps_roster_once(mixed_roster):
    roster = InMemoryRoster(mixed_roster)
    svc = RosterService(EntityCache(roster))

    students = await svc.students_in_class("X")
    await svc.search("devi")

    assert [u.roll_number for u in students] == ["A1", "A2"]
    assert roster.calls == 1
    assert svc.find("T1").name == "Devi"
    assert svc.find("missing") is None
