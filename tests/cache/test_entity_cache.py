from __future__ import annotations

import pytest

from attendance_client.api.response import ApiResult
from attendance_client.cache.store import EntityCache

pytestmark = pytest.mark.anyio


class ScriptedRoster:
    """Answers each list call with the next scripted result."""

    def __init__(self, users=(), classes=(), subjects=()):
        self.users = list(users)
        self.classes = list(classes)
        self.subjects = list(subjects)

    async def list_users(self) -> ApiResult:
        return self.users.pop(0)

    async def list_classes(self) -> ApiResult:
        return self.classes.pop(0)

    async def list_subjects(self) -> ApiResult:
        return self.subjects.pop(0)


class ExplodingRoster:
    async def list_users(self) -> ApiResult:
        raise RuntimeError("boom")


async def test_refresh_replaces_wholesale(sample_roster):
    roster = ScriptedRoster(
        users=[
            ApiResult.succeed(data={"users": tuple(sample_roster)}),
            ApiResult.succeed(data={"users": tuple(sample_roster[:1])}),
        ]
    )
    cache = EntityCache(roster)

    first = await cache.refresh_users()
    held = cache.users
    second = await cache.refresh_users()

    assert first.success and len(first.items) == 3
    assert second.success
    assert [u.roll_number for u in cache.users] == ["A1"]
    # a reader holding the old tuple still sees the complete old list
    assert len(held) == 3
    assert cache.version == 2


async def test_failed_refresh_keeps_previous_list(sample_roster):
    roster = ScriptedRoster(
        users=[
            ApiResult.succeed(data={"users": tuple(sample_roster)}),
            ApiResult.fail("Network error: timed out"),
        ]
    )
    cache = EntityCache(roster)
    await cache.refresh_users()

    result = await cache.refresh_users()

    assert not result.success
    assert result.items == ()
    assert result.message == "Network error: timed out"
    assert len(cache.users) == 3
    assert cache.version == 1


async def test_failure_with_nothing_cached_reads_empty():
    cache = EntityCache(ScriptedRoster(classes=[ApiResult.fail("Invalid server JSON")]))

    result = await cache.refresh_classes()

    assert not result.success
    assert cache.classes == ()


async def test_lists_are_cached_independently():
    roster = ScriptedRoster(
        classes=[ApiResult.succeed(data={"classes": ("X", "Y")})],
        subjects=[ApiResult.fail("nope")],
    )
    cache = EntityCache(roster)

    results = await cache.refresh_all()

    assert results["classes"].success
    assert not results["subjects"].success
    assert cache.classes == ("X", "Y")
    assert cache.subjects == ()
    assert "users" not in results


async def test_refresh_never_raises():
    cache = EntityCache(ExplodingRoster())

    result = await cache.refresh_users()

    assert not result.success
    assert cache.users == ()
