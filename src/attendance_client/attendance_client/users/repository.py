from __future__ import annotations

from typing import Protocol

from ..api.response import ApiResult


class RosterRepository(Protocol):
    """Source of roster, class and subject lists.

    Note (DIP): the cache depends on this interface, not on the HTTP client.
    Successful results carry parsed entities under data["users"], data["classes"]
    and data["subjects"] respectively.
    """

    async def list_users(self) -> ApiResult:
        raise NotImplementedError

    async def list_classes(self) -> ApiResult:
        raise NotImplementedError

    async def list_subjects(self) -> ApiResult:
        raise NotImplementedError
