from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from .response import ApiResult, ErrorCode

logger = logging.getLogger("attendance_client.api.client")


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_REQUEST_TIMEOUT


class ApiClient:
    """Async JSON client for the attendance backend.

    Every call resolves to an ApiResult: transport failures, non-JSON bodies and
    `success: false` answers are normalized here so no exception reaches the
    repositories or the services above them.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        self._token = token
        self._http = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout,
            transport=transport,
        )

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def get(self, path: str) -> ApiResult:
        return await self.request("GET", path)

    async def post(self, path: str, payload: dict[str, Any]) -> ApiResult:
        return await self.request("POST", path, payload)

    async def request(self, method: str, path: str, payload: Optional[dict[str, Any]] = None) -> ApiResult:
        try:
            resp = await self._http.request(method, path, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.exception("Error calling API: %s %s", method, path)
            return ApiResult.fail(f"Network error: {e}", error=ErrorCode.TRANSPORT_ERROR)

        try:
            body = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Non-JSON body from %s %s (HTTP %s)", method, path, resp.status_code)
            return ApiResult.fail("Invalid server JSON", error=ErrorCode.MALFORMED_RESPONSE, status_code=resp.status_code)

        if not isinstance(body, dict):
            logger.warning("Unexpected payload type from %s %s: %r", method, path, type(body))
            return ApiResult.fail("Invalid server JSON", error=ErrorCode.MALFORMED_RESPONSE, status_code=resp.status_code)

        if not body.get("success") or resp.is_error:
            message = body.get("message") or f"Request failed (HTTP {resp.status_code})"
            logger.info("%s %s rejected: %s", method, path, message)
            return ApiResult.fail(message, error=ErrorCode.REJECTED, status_code=resp.status_code, data=body)

        return ApiResult.succeed(data=body, status_code=resp.status_code)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
