# api/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # network unreachable, timeout, connection reset
    TRANSPORT_ERROR = "TRANSPORT_ERROR"

    # body is not JSON, or JSON that does not have the expected shape
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"

    # the server answered with success: false
    REJECTED = "REJECTED"

    # the operation was not attempted because local state does not allow it
    PRECONDITION = "PRECONDITION"


class ApiResult:
    """
    Uniform outcome of every call to the backend.

    Nothing below the services raises on transport or server failure; callers
    branch on `success` and show `message` to the user.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        message (str | None): Human-readable explanation, verbatim from the server when it sent one.
        error (ErrorCode | None): Machine-readable failure category.
        status_code (int | None): HTTP status, when a response was received.
        data (dict): Payload; the raw JSON body for transport calls, parsed domain objects for repositories.
    """

    def __init__(
        self,
        success: bool,
        message: str | None = None,
        error: ErrorCode | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._message = message
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def error(self) -> ErrorCode | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        data: dict | None = None,
        message: str | None = None,
        status_code: int | None = 200,
    ) -> ApiResult:
        return cls(
            success=True,
            message=message,
            error=None,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        message: str | None = None,
        error: ErrorCode | None = ErrorCode.REJECTED,
        status_code: int | None = None,
        data: dict | None = None,
    ) -> ApiResult:
        return cls(
            success=False,
            message=message,
            error=error,
            status_code=status_code,
            data=data,
        )

    def with_data(self, data: dict) -> ApiResult:
        """Same outcome, different payload (used when repositories parse the body)."""

        return ApiResult(
            success=self._success,
            message=self._message,
            error=self._error,
            status_code=self._status_code,
            data=data,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"ApiResult(success={self.success!r}, message={self.message!r}, error={self.error!r})"
