"""Error classes for source-fetch.

Implements a structured error hierarchy with error codes so callers can
branch on the kind of failure instead of parsing messages.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for source-fetch."""

    # Configuration errors (1xxx)
    INVALID_CONFIG = "CFG_1001"

    # Authentication errors (2xxx)
    AUTH_FAILED = "AUTH_2001"

    # Transport errors (3xxx)
    TRANSPORT_ERROR = "NET_3001"
    TIMEOUT_ERROR = "NET_3002"

    # Payload errors (4xxx)
    EMPTY_RESPONSE = "PAY_4001"
    INVALID_PAYLOAD = "PAY_4002"


class SourceFetchError(Exception):
    """Base error for source-fetch with structured error information."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.status_code = status_code
        self.details = details or {}

    @property
    def kind(self) -> ErrorCode:
        """Error kind as an ErrorCode member."""
        return ErrorCode(self.code)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(SourceFetchError):
    """Fetch configuration is invalid or incomplete."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_CONFIG,
            details={"field": field} if field else None,
        )
        self.field = field


class AuthError(SourceFetchError):
    """Bearer token could not be obtained from the auth endpoint."""

    def __init__(
        self,
        message: str = "Failed to obtain auth token",
        *,
        auth_url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if auth_url:
            details["auth_url"] = auth_url
        if cause:
            details["cause"] = str(cause)
        super().__init__(
            message,
            ErrorCode.AUTH_FAILED,
            status_code=status_code,
            details=details,
        )
        self.__cause__ = cause


class TransportError(SourceFetchError):
    """Source answered with a non-200 status or could not be reached."""

    def __init__(
        self,
        message: str,
        *,
        source_url: str | None = None,
        status_code: int | None = None,
        code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
        cause: Exception | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if source_url:
            details["source_url"] = source_url
        if cause:
            details["cause"] = str(cause)
        super().__init__(
            message,
            code,
            status_code=status_code,
            details=details,
        )
        self.source_url = source_url
        self.__cause__ = cause

    @classmethod
    def unexpected_status(cls, status_code: int, source_url: str) -> TransportError:
        """Create error for a source that did not answer 200."""
        return cls(
            f"Got {status_code} code instead of 200 from source. "
            f"Check source url: {source_url}",
            source_url=source_url,
            status_code=status_code,
        )


class EmptyResponseError(SourceFetchError):
    """Source answered 200 with an empty body."""

    def __init__(self, source_url: str) -> None:
        super().__init__(
            f"No data from source. Check source url: {source_url}",
            ErrorCode.EMPTY_RESPONSE,
            status_code=200,
            details={"source_url": source_url},
        )
        self.source_url = source_url


class InvalidPayloadError(SourceFetchError):
    """Source answered 200 with a body that is not valid JSON."""

    def __init__(
        self,
        source_url: str,
        *,
        cause: Exception | None = None,
    ) -> None:
        details: dict[str, Any] = {"source_url": source_url}
        if cause:
            details["cause"] = str(cause)
        super().__init__(
            f"Not a JSON response from source. Check source url: {source_url}",
            ErrorCode.INVALID_PAYLOAD,
            status_code=200,
            details=details,
        )
        self.source_url = source_url
        self.__cause__ = cause
