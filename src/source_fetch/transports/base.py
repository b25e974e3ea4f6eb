"""Shared pieces of the transport layer.

A transport issues one GET and reports whatever status and body came back.
It never classifies HTTP statuses; that happens in the fetch service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..errors import ErrorCode, TransportError

if TYPE_CHECKING:
    from ..config import TransportKind
    from ..types import RawResponse, TransportRequest

CONTENT_TYPE_JSON = "Content-Type: application/json"
ACCEPT_JSON = "Accept: application/json"


class Transport(Protocol):
    """Request executor capable of a single GET."""

    kind: TransportKind

    def build_headers(self, token: str | None) -> tuple[str, ...]:
        """Header lines to send; ``token`` is None when auth is not required."""
        ...

    def send(self, request: TransportRequest) -> RawResponse:
        """Execute the request and return status and body."""
        ...


def bearer_header(token: str) -> str:
    """Authorization header line for a bearer token."""
    return f"Authorization: Bearer {token}"


def network_error(
    exc: Exception,
    url: str,
    *,
    timed_out: bool = False,
) -> TransportError:
    """Create error for a request that got no HTTP response.

    Args:
        exc: Exception raised by the underlying client.
        url: Requested URL.
        timed_out: Whether the failure was a timeout.

    Returns:
        TransportError without a status code.
    """
    if timed_out:
        return TransportError(
            f"Request to source timed out. Check source url: {url}",
            source_url=url,
            code=ErrorCode.TIMEOUT_ERROR,
            cause=exc,
        )
    return TransportError(
        f"Request to source failed: {exc}. Check source url: {url}",
        source_url=url,
        cause=exc,
    )
