"""Connection-pooling transport built on httpx."""

from __future__ import annotations

import httpx

from ..config import TransportKind
from ..types import RawResponse, TransportRequest
from .base import ACCEPT_JSON, CONTENT_TYPE_JSON, bearer_header, network_error

DEFAULT_TIMEOUT = 10.0


class PooledClientTransport:
    """GET through an ``httpx.Client`` with a fixed total timeout."""

    kind = TransportKind.POOLED

    def __init__(
        self,
        *,
        verify_tls: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize pooled transport.

        Args:
            verify_tls: Verify server certificates and host names.
            timeout: Total request timeout in seconds.
            http_transport: Optional httpx transport, mostly for tests.
        """
        self._verify = verify_tls
        self._timeout = timeout
        self._http_transport = http_transport

    def build_headers(self, token: str | None) -> tuple[str, ...]:
        # An authenticated request carries the Authorization header only.
        if token is not None:
            return (bearer_header(token),)
        return (CONTENT_TYPE_JSON, ACCEPT_JSON)

    def send(self, request: TransportRequest) -> RawResponse:
        """Issue the GET and return status and body for any status."""
        try:
            with httpx.Client(
                verify=self._verify,
                timeout=httpx.Timeout(self._timeout),
                transport=self._http_transport,
            ) as client:
                response = client.get(request.url, headers=request.headers())
                return RawResponse(
                    status_code=response.status_code,
                    body=response.content,
                )
        except httpx.TimeoutException as e:
            raise network_error(e, request.url, timed_out=True) from e
        except httpx.HTTPError as e:
            raise network_error(e, request.url) from e
