"""Simple streaming transport built on ``urllib.request``."""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from contextlib import closing
from typing import Any

from ..config import TransportKind
from ..types import RawResponse, TransportRequest
from .base import ACCEPT_JSON, CONTENT_TYPE_JSON, bearer_header, network_error

DEFAULT_TIMEOUT = 15.0

# "HTTP/1.1 200 OK": the code sits at a fixed offset of the status line
_STATUS_SLICE = slice(9, 12)


def parse_status_code(status_line: str) -> int:
    """Extract the 3-digit status code from a status line.

    Args:
        status_line: First response header line.

    Returns:
        Status code, or 0 if the line carries none at the expected offset.
    """
    code = status_line[_STATUS_SLICE]
    if len(code) == 3 and code.isdigit():
        return int(code)
    return 0


def status_line_of(response: Any) -> str:
    """Rebuild the status line of a urllib response or HTTPError."""
    version = getattr(response, "version", 11)
    protocol = "HTTP/1.0" if version == 10 else "HTTP/1.1"
    reason = getattr(response, "reason", "") or ""
    return f"{protocol} {response.getcode()} {reason}".rstrip()


class StreamTransport:
    """GET through a urllib opener that reads error responses too."""

    kind = TransportKind.STREAM

    def __init__(
        self,
        *,
        verify_tls: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._verify = verify_tls
        self._timeout = timeout

    def build_headers(self, token: str | None) -> tuple[str, ...]:
        lines = ("Accept-language: en", CONTENT_TYPE_JSON, ACCEPT_JSON)
        if token is not None:
            lines += (bearer_header(token),)
        return lines

    def send(self, request: TransportRequest) -> RawResponse:
        """Issue the GET and return status and body for any status."""
        try:
            req = urllib.request.Request(
                request.url,
                headers=request.headers(),
                method="GET",
            )
        except ValueError as e:
            # Relative or scheme-less URL
            raise network_error(e, request.url) from e
        opener = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=self._ssl_context())
        )
        try:
            try:
                response = opener.open(req, timeout=self._timeout)
            except urllib.error.HTTPError as e:
                # Error statuses still carry a readable body and status line.
                response = e
            with closing(response):
                body = response.read()
                status_code = parse_status_code(status_line_of(response))
        except urllib.error.URLError as e:
            timed_out = isinstance(e.reason, TimeoutError)
            raise network_error(e, request.url, timed_out=timed_out) from e
        except TimeoutError as e:
            raise network_error(e, request.url, timed_out=True) from e
        except OSError as e:
            raise network_error(e, request.url) from e
        return RawResponse(status_code=status_code, body=body)

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self._verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context
