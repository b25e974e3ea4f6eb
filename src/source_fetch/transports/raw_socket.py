"""Low-level transport built on urllib3."""

from __future__ import annotations

from collections.abc import Callable

import urllib3
from urllib3.exceptions import HTTPError as Urllib3Error
from urllib3.exceptions import MaxRetryError, NewConnectionError
from urllib3.exceptions import TimeoutError as Urllib3Timeout

from ..config import TransportKind
from ..types import RawResponse, TransportRequest
from .base import ACCEPT_JSON, CONTENT_TYPE_JSON, bearer_header, network_error

CONNECT_TIMEOUT = 15.0
TOTAL_TIMEOUT = 15.0


class RawSocketTransport:
    """GET through a short-lived ``urllib3.PoolManager``.

    Header lines always include a third entry, which is empty when no token
    is supplied. Blank lines are dropped when the request is written.
    """

    kind = TransportKind.RAW_SOCKET

    def __init__(
        self,
        *,
        verify_tls: bool = False,
        connect_timeout: float = CONNECT_TIMEOUT,
        total_timeout: float = TOTAL_TIMEOUT,
        pool_factory: Callable[..., urllib3.PoolManager] = urllib3.PoolManager,
    ) -> None:
        self._verify = verify_tls
        self._timeout = urllib3.Timeout(connect=connect_timeout, total=total_timeout)
        self._pool_factory = pool_factory

    def build_headers(self, token: str | None) -> tuple[str, ...]:
        return (
            CONTENT_TYPE_JSON,
            ACCEPT_JSON,
            bearer_header(token) if token is not None else "",
        )

    def send(self, request: TransportRequest) -> RawResponse:
        """Issue the GET, read the body, then read the status."""
        pool = self._create_pool()
        response = None
        try:
            response = pool.request(
                "GET",
                request.url,
                headers=request.headers(),
                timeout=self._timeout,
                retries=False,
                redirect=False,
                preload_content=False,
            )
            body = response.read()
            return RawResponse(status_code=response.status, body=body)
        except NewConnectionError as e:
            raise network_error(e, request.url) from e
        except Urllib3Timeout as e:
            raise network_error(e, request.url, timed_out=True) from e
        except MaxRetryError as e:
            timed_out = isinstance(e.reason, Urllib3Timeout)
            raise network_error(e, request.url, timed_out=timed_out) from e
        except Urllib3Error as e:
            raise network_error(e, request.url) from e
        finally:
            if response is not None:
                response.release_conn()
            pool.clear()

    def _create_pool(self) -> urllib3.PoolManager:
        if self._verify:
            return self._pool_factory(cert_reqs="CERT_REQUIRED")
        return self._pool_factory(cert_reqs="CERT_NONE", assert_hostname=False)
