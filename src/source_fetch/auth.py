"""Bearer token acquisition for authenticated sources.

The auth endpoint speaks a GraphQL-style query passed as the ``query``
parameter of a GET request and answers with
``{"data": {"auth": {"token": "..."}}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from .errors import AuthError
from .telemetry import get_logger, trace_operation

if TYPE_CHECKING:
    from .config import AuthCredentials

DEFAULT_TIMEOUT = 10.0


def build_auth_query(client_id: str, client_secret: str) -> str:
    """Build the token query.

    The client id is written unquoted and the secret double-quoted, which is
    the form existing auth endpoints expect.
    """
    return f'{{auth(client_id:{client_id},client_secret:"{client_secret}"){{token}}}}'


def extract_token(document: Any) -> str | None:
    """Return ``data.auth.token`` or None if any link is missing."""
    node = document
    for key in ("data", "auth", "token"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, str) else None


class AuthTokenProvider:
    """Exchanges client credentials for a bearer token."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = False,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._verify = verify_tls
        self._http_transport = http_transport
        self._logger = get_logger()

    def get_token(self, auth_endpoint_url: str, credentials: AuthCredentials) -> str | None:
        """Request a token from the auth endpoint.

        Args:
            auth_endpoint_url: Auth endpoint URL.
            credentials: Client credentials.

        Returns:
            The token, or None if the response does not carry one.

        Raises:
            AuthError: If the endpoint is unreachable, answers with a
                non-2xx status, or returns a body that is not JSON.
        """
        query = build_auth_query(
            credentials.client_id,
            credentials.client_secret.get_secret_value(),
        )

        with trace_operation("source_fetch.auth", attributes={"http.url": auth_endpoint_url}):
            try:
                with httpx.Client(
                    verify=self._verify,
                    timeout=httpx.Timeout(self._timeout),
                    transport=self._http_transport,
                ) as client:
                    url = httpx.URL(auth_endpoint_url).copy_merge_params({"query": query})
                    response = client.get(url)
            except httpx.HTTPError as e:
                raise AuthError(
                    f"Auth endpoint unreachable: {auth_endpoint_url}",
                    auth_url=auth_endpoint_url,
                    cause=e,
                ) from e

            if not response.is_success:
                raise AuthError(
                    f"Got {response.status_code} code from auth endpoint: {auth_endpoint_url}",
                    auth_url=auth_endpoint_url,
                    status_code=response.status_code,
                )

            try:
                document = response.json()
            except ValueError as e:
                raise AuthError(
                    f"Not a JSON response from auth endpoint: {auth_endpoint_url}",
                    auth_url=auth_endpoint_url,
                    status_code=response.status_code,
                    cause=e,
                ) from e

        token = extract_token(document)
        if token is None:
            self._logger.warning(
                "Auth response carries no token",
                auth_url=auth_endpoint_url,
                client_id=credentials.client_id,
            )
        return token
