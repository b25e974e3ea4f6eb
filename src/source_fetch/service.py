"""Fetch orchestration for source-fetch.

A fetch validates its configuration, obtains a bearer token when client
credentials are set, dispatches one GET through the selected transport and
validates the response before decoding it. Nothing is retried: the first
failure aborts the fetch with a typed error.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING

from .auth import AuthTokenProvider
from .config import ensure_http_url
from .errors import (
    AuthError,
    ConfigurationError,
    EmptyResponseError,
    InvalidPayloadError,
    SourceFetchError,
    TransportError,
)
from .telemetry import fetch_logger, get_logger, trace_operation, trace_transport
from .transports import create_transport
from .types import FetchResult, JSONValue, TransportRequest

if TYPE_CHECKING:
    from .config import FetchConfig, TransportKind
    from .transports import Transport
    from .types import RawResponse

TransportFactory = Callable[..., "Transport"]


class FetchService:
    """Fetches a JSON payload from a configured source."""

    def __init__(
        self,
        *,
        auth_provider: AuthTokenProvider | None = None,
        transport_factory: TransportFactory = create_transport,
    ) -> None:
        """Initialize fetch service.

        Args:
            auth_provider: Token provider; a default one is created if omitted.
            transport_factory: Callable building a transport from a
                ``TransportKind`` and ``verify_tls`` flag.
        """
        self._auth_provider = auth_provider
        self._transport_factory = transport_factory
        self._logger = get_logger()

    def fetch(self, config: FetchConfig) -> JSONValue:
        """Fetch and decode the payload described by ``config``.

        Args:
            config: Fetch configuration.

        Returns:
            Decoded JSON payload.

        Raises:
            ConfigurationError: Missing or non-http(s) URLs, or unknown transport.
            AuthError: Token could not be obtained.
            TransportError: Source did not answer 200 or was unreachable.
            EmptyResponseError: Source answered 200 with an empty body.
            InvalidPayloadError: Source answered 200 with a non-JSON body.
        """
        source_url = config.source_url
        transport_name = config.transport.value
        logger = fetch_logger(transport_name, source_url)

        with trace_operation(
            "source_fetch.fetch",
            attributes={
                "http.url": source_url or "",
                "source_fetch.transport": transport_name,
            },
        ):
            try:
                source_url = _require_url(
                    source_url,
                    field="source_url",
                    missing="No source URL specified. Cannot continue.",
                )
                transport = self._resolve_transport(config.transport, config.verify_tls)

                logger.debug("Fetch started", auth_required=config.auth_required)
                token = self._acquire_token(config) if config.auth_required else None

                request = TransportRequest(
                    url=source_url,
                    header_lines=transport.build_headers(token),
                )
                with trace_transport(transport_name, source_url) as span:
                    raw = transport.send(request)
                    span.set_attribute("http.status_code", raw.status_code)
                logger.debug(
                    "Source response received",
                    status_code=raw.status_code,
                    body_size=len(raw.body),
                )

                payload = self._decode(raw, source_url)
            except SourceFetchError as e:
                logger.warning("Fetch failed", **e.to_dict())
                raise

        logger.info("Fetch succeeded")
        return payload

    def try_fetch(self, config: FetchConfig) -> FetchResult:
        """Fetch like ``fetch`` but return failures in a FetchResult."""
        try:
            return FetchResult(payload=self.fetch(config))
        except SourceFetchError as e:
            return FetchResult(error=e)

    def _resolve_transport(self, kind: TransportKind, verify_tls: bool) -> Transport:
        try:
            return self._transport_factory(kind, verify_tls=verify_tls)
        except ConfigurationError:
            raise
        except (KeyError, ValueError) as e:
            raise ConfigurationError(
                f"Client type not provided or unknown: {kind!r}",
                field="transport",
            ) from e

    def _acquire_token(self, config: FetchConfig) -> str:
        """Obtain the bearer token; a missing token becomes an empty one."""
        auth_url = _require_url(
            config.auth_endpoint_url,
            field="auth_endpoint_url",
            missing="No authTokenApiPoint URL specified. Cannot continue.",
        )
        provider = self._auth_provider or AuthTokenProvider(verify_tls=config.verify_tls)
        try:
            token = provider.get_token(auth_url, config.credentials)  # type: ignore[arg-type]
        except AuthError:
            raise
        except Exception as e:
            raise AuthError(
                f"Failed to obtain auth token: {e}",
                auth_url=auth_url,
                cause=e,
            ) from e

        self._logger.debug("Auth token acquired", auth_url=auth_url, has_token=bool(token))
        return token or ""

    @staticmethod
    def _decode(raw: RawResponse, source_url: str) -> JSONValue:
        if raw.status_code != 200:
            raise TransportError.unexpected_status(raw.status_code, source_url)
        if raw.is_empty:
            raise EmptyResponseError(source_url)
        try:
            return json.loads(raw.body, parse_constant=_reject_constant)
        except ValueError as e:
            raise InvalidPayloadError(source_url, cause=e) from e


def _require_url(url: str | None, *, field: str, missing: str) -> str:
    if not url:
        raise ConfigurationError(missing, field=field)
    try:
        return ensure_http_url(url)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {field}: {e}", field=field) from e


def _reject_constant(name: str) -> None:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


_default_service: FetchService | None = None


def _get_default_service() -> FetchService:
    global _default_service
    if _default_service is None:
        _default_service = FetchService()
    return _default_service


def fetch(config: FetchConfig) -> JSONValue:
    """Fetch with a shared default FetchService."""
    return _get_default_service().fetch(config)


def try_fetch(config: FetchConfig) -> FetchResult:
    """Fetch with a shared default FetchService, returning a FetchResult."""
    return _get_default_service().try_fetch(config)
