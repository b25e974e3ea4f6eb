"""Fetch JSON payloads from remote HTTP sources."""

from .auth import AuthTokenProvider
from .config import AuthCredentials, FetchConfig, TransportKind
from .errors import (
    AuthError,
    ConfigurationError,
    EmptyResponseError,
    ErrorCode,
    InvalidPayloadError,
    SourceFetchError,
    TransportError,
)
from .service import FetchService, fetch, try_fetch
from .transports import (
    PooledClientTransport,
    RawSocketTransport,
    StreamTransport,
    create_transport,
)
from .types import FetchResult, JSONValue, RawResponse, TransportRequest

__all__ = [
    "AuthCredentials",
    "AuthError",
    "AuthTokenProvider",
    "ConfigurationError",
    "EmptyResponseError",
    "ErrorCode",
    "FetchConfig",
    "FetchResult",
    "FetchService",
    "InvalidPayloadError",
    "JSONValue",
    "PooledClientTransport",
    "RawResponse",
    "RawSocketTransport",
    "SourceFetchError",
    "StreamTransport",
    "TransportError",
    "TransportKind",
    "TransportRequest",
    "create_transport",
    "fetch",
    "try_fetch",
]

__version__ = "0.1.0"
