"""Interchangeable request executors for source-fetch."""

from __future__ import annotations

from ..config import TransportKind
from ..errors import ConfigurationError
from .base import Transport
from .pooled import PooledClientTransport
from .raw_socket import RawSocketTransport
from .stream import StreamTransport

TRANSPORTS: dict[TransportKind, type[Transport]] = {
    TransportKind.POOLED: PooledClientTransport,
    TransportKind.RAW_SOCKET: RawSocketTransport,
    TransportKind.STREAM: StreamTransport,
}


def create_transport(kind: TransportKind | str, *, verify_tls: bool = False) -> Transport:
    """Create a fresh transport for one fetch.

    Args:
        kind: Transport kind or its name.
        verify_tls: Verify server certificates and host names.

    Returns:
        Transport instance.

    Raises:
        ConfigurationError: If the kind is not a known transport.
    """
    try:
        transport_cls = TRANSPORTS[TransportKind(kind)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(
            f"Client type not provided or unknown: {kind!r}",
            field="transport",
        ) from e
    return transport_cls(verify_tls=verify_tls)


__all__ = [
    "TRANSPORTS",
    "PooledClientTransport",
    "RawSocketTransport",
    "StreamTransport",
    "Transport",
    "create_transport",
]
