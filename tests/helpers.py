"""Test doubles shared by unit and property tests."""

from __future__ import annotations

import json
from typing import Any

from source_fetch.config import AuthCredentials, TransportKind
from source_fetch.transports import TRANSPORTS
from source_fetch.types import RawResponse, TransportRequest


class RecordingTransport:
    """Transport with the real header policy of ``kind`` and a canned response."""

    def __init__(
        self,
        kind: TransportKind,
        response: RawResponse | Exception,
        events: list[str],
    ) -> None:
        self.kind = kind
        self._inner = TRANSPORTS[kind](verify_tls=False)
        self._response = response
        self._events = events
        self.requests: list[TransportRequest] = []

    def build_headers(self, token: str | None) -> tuple[str, ...]:
        return self._inner.build_headers(token)

    def send(self, request: TransportRequest) -> RawResponse:
        self._events.append("send")
        self.requests.append(request)
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


class RecordingTransportFactory:
    """Transport factory that hands out RecordingTransports."""

    def __init__(
        self,
        response: RawResponse | Exception = RawResponse(200, b'{"ok": true}'),
        events: list[str] | None = None,
    ) -> None:
        self.response = response
        self.events = events if events is not None else []
        self.transports: list[RecordingTransport] = []
        self.verify_flags: list[bool] = []

    def __call__(self, kind: TransportKind, *, verify_tls: bool = False) -> RecordingTransport:
        transport = RecordingTransport(kind, self.response, self.events)
        self.transports.append(transport)
        self.verify_flags.append(verify_tls)
        return transport

    @property
    def requests(self) -> list[TransportRequest]:
        return [r for t in self.transports for r in t.requests]


class FakeAuthProvider:
    """Token provider returning a fixed token or raising."""

    def __init__(
        self,
        token: str | None = "tok-abc",
        *,
        error: Exception | None = None,
        events: list[str] | None = None,
    ) -> None:
        self.token = token
        self.error = error
        self.events = events if events is not None else []
        self.calls: list[tuple[str, AuthCredentials]] = []

    def get_token(self, auth_endpoint_url: str, credentials: AuthCredentials) -> str | None:
        self.events.append("auth")
        self.calls.append((auth_endpoint_url, credentials))
        if self.error is not None:
            raise self.error
        return self.token


def header_names(request: TransportRequest) -> set[str]:
    """Lower-cased header names a request carries."""
    return {name.lower() for name in request.headers()}


def json_body(value: Any) -> bytes:
    return json.dumps(value).encode()
