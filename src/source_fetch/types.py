"""Type definitions for source-fetch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .errors import ErrorCode, SourceFetchError

JSONValue: TypeAlias = (
    "dict[str, JSONValue] | list[JSONValue] | str | int | float | bool | None"
)


@dataclass(frozen=True)
class RawResponse:
    """Status and body of a single request attempt."""

    status_code: int
    body: bytes = b""

    @property
    def is_empty(self) -> bool:
        """Check if the body carries no bytes."""
        return len(self.body) == 0


@dataclass(frozen=True)
class TransportRequest:
    """GET request handed to a transport.

    Headers are kept as literal ``Name: value`` lines so a transport can
    carry blank lines through unchanged.
    """

    url: str
    header_lines: tuple[str, ...] = ()

    def headers(self) -> dict[str, str]:
        """Parse header lines into a mapping, skipping blank lines."""
        parsed: dict[str, str] = {}
        for line in self.header_lines:
            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                continue
            parsed[name.strip()] = value.strip()
        return parsed


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch: a payload or a typed error, never both."""

    payload: JSONValue = None
    error: SourceFetchError | None = None

    @property
    def ok(self) -> bool:
        """Check if the fetch succeeded."""
        return self.error is None

    @property
    def kind(self) -> ErrorCode | None:
        """Error kind of a failed fetch."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> JSONValue:
        """Return the payload or raise the error."""
        if self.error is not None:
            raise self.error
        return self.payload
