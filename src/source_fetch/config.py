"""Configuration for source-fetch.

Uses Pydantic v2 frozen models so a configuration is validated once and
never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    HttpUrl,
    SecretStr,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from .errors import ConfigurationError
from .telemetry import get_logger

_HTTP_URL: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)


def ensure_http_url(url: str) -> str:
    """Check that ``url`` is an absolute http(s) URL.

    Args:
        url: URL to check.

    Returns:
        The URL unchanged.

    Raises:
        ValueError: If the URL has no http(s) scheme or no host.
    """
    try:
        _HTTP_URL.validate_python(url)
    except PydanticValidationError as e:
        msg = f"not an absolute http(s) URL: {url!r}"
        raise ValueError(msg) from e
    return url


class TransportKind(StrEnum):
    """Transports a fetch can be dispatched to."""

    POOLED = "pooled"
    RAW_SOCKET = "raw_socket"
    STREAM = "stream"

    @classmethod
    def _missing_(cls, value: object) -> TransportKind | None:
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        for member in cls:
            if member.value == name:
                return member
        return _LEGACY_TRANSPORT_NAMES.get(name)


# Client names used by deployments configured before the enum existed.
_LEGACY_TRANSPORT_NAMES = {
    "guzzle": TransportKind.POOLED,
    "curl": TransportKind.RAW_SOCKET,
    "file_get_contents": TransportKind.STREAM,
}


class AuthCredentials(BaseModel):
    """Client credentials exchanged for a bearer token."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    client_id: str
    client_secret: SecretStr

    @model_validator(mode="before")
    @classmethod
    def from_sequence(cls, data: Any) -> Any:
        """Accept a ``(client_id, client_secret)`` pair."""
        if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            if len(data) != 2:
                msg = "credentials must be a (client_id, client_secret) pair"
                raise ValueError(msg)
            client_id, client_secret = data
            return {
                "client_id": "" if client_id is None else client_id,
                "client_secret": "" if client_secret is None else client_secret,
            }
        return data

    @classmethod
    def from_pair(cls, pair: Sequence[Any]) -> Self:
        """Create credentials from a two-item sequence."""
        try:
            return cls.model_validate(pair)
        except PydanticValidationError as e:
            raise _config_error(e) from e

    @property
    def is_complete(self) -> bool:
        """Whether both client id and secret are non-empty."""
        return bool(self.client_id) and bool(self.client_secret.get_secret_value())


class FetchConfig(BaseModel):
    """Inputs governing one fetch operation."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    transport: TransportKind = TransportKind.POOLED
    source_url: str | None = None
    auth_endpoint_url: str | None = None
    credentials: AuthCredentials | None = None

    # TLS certificate and host name checks are off unless enabled here
    verify_tls: bool = False

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise _config_error(e) from e

    @field_validator("transport", mode="before")
    @classmethod
    def resolve_transport(cls, v: Any) -> Any:
        """Resolve transport names, including legacy client names."""
        if isinstance(v, str) and not isinstance(v, TransportKind):
            return TransportKind(v)
        return v

    @field_validator("credentials", mode="before")
    @classmethod
    def empty_credentials_are_absent(cls, v: Any) -> Any:
        """Treat an empty credential sequence as no credentials."""
        if isinstance(v, Sequence) and not isinstance(v, (str, bytes)) and len(v) == 0:
            return None
        return v

    @field_validator("source_url", "auth_endpoint_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Reject relative and non-http(s) URLs; missing ones fail at fetch."""
        if not v:
            return v
        return ensure_http_url(v)

    @model_validator(mode="after")
    def warn_half_filled_credentials(self) -> Self:
        """Log when a credential pair lacks one half and auth is skipped."""
        credentials = self.credentials
        if credentials is None or credentials.is_complete:
            return self
        has_id = bool(credentials.client_id)
        has_secret = bool(credentials.client_secret.get_secret_value())
        if has_id or has_secret:
            get_logger().warning(
                "Incomplete credentials, fetching without auth",
                has_client_id=has_id,
                has_client_secret=has_secret,
            )
        return self

    @property
    def auth_required(self) -> bool:
        """Whether a bearer token must be obtained before fetching."""
        return self.credentials is not None and self.credentials.is_complete

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)


def _config_error(exc: PydanticValidationError) -> ConfigurationError:
    """Translate the first pydantic error into a ConfigurationError."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    return ConfigurationError(f"Invalid fetch configuration: {first['msg']}", field=field)
