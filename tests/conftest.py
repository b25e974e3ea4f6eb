"""
Shared test fixtures for source-fetch tests.

Provides common configuration fixtures and test doubles for the
transport and auth layers.
"""

import pytest

from source_fetch.config import AuthCredentials, FetchConfig

from .helpers import FakeAuthProvider, RecordingTransportFactory


@pytest.fixture
def source_url() -> str:
    """Provide a source URL."""
    return "https://api.example.com/data"


@pytest.fixture
def auth_url() -> str:
    """Provide an auth endpoint URL."""
    return "https://auth.example.com/graphql"


@pytest.fixture
def credentials() -> AuthCredentials:
    """Provide complete client credentials."""
    return AuthCredentials(client_id="id1", client_secret="secret1")


@pytest.fixture
def base_config(source_url: str) -> FetchConfig:
    """Provide an unauthenticated fetch configuration."""
    return FetchConfig(source_url=source_url)


@pytest.fixture
def auth_config(source_url: str, auth_url: str) -> FetchConfig:
    """Provide an authenticated fetch configuration."""
    return FetchConfig(
        source_url=source_url,
        auth_endpoint_url=auth_url,
        credentials=("id1", "secret1"),
    )


@pytest.fixture
def transport_factory() -> RecordingTransportFactory:
    """Provide a transport factory answering 200 with a JSON body."""
    return RecordingTransportFactory()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    """Provide an auth provider returning ``tok-abc``."""
    return FakeAuthProvider()
