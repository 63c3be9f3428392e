"""
Root Pytest Fixtures.

Shared fixtures available to all test types. The device server is always
the in-process FakeDeviceServer from tests.fakes.
"""

from collections.abc import AsyncGenerator

import pytest

from dsclient.deviceserver.client import ClientConfig, DeviceServerClient
from tests.fakes import TEST_BASE_URL, TEST_PSK, FakeDeviceServer, entry_point_document


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def fake_server() -> FakeDeviceServer:
    """A fake device server with a standard entry point."""
    server = FakeDeviceServer()
    server.add("GET", TEST_BASE_URL, json=entry_point_document())
    return server


@pytest.fixture
def client_config() -> ClientConfig:
    """Client settings for tests. The sweeper is off; tests drive expiry."""
    return ClientConfig(
        base_url=TEST_BASE_URL,
        psk=TEST_PSK,
        cache_sweep_interval_seconds=0,
    )


@pytest.fixture
async def ds_client(
    client_config: ClientConfig,
    fake_server: FakeDeviceServer,
) -> AsyncGenerator[DeviceServerClient, None]:
    """A client wired to the fake device server, closed after the test."""
    client = DeviceServerClient(client_config, transport=fake_server.transport)
    yield client
    await client.aclose()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
