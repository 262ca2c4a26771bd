"""Shared fixtures.

Clients talk to the emulator through ``httpx.ASGITransport`` so we get a
genuine HTTP-level exchange without starting a server.
"""

import httpx
import pytest

from bravia_api import Bravia
from bravia_api.emulator import DeviceState, build_registry, create_app

PSK = "0000"
ADDRESS = "http://tv.test"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def state():
    return DeviceState()


@pytest.fixture
def app(state):
    """Emulated device requiring ``PSK`` on protected APIs."""
    return create_app(psk=PSK, registry=build_registry(state))


@pytest.fixture
async def bravia(app):
    """Authenticated client wired to the in-process emulator."""
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    client = Bravia(ADDRESS, PSK, transport=transport)
    yield client
    await client.close()


@pytest.fixture
async def anonymous(app):
    """Client without a pre-shared key."""
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    client = Bravia(ADDRESS, transport=transport)
    yield client
    await client.close()


@pytest.fixture
def http(app):
    """Raw in-process async HTTP client."""
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    return httpx.AsyncClient(transport=transport, base_url=ADDRESS)
