"""Shared fixtures for the relay tests."""

from collections.abc import AsyncIterator

import httpx
import pytest

from webflow_mcp.app import create_app
from webflow_mcp.bridge import CommandBridge
from webflow_mcp.config import Settings


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def bridge(clock: FakeClock) -> CommandBridge:
    return CommandBridge(command_timeout=30.0, liveness_window=60.0, clock=clock)


@pytest.fixture()
def connected_bridge(bridge: CommandBridge) -> CommandBridge:
    """A bridge whose Designer extension has just polled."""
    bridge.take_next()
    return bridge


@pytest.fixture()
def settings() -> Settings:
    return Settings(host="127.0.0.1", port=8787, sse_keepalive=0.05)


@pytest.fixture()
def app(bridge: CommandBridge, settings: Settings):
    return create_app(bridge, settings=settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
