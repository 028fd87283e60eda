"""Shared pytest fixtures for Sleeper gateway tests."""

import asyncio

import pytest
import pytest_asyncio
from aiohttp import web

from sleeper_gateway.adapters.cache.response_cache import ResponseCache
from sleeper_gateway.adapters.players.directory import PlayerDirectory
from sleeper_gateway.adapters.sleeper_api.client import SleeperAPIClient
from sleeper_gateway.config import Config, Environment
from mock_sleeper_api.mock_sleeper_server import MockSleeperAPIServer
from mock_sleeper_api.control import MockSleeperControlClient
from tests.factories import FakeClock, PLAYERS, USERS, ROSTERS, MATCHUPS_WEEK_3


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Small cache with a controllable clock."""
    return ResponseCache(max_entries=3, ttl_seconds=30, clock=clock)


@pytest.fixture
def directory():
    return PlayerDirectory.from_snapshot(PLAYERS)


@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "nfl.json"


@pytest_asyncio.fixture
async def sleeper_client(cache):
    client = SleeperAPIClient(cache=cache, base_url="https://api.sleeper.test/v1")
    yield client
    await client.close()


@pytest_asyncio.fixture
async def mock_sleeper_api_server(unused_tcp_port_factory):
    """Start mock Sleeper API server seeded with one league and the player set."""
    port = unused_tcp_port_factory()
    server = MockSleeperAPIServer(port=port)
    server.players = dict(PLAYERS)

    # Start server in background
    runner = web.AppRunner(server.app)
    await runner.setup()
    site = web.TCPSite(runner, 'localhost', port)
    await site.start()

    # Wait for server to be ready
    await asyncio.sleep(0.1)

    control = MockSleeperControlClient(f"http://localhost:{port}")
    await control.put_league("league-1", USERS, ROSTERS, {3: MATCHUPS_WEEK_3})

    yield server

    await runner.cleanup()


@pytest.fixture
def mock_sleeper_url(mock_sleeper_api_server):
    return f"http://localhost:{mock_sleeper_api_server.port}"


@pytest.fixture
def mock_control(mock_sleeper_url):
    return MockSleeperControlClient(mock_sleeper_url)


@pytest.fixture
def test_config(mock_sleeper_url, snapshot_path, unused_tcp_port_factory):
    """Configuration pointing at the mock Sleeper API and a temp snapshot."""
    return Config(
        environment=Environment.CI,
        host="localhost",
        port=unused_tcp_port_factory(),
        sleeper_api_url=mock_sleeper_url,
        sleeper_api_timeout_seconds=2.0,
        cache_ttl_seconds=30,
        cache_max_entries=100,
        player_snapshot_path=str(snapshot_path),
    )
