"""End-to-end tests: gateway service in front of the mock Sleeper API."""

import dataclasses
import json

import httpx
import pytest
import pytest_asyncio

from sleeper_gateway.service import GatewayService
from tests.factories import PLAYERS


@pytest_asyncio.fixture
async def gateway(test_config):
    """Running gateway service; yields an httpx client bound to it."""
    service = GatewayService(test_config)
    await service.start()

    async with httpx.AsyncClient(base_url=f"http://localhost:{test_config.port}") as client:
        yield client

    await service.stop()


async def call_tool(client: httpx.AsyncClient, name: str, /, **arguments):
    return await client.post(f"/tools/{name}", json=arguments)


class TestGatewayE2E:
    """Full request path through HTTP, cache, client and aggregation."""

    @pytest.mark.asyncio
    async def test_startup_downloads_and_persists_snapshot(self, gateway, snapshot_path, mock_sleeper_api_server):
        response = await gateway.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "players_loaded": 3}
        assert json.loads(snapshot_path.read_text()) == PLAYERS
        assert mock_sleeper_api_server.request_counts["/players/nfl"] == 1

    @pytest.mark.asyncio
    async def test_list_tools(self, gateway):
        response = await gateway.get("/tools")

        tools = {tool["name"]: tool for tool in response.json()["tools"]}
        assert len(tools) == 7
        assert tools["get_matchup_scoreboard"]["input"] == {"league_id": "string", "week": "integer"}

    @pytest.mark.asyncio
    async def test_get_nfl_state(self, gateway):
        response = await call_tool(gateway, "get_nfl_state")

        assert response.status_code == 200
        assert response.json()["result"]["season_type"] == "regular"

    @pytest.mark.asyncio
    async def test_player_lookups(self, gateway):
        response = await call_tool(gateway, "get_player_id", name="Justin Jefferson")
        assert response.json() == {"result": {"player_id": "6794"}}

        response = await call_tool(gateway, "get_player_name", id="6794")
        assert response.json() == {"result": {"player_name": "Justin Jefferson"}}

    @pytest.mark.asyncio
    async def test_player_not_found(self, gateway):
        response = await call_tool(gateway, "get_player_id", name="Nobody Special")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_scoreboard(self, gateway):
        response = await call_tool(gateway, "get_matchup_scoreboard", league_id="league-1", week=3)

        assert response.status_code == 200
        (matchup,) = response.json()["result"]
        assert matchup["matchup_id"] == 7
        assert matchup["week"] == 3
        first, second = matchup["entries"]
        assert first["team_name"] == "Greg's Gunslingers"
        assert first["players"] == ["Josh Allen", "Justin Jefferson"]
        assert first["starters_points"] == {"Josh Allen": 30.0}
        assert second["starters_points"] == {"Christian McCaffrey": 40.0}

    @pytest.mark.asyncio
    async def test_repeated_queries_are_served_from_cache(self, gateway, mock_sleeper_api_server):
        for _ in range(3):
            response = await call_tool(gateway, "get_matchup_scoreboard", league_id="league-1", week=3)
            assert response.status_code == 200

        counts = mock_sleeper_api_server.request_counts
        assert counts["/league/league-1/users"] == 1
        assert counts["/league/league-1/rosters"] == 1
        assert counts["/league/league-1/matchups/3"] == 1

    @pytest.mark.asyncio
    async def test_upstream_failure_maps_to_502(self, gateway, mock_control):
        await mock_control.update_settings(forced_status=500)

        response = await call_tool(gateway, "get_matchup_scoreboard", league_id="league-1", week=3)

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "upstream_error"
        assert error["status"] == 500

    @pytest.mark.asyncio
    async def test_unknown_league_yields_empty_scoreboard(self, gateway):
        response = await call_tool(gateway, "get_matchup_scoreboard", league_id="no-such-league", week=1)

        assert response.status_code == 200
        assert response.json() == {"result": []}

    @pytest.mark.asyncio
    async def test_validation_errors(self, gateway, mock_sleeper_api_server):
        response = await call_tool(gateway, "get_league_matchups", league_id="league-1", week="three")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"
        assert mock_sleeper_api_server.request_counts["/league/league-1/matchups/three"] == 0

        response = await gateway.post("/tools/get_league_users", json=["league-1"])
        assert response.status_code == 400

        response = await gateway.post(
            "/tools/get_league_users", content=b"{oops", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_tool(self, gateway):
        response = await call_tool(gateway, "delete_league", league_id="league-1")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "unknown_tool"


@pytest.mark.asyncio
async def test_slow_upstream_times_out(test_config, mock_control):
    config = dataclasses.replace(test_config, sleeper_api_timeout_seconds=0.2)
    service = GatewayService(config)
    await service.start()

    try:
        await mock_control.update_settings(request_delay=1.0)
        async with httpx.AsyncClient(base_url=f"http://localhost:{config.port}") as client:
            response = await call_tool(client, "get_league_users", league_id="league-1")

        assert response.status_code == 504
        assert response.json()["error"]["code"] == "transport_error"
    finally:
        await service.stop()


@pytest.mark.asyncio
async def test_directory_degrades_when_snapshot_download_fails(test_config, mock_control, snapshot_path):
    await mock_control.update_settings(forced_status=503)
    service = GatewayService(test_config)
    await service.start()

    try:
        await mock_control.update_settings(forced_status=None)
        async with httpx.AsyncClient(base_url=f"http://localhost:{test_config.port}") as client:
            health = await client.get("/health")
            assert health.json()["players_loaded"] == 0
            assert not snapshot_path.exists()

            response = await call_tool(client, "get_player_name", id="4984")
            assert response.status_code == 404

            response = await call_tool(client, "get_matchup_scoreboard", league_id="league-1", week=3)
            assert response.status_code == 200
            first = response.json()["result"][0]["entries"][0]
            assert first["players"] == ["4984", "6794"]
    finally:
        await service.stop()
