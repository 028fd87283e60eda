"""Mock Sleeper API server for local development and testing.

This module serves the read-only Sleeper endpoints the gateway uses from
in-memory fixtures, plus a REST control interface to seed leagues and players
and to simulate upstream failures and latency.
"""

import asyncio
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from aiohttp import web
import structlog

logger = structlog.get_logger()


DEFAULT_NFL_STATE: Dict[str, Any] = {
    "week": 1,
    "season_type": "regular",
    "season_start_date": "2025-09-04",
    "season": "2025",
    "previous_season": "2024",
    "leg": 1,
    "league_season": "2025",
    "league_create_season": "2025",
    "display_week": 1,
    "season_has_scores": True,
}


@dataclass
class MockLeague:
    """Mock league data."""
    league_id: str
    users: List[Dict[str, Any]] = field(default_factory=list)
    rosters: List[Dict[str, Any]] = field(default_factory=list)
    matchups: Dict[int, List[Dict[str, Any]]] = field(default_factory=dict)


class MockSleeperAPIServer:
    """Mock Sleeper API server with control endpoints."""

    def __init__(self, port: int = 8080):
        self.port = port
        self.app = web.Application()
        self.leagues: Dict[str, MockLeague] = {}
        self.players: Dict[str, Dict[str, Any]] = {}
        self.nfl_state: Dict[str, Any] = dict(DEFAULT_NFL_STATE)
        self.request_delay: float = 0  # Configurable delay for timeout testing
        self.forced_status: Optional[int] = None  # Force every API call to fail with this status
        self.request_counts: Counter = Counter()
        self.setup_routes()

    def setup_routes(self):
        """Set up all API routes."""
        # Sleeper API endpoints
        self.app.router.add_get('/state/nfl', self.get_nfl_state)
        self.app.router.add_get('/players/nfl', self.get_players)
        self.app.router.add_get('/league/{league_id}/users', self.get_league_users)
        self.app.router.add_get('/league/{league_id}/rosters', self.get_league_rosters)
        self.app.router.add_get('/league/{league_id}/matchups/{week}', self.get_league_matchups)

        # Control endpoints
        self.app.router.add_put('/control/leagues/{league_id}', self.put_league)
        self.app.router.add_put('/control/players', self.put_players)
        self.app.router.add_put('/control/state', self.put_state)
        self.app.router.add_put('/control/settings', self.update_settings)
        self.app.router.add_get('/control/requests', self.get_request_counts)
        self.app.router.add_post('/control/reset', self.reset_server)

    async def _before_request(self, request: web.Request) -> Optional[web.Response]:
        """Count the request, apply configured delay and forced failures."""
        self.request_counts[request.path] += 1

        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

        if self.forced_status is not None:
            return web.json_response(
                {"error": "Forced failure"}, status=self.forced_status
            )
        return None

    # Sleeper API endpoints
    async def get_nfl_state(self, request: web.Request) -> web.Response:
        """Mock /state/nfl endpoint."""
        if failure := await self._before_request(request):
            return failure
        return web.json_response(self.nfl_state)

    async def get_players(self, request: web.Request) -> web.Response:
        """Mock /players/nfl endpoint."""
        if failure := await self._before_request(request):
            return failure
        return web.json_response(self.players)

    async def get_league_users(self, request: web.Request) -> web.Response:
        """Mock /league/{league_id}/users endpoint."""
        if failure := await self._before_request(request):
            return failure
        league = self.leagues.get(request.match_info['league_id'])
        # Sleeper answers unknown leagues with 200 and a null body
        return web.json_response(league.users if league else None)

    async def get_league_rosters(self, request: web.Request) -> web.Response:
        """Mock /league/{league_id}/rosters endpoint."""
        if failure := await self._before_request(request):
            return failure
        league = self.leagues.get(request.match_info['league_id'])
        return web.json_response(league.rosters if league else None)

    async def get_league_matchups(self, request: web.Request) -> web.Response:
        """Mock /league/{league_id}/matchups/{week} endpoint."""
        if failure := await self._before_request(request):
            return failure
        try:
            week = int(request.match_info['week'])
        except ValueError:
            return web.json_response({"error": "Invalid week"}, status=400)

        league = self.leagues.get(request.match_info['league_id'])
        if league is None:
            return web.json_response(None)
        return web.json_response(league.matchups.get(week, []))

    # Control endpoints
    async def put_league(self, request: web.Request) -> web.Response:
        """Create or replace a mock league."""
        league_id = request.match_info['league_id']
        data = await request.json()

        league = MockLeague(
            league_id=league_id,
            users=data.get("users", []),
            rosters=data.get("rosters", []),
            matchups={int(week): entries for week, entries in data.get("matchups", {}).items()},
        )
        self.leagues[league_id] = league

        logger.info("Stored mock league", league_id=league_id, weeks=sorted(league.matchups))
        return web.json_response({"league_id": league_id, "weeks": sorted(league.matchups)})

    async def put_players(self, request: web.Request) -> web.Response:
        """Replace the bulk player dataset."""
        self.players = await request.json()
        logger.info("Stored mock players", count=len(self.players))
        return web.json_response({"count": len(self.players)})

    async def put_state(self, request: web.Request) -> web.Response:
        """Update the NFL state document."""
        self.nfl_state.update(await request.json())
        return web.json_response(self.nfl_state)

    async def update_settings(self, request: web.Request) -> web.Response:
        """Update failure and latency simulation settings."""
        data = await request.json()

        if "request_delay" in data:
            self.request_delay = float(data["request_delay"])
        if "forced_status" in data:
            self.forced_status = data["forced_status"]

        logger.info(
            "Updated mock settings",
            request_delay=self.request_delay,
            forced_status=self.forced_status,
        )
        return web.json_response({
            "request_delay": self.request_delay,
            "forced_status": self.forced_status,
        })

    async def get_request_counts(self, request: web.Request) -> web.Response:
        """Number of API requests served, per path."""
        return web.json_response(dict(self.request_counts))

    async def reset_server(self, request: web.Request) -> web.Response:
        """Reset all mock data and settings."""
        self.reset()
        return web.json_response({"status": "reset"})

    def reset(self):
        self.leagues.clear()
        self.players = {}
        self.nfl_state = dict(DEFAULT_NFL_STATE)
        self.request_delay = 0
        self.forced_status = None
        self.request_counts.clear()

    def run(self):
        """Run the mock server."""
        logger.info("Starting mock Sleeper API server", port=self.port)
        web.run_app(self.app, host='0.0.0.0', port=self.port)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description='Mock Sleeper API Server')
    parser.add_argument('--port', type=int, default=8080, help='Port to run on')
    args = parser.parse_args()

    server = MockSleeperAPIServer(port=args.port)
    server.run()


if __name__ == '__main__':
    main()
