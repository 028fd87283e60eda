"""Control client for the mock Sleeper API server.

This module provides a Python client and CLI for seeding the mock server with
leagues and players and for simulating upstream failures.
"""

import asyncio
import json
from typing import Optional, Dict, Any, List

import httpx
import structlog
import click

logger = structlog.get_logger()


class MockSleeperControlClient:
    """Client for controlling the mock Sleeper API server."""

    def __init__(self, base_url: str = "http://localhost:8080"):
        self.base_url = base_url
        self.control_url = f"{base_url}/control"

    async def put_league(
        self,
        league_id: str,
        users: List[Dict[str, Any]],
        rosters: List[Dict[str, Any]],
        matchups: Dict[int, List[Dict[str, Any]]],
    ) -> Dict[str, Any]:
        """Create or replace a league."""
        async with httpx.AsyncClient() as client:
            data = {
                "users": users,
                "rosters": rosters,
                "matchups": {str(week): entries for week, entries in matchups.items()},
            }
            response = await client.put(f"{self.control_url}/leagues/{league_id}", json=data)
            response.raise_for_status()
            return response.json()

    async def put_players(self, players: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
        """Replace the bulk player dataset."""
        async with httpx.AsyncClient() as client:
            response = await client.put(f"{self.control_url}/players", json=players)
            response.raise_for_status()
            return response.json()

    async def put_state(self, **state: Any) -> Dict[str, Any]:
        """Update fields of the NFL state document."""
        async with httpx.AsyncClient() as client:
            response = await client.put(f"{self.control_url}/state", json=state)
            response.raise_for_status()
            return response.json()

    async def update_settings(
        self,
        request_delay: Optional[float] = None,
        forced_status: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Update failure simulation settings. forced_status=None clears it."""
        async with httpx.AsyncClient() as client:
            data: Dict[str, Any] = {"forced_status": forced_status}
            if request_delay is not None:
                data["request_delay"] = request_delay

            response = await client.put(f"{self.control_url}/settings", json=data)
            response.raise_for_status()
            return response.json()

    async def get_request_counts(self) -> Dict[str, int]:
        """Requests served by the mock, per path."""
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{self.control_url}/requests")
            response.raise_for_status()
            return response.json()

    async def reset_server(self) -> Dict[str, Any]:
        """Reset server to initial state."""
        async with httpx.AsyncClient() as client:
            response = await client.post(f"{self.control_url}/reset")
            response.raise_for_status()
            return response.json()


@click.group()
@click.option('--url', default='http://localhost:8080', help='Mock server URL')
@click.pass_context
def cli(ctx, url):
    """Control the mock Sleeper API server."""
    ctx.ensure_object(dict)
    ctx.obj['client'] = MockSleeperControlClient(url)


@cli.command()
@click.argument('league_id')
@click.argument('fixture', type=click.File('r'))
@click.pass_context
def load_league(ctx, league_id, fixture):
    """Load a league from a JSON file with users, rosters and matchups keys."""
    client = ctx.obj['client']
    data = json.load(fixture)
    matchups = {int(week): entries for week, entries in data.get("matchups", {}).items()}
    result = asyncio.run(client.put_league(
        league_id, data.get("users", []), data.get("rosters", []), matchups
    ))
    click.echo(f"League stored: {result}")


@cli.command()
@click.argument('fixture', type=click.File('r'))
@click.pass_context
def load_players(ctx, fixture):
    """Load the bulk player dataset from a JSON file."""
    client = ctx.obj['client']
    result = asyncio.run(client.put_players(json.load(fixture)))
    click.echo(f"Players stored: {result['count']}")


@cli.command()
@click.option('--week', type=int, help='Current week')
@click.option('--season', help='Current season')
@click.pass_context
def state(ctx, week, season):
    """Update the NFL state document."""
    client = ctx.obj['client']
    fields = {}
    if week is not None:
        fields["week"] = week
        fields["display_week"] = week
    if season is not None:
        fields["season"] = season
    result = asyncio.run(client.put_state(**fields))
    click.echo(f"State updated: {result}")


@cli.command()
@click.option('--delay', type=float, help='Request delay in seconds')
@click.option('--fail-with', type=int, help='Force every API call to return this status')
@click.pass_context
def settings(ctx, delay, fail_with):
    """Update server settings."""
    client = ctx.obj['client']
    result = asyncio.run(client.update_settings(
        request_delay=delay,
        forced_status=fail_with
    ))
    click.echo(f"Settings updated: {result}")


@cli.command()
@click.pass_context
def requests(ctx):
    """Show how many requests the mock has served per path."""
    client = ctx.obj['client']
    counts = asyncio.run(client.get_request_counts())
    for path, count in sorted(counts.items()):
        click.echo(f"{count:6d}  {path}")


@cli.command()
@click.pass_context
def reset(ctx):
    """Reset server to initial state."""
    client = ctx.obj['client']
    asyncio.run(client.reset_server())
    click.echo("Server reset")


if __name__ == '__main__':
    cli()
