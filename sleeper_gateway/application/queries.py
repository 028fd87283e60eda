"""Query operations exposed by the gateway."""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

import structlog

from sleeper_gateway.adapters.players.directory import PlayerDirectory
from sleeper_gateway.adapters.sleeper_api.client import SleeperAPIClient
from sleeper_gateway.application.scoreboard import ScoreboardService
from sleeper_gateway.core.errors import ValidationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class ToolSpec:
    """Caller-facing description of one query operation."""

    name: str
    title: str
    description: str
    input: Mapping[str, str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "input": dict(self.input),
        }


TOOLS: List[ToolSpec] = [
    ToolSpec(
        "get_nfl_state",
        "Get NFL State",
        "Fetches the current week, season, and related state information for the NFL from the Sleeper API.",
        {},
    ),
    ToolSpec(
        "get_player_id",
        "Get Player ID",
        "Given a player's full name, returns the player id used in Sleeper.",
        {"name": "string"},
    ),
    ToolSpec(
        "get_player_name",
        "Get Player Name",
        "Given a player's id, returns their full name used in Sleeper.",
        {"id": "string"},
    ),
    ToolSpec(
        "get_league_rosters",
        "Get League Rosters",
        "Fetches every roster in a Sleeper league.",
        {"league_id": "string"},
    ),
    ToolSpec(
        "get_league_users",
        "Get League Users",
        "Fetches every user in a Sleeper league.",
        {"league_id": "string"},
    ),
    ToolSpec(
        "get_league_matchups",
        "Get League Matchups",
        "Fetches the raw matchup entries of a Sleeper league for one week.",
        {"league_id": "string", "week": "integer"},
    ),
    ToolSpec(
        "get_matchup_scoreboard",
        "Get Matchup Scoreboard",
        "Fetches a week's matchups for a league and joins them with users, rosters and player names.",
        {"league_id": "string", "week": "integer"},
    ),
]


def require_string(arguments: Mapping[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{key}' must be a non-empty string")
    return value


LEAGUE_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def require_league_id(arguments: Mapping[str, Any], key: str = "league_id") -> str:
    """League ids are interpolated into upstream paths, so only a bare segment is accepted."""
    value = require_string(arguments, key)
    if not LEAGUE_ID_PATTERN.fullmatch(value):
        raise ValidationError(f"'{key}' may only contain letters, digits, '_' and '-'")
    return value


def require_week(arguments: Mapping[str, Any], key: str = "week") -> int:
    value = arguments.get(key)
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"'{key}' must be a non-negative integer")
    return value


class QueryService:
    """The gateway's query operations, bound to shared directory and client."""

    def __init__(self, client: SleeperAPIClient, directory: PlayerDirectory):
        self.client = client
        self.directory = directory
        self.scoreboard = ScoreboardService(client, directory)
        self._handlers = {
            "get_nfl_state": self._get_nfl_state,
            "get_player_id": self._get_player_id,
            "get_player_name": self._get_player_name,
            "get_league_rosters": self._get_league_rosters,
            "get_league_users": self._get_league_users,
            "get_league_matchups": self._get_league_matchups,
            "get_matchup_scoreboard": self._get_matchup_scoreboard,
        }

    @property
    def tools(self) -> List[ToolSpec]:
        return TOOLS

    def has_tool(self, name: str) -> bool:
        return name in self._handlers

    async def call(self, name: str, arguments: Mapping[str, Any]) -> Any:
        """Run a named operation with JSON-shaped arguments.

        Raises:
            KeyError: If no operation has that name
            ValidationError: If the arguments are missing or malformed
        """
        handler = self._handlers[name]
        logger.debug("Calling tool", tool=name)
        return await handler(arguments)

    # Direct operations

    async def get_nfl_state(self) -> Any:
        return await self.client.get_nfl_state()

    def get_player_id(self, name: str) -> str:
        return self.directory.resolve_id(name)

    def get_player_name(self, player_id: str) -> str:
        return self.directory.resolve_name(player_id)

    async def get_league_rosters(self, league_id: str) -> Any:
        return await self.client.get_league_rosters(league_id)

    async def get_league_users(self, league_id: str) -> Any:
        return await self.client.get_league_users(league_id)

    async def get_league_matchups(self, league_id: str, week: int) -> Any:
        return await self.client.get_league_matchups(league_id, week)

    async def get_matchup_scoreboard(self, league_id: str, week: int) -> List[Dict[str, Any]]:
        matchups = await self.scoreboard.get_scoreboard(league_id, week)
        return [matchup.to_dict() for matchup in matchups]

    # Argument-validating adapters used by call()

    async def _get_nfl_state(self, arguments: Mapping[str, Any]) -> Any:
        return await self.get_nfl_state()

    async def _get_player_id(self, arguments: Mapping[str, Any]) -> Dict[str, str]:
        name = require_string(arguments, "name")
        return {"player_id": self.get_player_id(name)}

    async def _get_player_name(self, arguments: Mapping[str, Any]) -> Dict[str, str]:
        player_id = require_string(arguments, "id")
        return {"player_name": self.get_player_name(player_id)}

    async def _get_league_rosters(self, arguments: Mapping[str, Any]) -> Any:
        return await self.get_league_rosters(require_league_id(arguments))

    async def _get_league_users(self, arguments: Mapping[str, Any]) -> Any:
        return await self.get_league_users(require_league_id(arguments))

    async def _get_league_matchups(self, arguments: Mapping[str, Any]) -> Any:
        league_id = require_league_id(arguments)
        week = require_week(arguments)
        return await self.get_league_matchups(league_id, week)

    async def _get_matchup_scoreboard(self, arguments: Mapping[str, Any]) -> List[Dict[str, Any]]:
        league_id = require_league_id(arguments)
        week = require_week(arguments)
        return await self.get_matchup_scoreboard(league_id, week)
