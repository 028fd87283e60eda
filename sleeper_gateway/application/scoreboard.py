"""Scoreboard aggregation: join users, rosters and matchup entries."""

import asyncio
from typing import Any, Dict, Iterable, List, Optional

import structlog

from sleeper_gateway.adapters.players.directory import PlayerDirectory
from sleeper_gateway.adapters.sleeper_api.client import SleeperAPIClient
from sleeper_gateway.core.entities import Matchup, ScoreboardEntry

logger = structlog.get_logger()


def _index_by(records: Optional[Iterable[Dict[str, Any]]], key: str) -> Dict[Any, Dict[str, Any]]:
    return {record.get(key): record for record in records or () if isinstance(record, dict)}


def _team_name(user: Dict[str, Any]) -> str:
    metadata = user.get("metadata") or {}
    return metadata.get("team_name") or ""


def build_entry(
    entry: Dict[str, Any],
    users_by_id: Dict[Any, Dict[str, Any]],
    rosters_by_id: Dict[Any, Dict[str, Any]],
    directory: PlayerDirectory,
) -> ScoreboardEntry:
    """Resolve one matchup entry into a ScoreboardEntry.

    Missing roster or owner metadata yields empty names and unknown player ids
    are kept as-is, so a single incomplete team never fails the scoreboard.
    """
    roster_id = entry.get("roster_id")
    roster = rosters_by_id.get(roster_id)
    user = users_by_id.get(roster.get("owner_id")) if roster else None

    starter_ids = [str(pid) for pid in entry.get("starters") or ()]
    player_ids = [str(pid) for pid in entry.get("players") or ()]
    starter_set = set(starter_ids)

    players_points: Dict[str, float] = {}
    starters_points: Dict[str, float] = {}
    raw_points = entry.get("players_points")
    if not isinstance(raw_points, dict):
        raw_points = {}
    for pid, points in raw_points.items():
        name = directory.display_name(str(pid))
        players_points[name] = points
        if str(pid) in starter_set:
            starters_points[name] = points

    return ScoreboardEntry(
        roster_id=roster_id,
        user_name=(user.get("display_name") or "") if user else "",
        team_name=_team_name(user) if user else "",
        starters=[directory.display_name(pid) for pid in starter_ids],
        players=[directory.display_name(pid) for pid in player_ids],
        points=entry.get("points") or 0,
        players_points=players_points,
        starters_points=starters_points,
    )


def build_scoreboard(
    users: Optional[List[Dict[str, Any]]],
    rosters: Optional[List[Dict[str, Any]]],
    matchups: Optional[List[Dict[str, Any]]],
    week: int,
    directory: PlayerDirectory,
) -> List[Matchup]:
    """Group resolved entries into matchups, in first-seen matchup_id order."""
    users_by_id = _index_by(users, "user_id")
    rosters_by_id = _index_by(rosters, "roster_id")

    grouped: Dict[Any, Matchup] = {}
    for entry in matchups or ():
        if not isinstance(entry, dict):
            continue
        matchup_id = entry.get("matchup_id")
        if matchup_id not in grouped:
            grouped[matchup_id] = Matchup(matchup_id=matchup_id, week=week)
        grouped[matchup_id].entries.append(build_entry(entry, users_by_id, rosters_by_id, directory))

    return list(grouped.values())


class ScoreboardService:
    """Fetches a league's users, rosters and matchups and joins them."""

    def __init__(self, client: SleeperAPIClient, directory: PlayerDirectory):
        self.client = client
        self.directory = directory

    async def get_scoreboard(self, league_id: str, week: int) -> List[Matchup]:
        """Build the scoreboard for a league and week.

        Raises:
            UpstreamError: If any of the three fetches gets a non-2xx response
            TransportError: If any of the three fetches cannot reach Sleeper
        """
        users, rosters, matchups = await asyncio.gather(
            self.client.get_league_users(league_id),
            self.client.get_league_rosters(league_id),
            self.client.get_league_matchups(league_id, week),
        )

        scoreboard = build_scoreboard(users, rosters, matchups, week, self.directory)
        logger.info(
            "Built scoreboard",
            league_id=league_id,
            week=week,
            matchups=len(scoreboard),
        )
        return scoreboard
