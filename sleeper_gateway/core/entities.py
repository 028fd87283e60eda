"""Core entities for the Sleeper gateway."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class PlayerRecord:
    """A player from the bulk Sleeper player snapshot."""

    player_id: str
    full_name: str
    team: str = ""
    status: str = ""

    @classmethod
    def from_snapshot(cls, player_id: str, data: Dict[str, Any]) -> "PlayerRecord":
        """Build a record from one value of the id -> player snapshot mapping."""
        return cls(
            player_id=player_id,
            full_name=data.get("full_name") or "",
            team=data.get("team") or "",
            status=data.get("status") or "",
        )


@dataclass
class ScoreboardEntry:
    """One team's side of a matchup, with player ids resolved to names."""

    roster_id: Any
    user_name: str
    team_name: str
    starters: List[str]
    players: List[str]
    points: float
    players_points: Dict[str, float] = field(default_factory=dict)
    starters_points: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roster_id": self.roster_id,
            "user_name": self.user_name,
            "team_name": self.team_name,
            "starters": list(self.starters),
            "players": list(self.players),
            "points": self.points,
            "players_points": dict(self.players_points),
            "starters_points": dict(self.starters_points),
        }


@dataclass
class Matchup:
    """All scoreboard entries sharing a matchup id for a given week."""

    matchup_id: Any
    week: int
    entries: List[ScoreboardEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchup_id": self.matchup_id,
            "week": self.week,
            "entries": [entry.to_dict() for entry in self.entries],
        }
