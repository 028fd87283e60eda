"""Sleeper-shaped test data and helpers."""

import json


PLAYERS = {
    "4984": {"full_name": "Josh Allen", "team": "BUF", "status": "Active", "position": "QB"},
    "6794": {"full_name": "Justin Jefferson", "team": "MIN", "status": "Active", "position": "WR"},
    "4034": {"full_name": "Christian McCaffrey", "team": "SF", "status": "Active", "position": "RB"},
    "BUF": {"team": "BUF", "status": None, "position": "DEF"},
}

USERS = [
    {"user_id": "u1", "display_name": "gridiron_greg", "metadata": {"team_name": "Greg's Gunslingers"}},
    {"user_id": "u2", "display_name": "blitz_betty", "metadata": {}},
]

ROSTERS = [
    {"roster_id": 1, "owner_id": "u1", "starters": ["4984"], "players": ["4984", "6794"]},
    {"roster_id": 2, "owner_id": "u2", "starters": ["4034"], "players": ["4034"]},
]

MATCHUPS_WEEK_3 = [
    {
        "roster_id": 1,
        "matchup_id": 7,
        "starters": ["4984"],
        "players": ["4984", "6794"],
        "points": 50.0,
        "players_points": {"4984": 30.0, "6794": 20.0},
    },
    {
        "roster_id": 2,
        "matchup_id": 7,
        "starters": ["4034"],
        "players": ["4034"],
        "points": 40.0,
        "players_points": {"4034": 40.0},
    },
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def write_snapshot(path, players=PLAYERS):
    """Write a bulk player snapshot file and return its path."""
    path.write_text(json.dumps(players))
    return path
