"""Core domain layer: entities and the error taxonomy."""

from .entities import Matchup, PlayerRecord, ScoreboardEntry
from .errors import GatewayError, NotFoundError, ValidationError

__all__ = [
    "Matchup",
    "PlayerRecord",
    "ScoreboardEntry",
    "GatewayError",
    "NotFoundError",
    "ValidationError",
]
