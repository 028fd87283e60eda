"""Application layer: query operations and scoreboard aggregation."""

from .queries import QueryService
from .scoreboard import build_scoreboard

__all__ = ["QueryService", "build_scoreboard"]
