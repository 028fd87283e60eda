"""Upstream response cache."""

from .response_cache import ResponseCache

__all__ = ["ResponseCache"]
