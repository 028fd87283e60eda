"""HTTP surface exposing the gateway queries as named tools."""

from .server import create_app

__all__ = ["create_app"]
