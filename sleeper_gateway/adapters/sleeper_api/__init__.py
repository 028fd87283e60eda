"""Sleeper API adapter package.

This package contains the Sleeper API client adapter for the gateway.
"""

from .client import (
    SleeperAPIClient,
    SleeperAPIError,
    UpstreamError,
    TransportError,
)

__all__ = [
    # Client
    "SleeperAPIClient",
    # Exceptions
    "SleeperAPIError",
    "UpstreamError",
    "TransportError",
]
