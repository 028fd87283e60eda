"""Sleeper gateway: read-only query facade over the Sleeper fantasy API."""

__version__ = "1.0.0"
