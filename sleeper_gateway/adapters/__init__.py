"""Adapters layer for the Sleeper gateway.

This layer contains the adapters that translate between the core domain
and external systems (the Sleeper API, the player snapshot file, HTTP callers).
"""
