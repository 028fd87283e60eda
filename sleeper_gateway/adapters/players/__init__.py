"""Bulk player snapshot and the id/name directory built from it."""

from .directory import PlayerDirectory

__all__ = ["PlayerDirectory"]
