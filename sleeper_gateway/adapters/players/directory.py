"""Bidirectional player id <-> full name directory."""

import json
import os
import tempfile
from pathlib import Path
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Union

import structlog

from sleeper_gateway.adapters.sleeper_api.client import SleeperAPIError
from sleeper_gateway.core.entities import PlayerRecord
from sleeper_gateway.core.errors import NotFoundError

logger = structlog.get_logger()

SnapshotFetcher = Callable[[], Awaitable[bytes]]


class PlayerDirectory:
    """Read-only index between Sleeper player ids and full names.

    Both mappings are built once, in the constructor, and exposed as read-only
    views. When two records share a full name, the name maps to the id of the
    record that came last in iteration order. Records without a full name are
    not indexed.
    """

    def __init__(self, records: Iterable[PlayerRecord] = ()):
        name_to_id: Dict[str, str] = {}
        id_to_name: Dict[str, str] = {}

        for record in records:
            if not record.full_name:
                continue
            name_to_id[record.full_name] = record.player_id
            id_to_name[record.player_id] = record.full_name

        self._name_to_id = MappingProxyType(name_to_id)
        self._id_to_name = MappingProxyType(id_to_name)

    def __len__(self) -> int:
        return len(self._id_to_name)

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any]) -> "PlayerDirectory":
        """Build a directory from the decoded id -> player mapping."""
        if not isinstance(snapshot, dict):
            raise ValueError(f"Player snapshot must be a JSON object, got {type(snapshot).__name__}")

        records = (
            PlayerRecord.from_snapshot(str(player_id), data)
            for player_id, data in snapshot.items()
            if isinstance(data, dict)
        )
        return cls(records)

    @classmethod
    async def load(
        cls,
        snapshot_path: Union[str, Path],
        fetch_snapshot: Optional[SnapshotFetcher] = None,
    ) -> "PlayerDirectory":
        """Load the directory from the local snapshot, downloading it if absent.

        A downloaded snapshot is written to ``snapshot_path`` byte for byte
        before it is parsed. Download, read and parse failures are logged and
        produce an empty directory instead of raising.
        """
        path = Path(snapshot_path)

        try:
            if path.exists():
                logger.info("Reading player snapshot", path=str(path))
                raw = path.read_bytes()
            elif fetch_snapshot is None:
                logger.error("Player snapshot missing and no source configured", path=str(path))
                return cls()
            else:
                raw = await fetch_snapshot()
                write_atomically(path, raw)
                logger.info("Persisted player snapshot", path=str(path), size=len(raw))

            directory = cls.from_snapshot(json.loads(raw))
        except (SleeperAPIError, OSError, ValueError) as e:
            logger.error(
                "Failed to load player directory, continuing with an empty directory",
                path=str(path),
                error=str(e),
            )
            return cls()

        logger.info("Player directory loaded", players=len(directory))
        return directory

    def lookup_name(self, player_id: str) -> Optional[str]:
        return self._id_to_name.get(player_id)

    def lookup_id(self, name: str) -> Optional[str]:
        return self._name_to_id.get(name)

    def resolve_name(self, player_id: str) -> str:
        """Return the full name for a player id.

        Raises:
            NotFoundError: If the id is not in the directory
        """
        name = self.lookup_name(player_id)
        if name is None:
            raise NotFoundError(f"Could not find player with id {player_id}")
        return name

    def resolve_id(self, name: str) -> str:
        """Return the player id for an exact full name.

        Raises:
            NotFoundError: If no player has that full name
        """
        player_id = self.lookup_id(name)
        if player_id is None:
            raise NotFoundError(f"Could not find player {name}")
        return player_id

    def display_name(self, player_id: str) -> str:
        """Return the full name for a player id, or the id itself when unknown."""
        name = self.lookup_name(player_id)
        return name if name is not None else player_id


def write_atomically(path: Path, data: bytes) -> None:
    """Write data to path so that readers never observe a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
