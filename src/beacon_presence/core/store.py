"""
Persisted region status storage.

The status map (region identifier -> "currently entered") is the only
durable state of the detector. The host picks where it lives: memory for
tests, a JSON document on disk for a real process.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

ROOM_STATUSES_KEY = "RoomStatuses"


class StatusStore(ABC):
    """
    Key-value store holding a single named status map.

    Implementations must return a copy from load() so callers can never
    mutate stored state without going through save().
    """

    @abstractmethod
    def load(self) -> Dict[str, bool]:
        """
        Read the current status map.

        Returns:
            Copy of the stored map (empty if nothing stored yet)
        """
        pass

    @abstractmethod
    def save(self, statuses: Mapping[str, bool]) -> None:
        """
        Replace the stored status map.

        Args:
            statuses: The complete new map
        """
        pass

    def get(self, identifier: str) -> bool:
        """Stored flag for a region identifier (False if absent)."""
        return self.load().get(identifier, False)


class InMemoryStatusStore(StatusStore):
    """Status store kept in process memory."""

    def __init__(self, initial: Optional[Mapping[str, bool]] = None) -> None:
        self._statuses: Dict[str, bool] = dict(initial or {})

    def load(self) -> Dict[str, bool]:
        return dict(self._statuses)

    def save(self, statuses: Mapping[str, bool]) -> None:
        self._statuses = dict(statuses)


class JsonFileStatusStore(StatusStore):
    """
    Status store backed by a JSON document on disk.

    The document may hold other named entries; only the entry under `key`
    is read and written. The map is read once at construction and written
    through on every save, replacing the file atomically.
    """

    def __init__(self, path: str | Path, key: str = ROOM_STATUSES_KEY) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the JSON document
            key: Name of the entry holding the status map
        """
        self.path = Path(path)
        self.key = key
        self._document: Dict[str, Any] = self._read_document()
        self._statuses: Dict[str, bool] = self._extract_statuses(self._document.get(key))

        logger.info(f"Loaded {len(self._statuses)} region statuses from {self.path}")

    @classmethod
    def from_config(cls, path: str | Path, config) -> "JsonFileStatusStore":
        """Open a store using the entry name configured in a DetectorConfig."""
        return cls(path, key=config.status_key)

    def load(self) -> Dict[str, bool]:
        return dict(self._statuses)

    def save(self, statuses: Mapping[str, bool]) -> None:
        document = dict(self._document)
        document[self.key] = dict(statuses)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

        self._document = document
        self._statuses = dict(statuses)
        logger.debug(f"Saved {len(self._statuses)} region statuses to {self.path}")

    def _read_document(self) -> Dict[str, Any]:
        """Read the whole document; an undecodable or unreadable file reads as empty."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except (ValueError, OSError) as e:
            logger.warning(f"Ignoring unreadable status file {self.path}: {e}")
            return {}

        if not isinstance(document, dict):
            logger.warning(f"Ignoring status file {self.path}: top level is not an object")
            return {}
        return document

    def _extract_statuses(self, raw: Any) -> Dict[str, bool]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Entry '{self.key}' in {self.path} is not an object, resetting")
            return {}

        statuses: Dict[str, bool] = {}
        for identifier, value in raw.items():
            if isinstance(value, bool):
                statuses[str(identifier)] = value
            else:
                logger.warning(f"Dropping non-boolean status for region {identifier}: {value!r}")
        return statuses
