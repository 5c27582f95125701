"""
Core components of the beacon-presence engine.

This package contains:
- room: Room dataclass
- identity: BeaconIdentity and region identifier helpers
- registry: RoomRegistry for pre-registered rooms
- bus: Event Bus channels
- store: persisted region status storage
- config: DetectorConfig and config helpers
"""

from beacon_presence.core.room import Room
from beacon_presence.core.identity import (
    BeaconIdentity,
    beacon_identity,
    parse_region_identifier,
    region_identifier,
)
from beacon_presence.core.registry import RoomRegistry
from beacon_presence.core.bus import Channel, EventBus
from beacon_presence.core.store import (
    ROOM_STATUSES_KEY,
    InMemoryStatusStore,
    JsonFileStatusStore,
    StatusStore,
)
from beacon_presence.core.config import DetectorConfig

__all__ = [
    "Room",
    "BeaconIdentity",
    "beacon_identity",
    "parse_region_identifier",
    "region_identifier",
    "RoomRegistry",
    "Channel",
    "EventBus",
    "ROOM_STATUSES_KEY",
    "InMemoryStatusStore",
    "JsonFileStatusStore",
    "StatusStore",
    "DetectorConfig",
]
