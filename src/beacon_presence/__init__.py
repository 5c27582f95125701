"""
beacon-presence: room occupancy from proximity beacons.

This library provides:
- Beacon identity registry for pre-registered rooms
- Region monitoring and ranging orchestration
- Enter/exit deduplication against persisted state
- Broadcast channels for occupancy and permission changes
"""

from beacon_presence.core.room import Room
from beacon_presence.core.identity import BeaconIdentity, beacon_identity
from beacon_presence.core.registry import RoomRegistry
from beacon_presence.core.bus import Channel, EventBus
from beacon_presence.core.store import InMemoryStatusStore, JsonFileStatusStore, StatusStore
from beacon_presence.core.config import DetectorConfig
from beacon_presence.monitoring import BeaconDetector

__version__ = "0.1.0"

__all__ = [
    "Room",
    "BeaconIdentity",
    "beacon_identity",
    "RoomRegistry",
    "Channel",
    "EventBus",
    "InMemoryStatusStore",
    "JsonFileStatusStore",
    "StatusStore",
    "DetectorConfig",
    "BeaconDetector",
]
