"""RegionMonitor - owns the set of beacons being scanned."""

import logging
from typing import Dict, Iterable, List, Optional

from beacon_presence.core.config import DetectorConfig
from beacon_presence.core.identity import BeaconIdentity, beacon_identity, region_identifier
from beacon_presence.core.room import Room

from .adapter import LocationPlatform
from .models import BeaconRegion, MonitoredBeacon, MonitorSnapshot, RangedBeacon

logger = logging.getLogger(__name__)


class RegionMonitor:
    """
    Starts and stops platform monitoring/ranging per room.

    Every room is monitored twice over:
    - region monitoring, so the platform wakes us on boundary crossings
    - ranging, for foreground telemetry (proximity, signal, accuracy)

    start_scanning and stop_scanning are symmetric and idempotent. A room
    has at most one tracked entry, and every start is paired with exactly
    one stop before the entry is released.
    """

    def __init__(self, platform: LocationPlatform, config: Optional[DetectorConfig] = None) -> None:
        self._platform = platform
        self._config = config or DetectorConfig()
        self._beacons: Dict[BeaconIdentity, MonitoredBeacon] = {}
        self._room_index: Dict[int, BeaconIdentity] = {}

    @property
    def tracked_count(self) -> int:
        return len(self._beacons)

    def start_scanning(self, room: Room) -> bool:
        """
        Start monitoring and ranging the beacon of a room.

        A room whose beacon changed since it was started is released first
        and restarted with the new beacon.

        Args:
            room: Room to scan

        Returns:
            True if scanning was started, False if it was a no-op
        """
        identity = beacon_identity(room)
        if identity is None:
            logger.debug(f"Room {room.id} has no beacon configured, not scanning")
            return False

        current = self._room_index.get(room.id)
        if current == identity:
            return False

        if identity in self._beacons:
            logger.warning(
                f"Not scanning room {room.id}: beacon already tracked for room "
                f"{self._beacons[identity].room_id}"
            )
            return False

        if current is not None:
            logger.info(f"Beacon of room {room.id} changed, restarting scan")
            self._release(self._beacons[current])

        if len(self._beacons) >= self._config.max_regions:
            logger.warning(
                f"Not scanning room {room.id}: already monitoring "
                f"{len(self._beacons)}/{self._config.max_regions} regions"
            )
            return False

        constraint = identity.constraint
        region = BeaconRegion(identifier=region_identifier(room.id), uuid=identity.uuid)

        self._platform.start_monitoring(region)
        self._platform.start_ranging(constraint)

        self._beacons[identity] = MonitoredBeacon(
            identity=identity,
            room_id=room.id,
            constraint=constraint,
        )
        self._room_index[room.id] = identity
        logger.info(f"Started scanning room {room.id} ({identity.major}/{identity.minor})")

        return True

    def stop_scanning(self, room: Room) -> bool:
        """
        Stop monitoring and ranging the beacon of a room.

        The entry is found by room id, so a room whose beacon fields were
        edited or cleared after it was started still releases what it started.

        Args:
            room: Room to stop scanning

        Returns:
            True if scanning was stopped, False if the room was not tracked
        """
        identity = self._room_index.get(room.id)
        if identity is None:
            return False

        self._release(self._beacons[identity])
        return True

    def stop_all(self) -> int:
        """
        Stop scanning every tracked room.

        Returns:
            Number of rooms released
        """
        beacons = list(self._beacons.values())
        for beacon in beacons:
            self._release(beacon)
        return len(beacons)

    def _release(self, beacon: MonitoredBeacon) -> None:
        region = BeaconRegion(
            identifier=region_identifier(beacon.room_id), uuid=beacon.identity.uuid
        )
        self._platform.stop_monitoring(region)
        self._platform.stop_ranging(beacon.constraint)

        del self._beacons[beacon.identity]
        del self._room_index[beacon.room_id]
        logger.info(f"Stopped scanning room {beacon.room_id}")

    def apply_ranging(self, beacons: Iterable[RangedBeacon]) -> int:
        """
        Fold a ranging burst into the tracked telemetry.

        Beacons that were never started are ignored, as are beacons whose
        major/minor do not fit in 16 bits.

        Args:
            beacons: Beacons reported by the platform

        Returns:
            Number of tracked entries updated
        """
        updated = 0
        for ranged in beacons:
            try:
                identity = ranged.identity
            except ValueError as e:
                logger.debug(f"Skipping ranged beacon: {e}")
                continue

            tracked = self._beacons.get(identity)
            if tracked is None:
                continue

            tracked.proximity = ranged.proximity
            tracked.strength = ranged.rssi
            tracked.accuracy = ranged.accuracy
            updated += 1

        return updated

    def is_tracking(self, room: Room) -> bool:
        return room.id in self._room_index

    def beacon_for(self, identity: BeaconIdentity) -> Optional[MonitoredBeacon]:
        return self._beacons.get(identity)

    def tracked_room_ids(self) -> List[int]:
        return [beacon.room_id for beacon in self._beacons.values()]

    def snapshot(self) -> MonitorSnapshot:
        """Immutable copy of the tracked set for consumers."""
        return MonitorSnapshot(beacons=tuple(b.snapshot() for b in self._beacons.values()))
