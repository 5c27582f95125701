"""BeaconDetector - wires the monitoring components to the platform."""

import logging
from typing import Iterable, List, Optional, Sequence

from beacon_presence.core.bus import Channel, EventBus
from beacon_presence.core.config import DetectorConfig
from beacon_presence.core.identity import BeaconIdentity, region_identifier
from beacon_presence.core.registry import RoomRegistry
from beacon_presence.core.room import Room
from beacon_presence.core.store import StatusStore

from .adapter import LocationPlatform
from .base import LocationEventHandler
from .engine import TransitionResult
from .models import (
    AuthorizationStatus,
    MonitorSnapshot,
    PermissionState,
    RangedBeacon,
    Region,
)
from .monitor import RegionMonitor
from .notifications import TransitionObserver
from .permission import PermissionGate
from .transitions import TransitionDetector

logger = logging.getLogger(__name__)


class BeaconDetector(LocationEventHandler):
    """
    Proximity-beacon monitoring engine.

    Features:
    - Idempotent start/stop scanning per room
    - Enter/exit deduplication against a persisted status map
    - Live ranging telemetry published as snapshots
    - Permission gate published on every change

    Events Emitted:
    - bus.enters / bus.exits: room ids on genuine transitions
    - bus.permission: PermissionState when the gate changes
    - bus.telemetry: MonitorSnapshot after each ranging burst

    Note: All ingress methods must be called from one delivery context.
    Wrap a platform adapter's callbacks in a SerialDispatcher when the
    platform delivers them on several threads.
    """

    def __init__(
        self,
        platform: LocationPlatform,
        store: StatusStore,
        bus: Optional[EventBus] = None,
        config: Optional[DetectorConfig] = None,
        registry: Optional[RoomRegistry] = None,
        observers: Optional[Sequence[TransitionObserver]] = None,
    ) -> None:
        self._platform = platform
        self._store = store
        self._config = config or DetectorConfig()
        self.bus = bus or EventBus()
        self.registry = registry or RoomRegistry()

        self._monitor = RegionMonitor(platform, self._config)
        self._gate = PermissionGate(self.bus)
        self._transitions = TransitionDetector(
            store,
            self.bus,
            observers=observers,
            beacon_count=lambda: self._monitor.tracked_count,
        )

        self._platform.request_always_authorization()
        logger.info("BeaconDetector attached to location platform")

    # Published state

    @property
    def enters(self) -> Channel[int]:
        return self.bus.enters

    @property
    def exits(self) -> Channel[int]:
        return self.bus.exits

    @property
    def permission(self) -> PermissionState:
        return self._gate.state

    @property
    def permission_granted(self) -> Optional[bool]:
        return self._gate.granted

    @property
    def beacons(self) -> MonitorSnapshot:
        return self._monitor.snapshot()

    @property
    def config(self) -> DetectorConfig:
        return self._config

    def add_observer(self, observer: TransitionObserver) -> None:
        """Attach an optional observer of region callbacks."""
        self._transitions.add_observer(observer)

    # Scanning

    def start_scanning(self, room: Room) -> bool:
        """
        Start monitoring and ranging a room's beacon.

        Returns:
            True if scanning started, False if it was a no-op
        """
        return self._monitor.start_scanning(room)

    def stop_scanning(self, room: Room) -> bool:
        """
        Stop monitoring and ranging a room's beacon.

        Returns:
            True if scanning stopped, False if the room was not tracked
        """
        return self._monitor.stop_scanning(room)

    def start_scanning_room_id(self, room_id: int) -> bool:
        """
        Start scanning a room registered in the registry.

        Raises:
            ValueError: If the room is not registered
        """
        return self.start_scanning(self._registered(room_id))

    def stop_scanning_room_id(self, room_id: int) -> bool:
        """
        Stop scanning a room registered in the registry.

        Raises:
            ValueError: If the room is not registered
        """
        return self.stop_scanning(self._registered(room_id))

    def start_scanning_all(self) -> List[int]:
        """
        Start scanning every registered room.

        Returns:
            Ids of the rooms that were started by this call
        """
        return [room.id for room in self.registry.all_rooms() if self.start_scanning(room)]

    def stop_scanning_all(self) -> int:
        """
        Stop scanning every tracked room.

        Returns:
            Number of rooms released
        """
        return self._monitor.stop_all()

    def is_scanning(self, room: Room) -> bool:
        return self._monitor.is_tracking(room)

    def room_status(self, room_id: int) -> bool:
        """Persisted "entered" flag of a room (False if never entered)."""
        return self._store.get(region_identifier(room_id))

    def _registered(self, room_id: int) -> Room:
        room = self.registry.get_room(room_id)
        if room is None:
            raise ValueError(f"Room '{room_id}' not found")
        return room

    # LocationEventHandler implementation

    def on_authorization_changed(self, status: AuthorizationStatus) -> None:
        self._gate.on_authorization_changed(status, self._platform.is_monitoring_available())

    def on_region_entered(self, region: Region) -> None:
        self._handle_region(region, is_entered=True)

    def on_region_exited(self, region: Region) -> None:
        self._handle_region(region, is_entered=False)

    def on_ranging(
        self, beacons: Iterable[RangedBeacon], constraint: Optional[BeaconIdentity] = None
    ) -> None:
        beacons = list(beacons)
        updated = self._monitor.apply_ranging(beacons)
        logger.debug(
            f"Ranging burst: {len(beacons)} beacons, {updated} tracked "
            f"(monitored regions: {self._platform.monitored_region_count()})"
        )
        self.bus.telemetry.send(self._monitor.snapshot())

    def on_monitoring_failed(self, region: Optional[Region], error: Exception) -> None:
        identifier = region.identifier if region else None
        logger.error(f"Failed monitoring region {identifier}: {error}")

    def on_manager_failed(self, error: Exception) -> None:
        logger.error(f"Location manager failed: {error}")

    def _handle_region(self, region: Region, is_entered: bool) -> TransitionResult:
        result = self._transitions.handle(region, is_entered)
        logger.debug(f"Monitored region count: {self._platform.monitored_region_count()}")
        return result
