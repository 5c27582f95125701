"""
Platform adapter interface for the location subsystem.

The adapter provides an abstraction layer between the beacon detector and
the host platform's location services. The integration layer provides a
concrete implementation.

Design Principle:
    Commands are fire-and-forget. The detector never waits for the platform
    to acknowledge a start/stop; failures come back later through the
    on_monitoring_failed / on_manager_failed ingress callbacks.
"""

from abc import ABC, abstractmethod
from typing import List, Set, Tuple

from beacon_presence.core.identity import BeaconIdentity

from .models import BeaconRegion, Region


class LocationPlatform(ABC):
    """
    Abstract interface for platform location operations.

    The host platform provides a concrete implementation that translates
    these calls to platform-specific operations.
    """

    @abstractmethod
    def request_always_authorization(self) -> None:
        """Ask the user for background ("always") location authorization."""
        pass

    @abstractmethod
    def start_monitoring(self, region: BeaconRegion) -> None:
        """
        Begin region monitoring (wakes the app on boundary crossings).

        Args:
            region: Region to monitor
        """
        pass

    @abstractmethod
    def stop_monitoring(self, region: BeaconRegion) -> None:
        """
        Stop monitoring a region.

        Args:
            region: Region previously passed to start_monitoring
        """
        pass

    @abstractmethod
    def start_ranging(self, constraint: BeaconIdentity) -> None:
        """
        Begin live ranging of beacons matching a constraint.

        Args:
            constraint: Beacon identity constraint
        """
        pass

    @abstractmethod
    def stop_ranging(self, constraint: BeaconIdentity) -> None:
        """
        Stop ranging beacons matching a constraint.

        Args:
            constraint: Constraint previously passed to start_ranging
        """
        pass

    @abstractmethod
    def is_monitoring_available(self) -> bool:
        """
        Check whether beacon region monitoring is supported on this device.

        Returns:
            True if beacon regions can be monitored
        """
        pass

    def monitored_region_count(self) -> int:
        """
        Number of regions the platform is currently monitoring.

        Returns:
            Region count (-1 if the platform does not report it)
        """
        return -1


class MockLocationPlatform(LocationPlatform):
    """
    Mock location platform for testing.

    Records every command and keeps the set of monitored regions and ranged
    constraints the way a real platform would.
    """

    def __init__(self, monitoring_available: bool = True) -> None:
        self.monitoring_available = monitoring_available
        self.authorization_requests = 0
        self._calls: List[Tuple[str, object]] = []
        self._monitored: Set[Region] = set()
        self._ranged: Set[BeaconIdentity] = set()

    def get_calls(self) -> List[Tuple[str, object]]:
        """Get recorded (command, argument) pairs."""
        return self._calls.copy()

    def clear_calls(self) -> None:
        """Clear recorded commands."""
        self._calls.clear()

    @property
    def monitored_regions(self) -> Set[Region]:
        return set(self._monitored)

    @property
    def ranged_constraints(self) -> Set[BeaconIdentity]:
        return set(self._ranged)

    # LocationPlatform implementation

    def request_always_authorization(self) -> None:
        self.authorization_requests += 1
        self._calls.append(("request_always_authorization", None))

    def start_monitoring(self, region: BeaconRegion) -> None:
        self._calls.append(("start_monitoring", region))
        self._monitored.add(region)

    def stop_monitoring(self, region: BeaconRegion) -> None:
        self._calls.append(("stop_monitoring", region))
        self._monitored.discard(region)

    def start_ranging(self, constraint: BeaconIdentity) -> None:
        self._calls.append(("start_ranging", constraint))
        self._ranged.add(constraint)

    def stop_ranging(self, constraint: BeaconIdentity) -> None:
        self._calls.append(("stop_ranging", constraint))
        self._ranged.discard(constraint)

    def is_monitoring_available(self) -> bool:
        return self.monitoring_available

    def monitored_region_count(self) -> int:
        return len(self._monitored)
