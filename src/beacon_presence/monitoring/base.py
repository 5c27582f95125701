"""
Ingress interface for platform location callbacks.

The platform adapter calls exactly one method per callback kind. All calls
must arrive on a single delivery context (see SerialDispatcher).
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from beacon_presence.core.identity import BeaconIdentity

from .models import AuthorizationStatus, RangedBeacon, Region


class LocationEventHandler(ABC):
    """
    Receiver for platform location callbacks.

    A handler:
    - Reacts to authorization changes
    - Turns region boundary crossings into occupancy transitions
    - Folds ranging bursts into live telemetry
    - Reports platform failures
    """

    @abstractmethod
    def on_authorization_changed(self, status: AuthorizationStatus) -> None:
        """
        React to a change in location authorization.

        Args:
            status: New authorization status
        """
        pass

    @abstractmethod
    def on_region_entered(self, region: Region) -> None:
        """
        React to the device entering a monitored region.

        Args:
            region: The region whose boundary was crossed
        """
        pass

    @abstractmethod
    def on_region_exited(self, region: Region) -> None:
        """
        React to the device leaving a monitored region.

        Args:
            region: The region whose boundary was crossed
        """
        pass

    @abstractmethod
    def on_ranging(
        self, beacons: Iterable[RangedBeacon], constraint: Optional[BeaconIdentity] = None
    ) -> None:
        """
        React to a ranging burst.

        Args:
            beacons: Beacons reported in the burst
            constraint: Constraint the burst satisfies, if the platform reports it
        """
        pass

    def on_monitoring_failed(self, region: Optional[Region], error: Exception) -> None:
        """
        React to the platform failing to monitor a region.

        Default implementation ignores the failure.
        """
        pass

    def on_manager_failed(self, error: Exception) -> None:
        """
        React to a general location subsystem failure.

        Default implementation ignores the failure.
        """
        pass
