"""Data models for beacon monitoring.

Platform-facing values (regions, ranged beacons, authorization) are frozen.
MonitoredBeacon is the one mutable record: the Region Monitor owns it and
updates its telemetry in place. Consumers only ever see snapshots.
"""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from beacon_presence.core.identity import BeaconIdentity


class Proximity(Enum):
    """Relative distance to a ranged beacon."""

    UNKNOWN = "unknown"
    IMMEDIATE = "immediate"
    NEAR = "near"
    FAR = "far"


class AuthorizationStatus(Enum):
    """Location authorization reported by the platform."""

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"


class PermissionState(Enum):
    """Whether monitoring commands can take effect.

    UNKNOWN until the first authorization callback arrives.
    """

    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"


class RegionKind(Enum):
    """Kind of platform region."""

    BEACON = "beacon"
    CIRCULAR = "circular"


@dataclass(frozen=True)
class Region:
    """A platform region, identified by the string it was registered under."""

    identifier: str

    @property
    def kind(self) -> RegionKind | None:
        return None


@dataclass(frozen=True)
class BeaconRegion(Region):
    """Region around every beacon sharing a vendor UUID.

    Attributes:
        identifier: Decimal string of the room id.
        uuid: Vendor UUID the platform watches for.
    """

    uuid: UUID | None = None

    @property
    def kind(self) -> RegionKind:
        return RegionKind.BEACON


@dataclass(frozen=True)
class CircularRegion(Region):
    """Geographic region. Never registered by the detector."""

    latitude: float = 0.0
    longitude: float = 0.0
    radius: float = 0.0

    @property
    def kind(self) -> RegionKind:
        return RegionKind.CIRCULAR


@dataclass(frozen=True)
class RangedBeacon:
    """One beacon reported in a ranging burst.

    Attributes:
        uuid: Vendor UUID.
        major: Major value.
        minor: Minor value.
        proximity: Relative distance bucket.
        rssi: Received signal strength in dBm (0 when unknown).
        accuracy: Estimated distance in meters (negative when unknown).
    """

    uuid: UUID
    major: int
    minor: int
    proximity: Proximity = Proximity.UNKNOWN
    rssi: int = 0
    accuracy: float = -1.0

    @property
    def identity(self) -> BeaconIdentity:
        return BeaconIdentity.from_ranged(self)


@dataclass
class MonitoredBeacon:
    """Live telemetry for a beacon being scanned.

    Attributes:
        identity: Physical beacon identity.
        proximity: Last reported proximity.
        strength: Last reported signal strength.
        accuracy: Last reported accuracy.
        constraint: Identity constraint ranging was started with.
        room_id: Room the beacon belongs to.
    """

    identity: BeaconIdentity
    room_id: int
    constraint: BeaconIdentity
    proximity: Proximity = Proximity.UNKNOWN
    strength: int = 0
    accuracy: float = 0.0

    def snapshot(self) -> "BeaconSnapshot":
        return BeaconSnapshot(
            identity=self.identity,
            room_id=self.room_id,
            proximity=self.proximity,
            strength=self.strength,
            accuracy=self.accuracy,
        )


@dataclass(frozen=True)
class BeaconSnapshot:
    """Immutable copy of a MonitoredBeacon for consumers."""

    identity: BeaconIdentity
    room_id: int
    proximity: Proximity
    strength: int
    accuracy: float


@dataclass(frozen=True)
class MonitorSnapshot:
    """Immutable copy of the whole tracked set."""

    beacons: tuple[BeaconSnapshot, ...] = ()

    def for_room(self, room_id: int) -> BeaconSnapshot | None:
        for beacon in self.beacons:
            if beacon.room_id == room_id:
                return beacon
        return None

    def __len__(self) -> int:
        return len(self.beacons)


@dataclass(frozen=True)
class TransitionEvent:
    """A canonical occupancy transition for one room.

    Attributes:
        room_id: Room whose region boundary was crossed.
        region_identifier: Identifier the region was registered under.
        is_entered: True for enter, False for exit.
    """

    room_id: int
    region_identifier: str
    is_entered: bool
