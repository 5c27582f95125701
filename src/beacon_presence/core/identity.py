"""
Beacon identities and the room <-> region correlation key.

Everything here is a pure lookup or derivation with no state.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from beacon_presence.core.room import Room

UINT16_MAX = 0xFFFF


def _check_uint16(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= UINT16_MAX:
        raise ValueError(f"{name} must be between 0 and {UINT16_MAX}, got {value}")


@dataclass(frozen=True)
class BeaconIdentity:
    """
    Physical identity of a beacon: vendor UUID + major + minor.

    Also used as the identity constraint handed to the platform when
    ranging, so a constraint always matches exactly one beacon.
    """

    uuid: UUID
    major: int
    minor: int

    def __post_init__(self) -> None:
        if not isinstance(self.uuid, UUID):
            raise ValueError(f"uuid must be a UUID, got {self.uuid!r}")
        _check_uint16("major", self.major)
        _check_uint16("minor", self.minor)

    @property
    def constraint(self) -> "BeaconIdentity":
        """Identity constraint addressing exactly this beacon."""
        return self

    @classmethod
    def from_ranged(cls, beacon) -> "BeaconIdentity":
        """Derive the identity of a beacon reported in a ranging burst."""
        return cls(uuid=beacon.uuid, major=int(beacon.major), minor=int(beacon.minor))


def beacon_identity(room: Room) -> Optional[BeaconIdentity]:
    """
    Resolve the beacon identity of a room.

    Args:
        room: The room to resolve

    Returns:
        The BeaconIdentity, or None if the room has no beacon configured
    """
    if room.uuid is None or room.major is None or room.minor is None:
        return None
    return BeaconIdentity(uuid=room.uuid, major=room.major, minor=room.minor)


def region_identifier(room_id: int) -> str:
    """Identifier a room's region is registered under with the platform."""
    return str(room_id)


def parse_region_identifier(identifier: Optional[str]) -> Optional[int]:
    """
    Parse a region identifier back into a room id.

    Only the canonical form written by region_identifier is accepted: ASCII
    digits with an optional leading "-". A leading "+" or surrounding
    whitespace does not parse.

    Args:
        identifier: Region identifier reported by the platform

    Returns:
        The room id, or None if the identifier is not a decimal integer
    """
    if not identifier:
        return None
    text = identifier[1:] if identifier[0] == "-" else identifier
    if not text.isascii() or not text.isdigit():
        return None
    return int(identifier)
