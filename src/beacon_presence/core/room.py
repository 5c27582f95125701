"""
Room dataclass.

A Room is a logical space that may have a physical beacon installed in it.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class Room:
    """
    A room that can be monitored for occupancy.

    Attributes:
        id: Unique integer identifier for this room
        name: Human-readable name
        uuid: Vendor UUID of the beacon installed in the room
        major: Beacon major value
        minor: Beacon minor value

    The beacon fields are optional. A room without all three has no
    physical beacon configured and is never monitored.
    """

    id: int
    name: str = ""
    uuid: Optional[UUID] = None
    major: Optional[int] = None
    minor: Optional[int] = None
