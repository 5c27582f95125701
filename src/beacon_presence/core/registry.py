"""
RoomRegistry for pre-registered rooms.

The registry owns the set of known rooms, not the monitoring behavior.
"""

from typing import Dict, List, Optional
import logging

from beacon_presence.core.identity import BeaconIdentity, beacon_identity
from beacon_presence.core.room import Room

logger = logging.getLogger(__name__)


class RoomRegistry:
    """
    Holds the rooms the host application knows about.

    Responsibilities:
    - Store rooms by id
    - Resolve a room id to its beacon identity
    - Resolve a beacon identity back to its room

    Rooms are registered explicitly; nothing is discovered.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._rooms: Dict[int, Room] = {}

    def register_room(self, room: Room) -> Room:
        """
        Register a room.

        Args:
            room: The room to register

        Returns:
            The registered Room

        Raises:
            ValueError: If a room with the same id is already registered
        """
        if room.id in self._rooms:
            raise ValueError(f"Room with id '{room.id}' already exists")

        self._rooms[room.id] = room
        logger.info(f"Registered room: {room.id} ({room.name})")

        return room

    def unregister_room(self, room_id: int) -> Room:
        """
        Remove a room from the registry.

        Args:
            room_id: The room id

        Returns:
            The removed Room

        Raises:
            ValueError: If the room is not registered
        """
        room = self._rooms.pop(room_id, None)
        if room is None:
            raise ValueError(f"Room '{room_id}' not found")

        logger.info(f"Unregistered room: {room_id}")
        return room

    def get_room(self, room_id: int) -> Optional[Room]:
        """
        Get a room by id.

        Args:
            room_id: The room id

        Returns:
            The Room or None if not registered
        """
        return self._rooms.get(room_id)

    def all_rooms(self) -> List[Room]:
        """Get all registered rooms."""
        return list(self._rooms.values())

    def identity_for(self, room_id: int) -> Optional[BeaconIdentity]:
        """
        Get the beacon identity of a registered room.

        Returns:
            The BeaconIdentity, or None if the room is unknown or has no beacon
        """
        room = self.get_room(room_id)
        if room is None:
            return None
        return beacon_identity(room)

    def room_for_identity(self, identity: BeaconIdentity) -> Optional[Room]:
        """Find the registered room whose beacon matches an identity."""
        for room in self._rooms.values():
            if beacon_identity(room) == identity:
                return room
        return None
