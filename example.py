#!/usr/bin/env python3
"""
Quick example demonstrating beacon-presence basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

import tempfile
from pathlib import Path
from uuid import UUID

from beacon_presence import BeaconDetector, DetectorConfig, JsonFileStatusStore, Room, RoomRegistry
from beacon_presence.monitoring import (
    AuthorizationStatus,
    BeaconRegion,
    LocalNotificationObserver,
    MockLocationPlatform,
    Proximity,
    RangedBeacon,
)

VENDOR_UUID = UUID("e2c56db5-dffb-48d2-b060-d0f5a71096e0")

print("=" * 60)
print("beacon-presence Example")
print("=" * 60)

# 1. Rooms
print("\n1. Registering rooms...")
registry = RoomRegistry()
registry.register_room(Room(id=5, name="Meeting Room", uuid=VENDOR_UUID, major=1, minor=5))
registry.register_room(Room(id=6, name="Phone Booth", uuid=VENDOR_UUID, major=1, minor=6))
registry.register_room(Room(id=7, name="Kitchen"))  # no beacon installed
for room in registry.all_rooms():
    print(f"   ✓ {room.name} (id={room.id})")

# 2. Detector
print("\n2. Creating detector...")
state_dir = Path(tempfile.mkdtemp())
platform = MockLocationPlatform()
detector = BeaconDetector(
    platform,
    JsonFileStatusStore.from_config(state_dir / "statuses.json", DetectorConfig()),
    registry=registry,
)
detector.add_observer(LocalNotificationObserver(lambda n: print(f"   [alert] {n.title}: {n.body}")))
detector.enters.subscribe(lambda room_id: print(f"   → entered room {room_id}"))
detector.exits.subscribe(lambda room_id: print(f"   ← exited room {room_id}"))
print(f"   ✓ Status file: {state_dir / 'statuses.json'}")

# 3. Permission
print("\n3. Authorization callback...")
detector.on_authorization_changed(AuthorizationStatus.AUTHORIZED_ALWAYS)
print(f"   ✓ Permission granted: {detector.permission_granted}")

# 4. Scanning
print("\n4. Starting scans...")
started = detector.start_scanning_all()
print(f"   ✓ Scanning rooms: {started}")
print(f"   ✓ Platform monitoring {platform.monitored_region_count()} regions")

# 5. Noisy region callbacks
print("\n5. Delivering region callbacks (enter x3, exit x2)...")
for _ in range(3):
    detector.on_region_entered(BeaconRegion("5", VENDOR_UUID))
for _ in range(2):
    detector.on_region_exited(BeaconRegion("5", VENDOR_UUID))

# 6. Ranging
print("\n6. Ranging burst...")
detector.on_ranging([RangedBeacon(VENDOR_UUID, 1, 6, Proximity.NEAR, rssi=-61, accuracy=1.2)])
beacon = detector.beacons.for_room(6)
print(f"   ✓ Room 6: proximity={beacon.proximity.value}, rssi={beacon.strength}")

print("\n" + "=" * 60)
print("Example complete!")
print("=" * 60)
