"""Tests for RegionMonitor."""

from uuid import UUID

import pytest

from beacon_presence import BeaconIdentity, DetectorConfig, Room
from beacon_presence.monitoring import (
    BeaconRegion,
    MockLocationPlatform,
    Proximity,
    RangedBeacon,
    RegionMonitor,
)

VENDOR_UUID = UUID("e2c56db5-dffb-48d2-b060-d0f5a71096e0")


def make_room(room_id: int, minor: int | None = None) -> Room:
    return Room(id=room_id, name=f"Room {room_id}", uuid=VENDOR_UUID, major=1, minor=minor or room_id)


@pytest.fixture
def platform():
    return MockLocationPlatform()


@pytest.fixture
def monitor(platform):
    return RegionMonitor(platform)


class TestStartScanning:
    """Test starting scans."""

    def test_start_issues_monitor_and_range(self, monitor, platform):
        """Test starting a room issues both platform commands in order."""
        room = make_room(5)

        assert monitor.start_scanning(room) is True

        identity = BeaconIdentity(uuid=VENDOR_UUID, major=1, minor=5)
        assert platform.get_calls() == [
            ("start_monitoring", BeaconRegion(identifier="5", uuid=VENDOR_UUID)),
            ("start_ranging", identity),
        ]
        assert monitor.tracked_count == 1
        assert monitor.is_tracking(room)

    def test_new_entry_has_zeroed_telemetry(self, monitor):
        """Test a freshly started beacon has no telemetry yet."""
        room = make_room(5)
        monitor.start_scanning(room)

        beacon = monitor.beacon_for(BeaconIdentity(uuid=VENDOR_UUID, major=1, minor=5))
        assert beacon.room_id == 5
        assert beacon.proximity is Proximity.UNKNOWN
        assert beacon.strength == 0
        assert beacon.accuracy == 0.0

    def test_start_is_idempotent(self, monitor, platform):
        """Test starting twice leaves one entry and one pair of commands."""
        room = make_room(5)

        assert monitor.start_scanning(room) is True
        assert monitor.start_scanning(room) is False

        assert monitor.tracked_count == 1
        assert len(platform.get_calls()) == 2

    def test_start_without_identity_is_noop(self, monitor, platform):
        """Test a room without a beacon is never scanned."""
        assert monitor.start_scanning(Room(id=5, uuid=VENDOR_UUID, major=1)) is False

        assert monitor.tracked_count == 0
        assert platform.get_calls() == []

    def test_region_identifier_is_room_id(self, monitor, platform):
        """Test the monitored region is registered under the decimal room id."""
        monitor.start_scanning(make_room(1234, minor=9))

        (region,) = platform.monitored_regions
        assert region.identifier == "1234"

    def test_respects_region_limit(self, platform, caplog):
        """Test scanning stops at the configured limit."""
        monitor = RegionMonitor(platform, DetectorConfig(max_regions=2))

        assert monitor.start_scanning(make_room(1))
        assert monitor.start_scanning(make_room(2))
        assert monitor.start_scanning(make_room(3)) is False

        assert monitor.tracked_count == 2
        assert platform.monitored_region_count() == 2
        assert "Not scanning room 3" in caplog.text

    def test_limit_frees_after_stop(self, platform):
        """Test stopping a room frees a slot."""
        monitor = RegionMonitor(platform, DetectorConfig(max_regions=1))
        monitor.start_scanning(make_room(1))
        monitor.stop_scanning(make_room(1))

        assert monitor.start_scanning(make_room(2)) is True


class TestStopScanning:
    """Test stopping scans."""

    def test_stop_issues_matching_commands(self, monitor, platform):
        """Test stop mirrors start."""
        room = make_room(5)
        monitor.start_scanning(room)
        platform.clear_calls()

        assert monitor.stop_scanning(room) is True

        identity = BeaconIdentity(uuid=VENDOR_UUID, major=1, minor=5)
        assert platform.get_calls() == [
            ("stop_monitoring", BeaconRegion(identifier="5", uuid=VENDOR_UUID)),
            ("stop_ranging", identity),
        ]
        assert monitor.tracked_count == 0
        assert platform.monitored_regions == set()
        assert platform.ranged_constraints == set()

    def test_stop_untracked_is_noop(self, monitor, platform):
        """Test stopping a room that was never started does nothing."""
        assert monitor.stop_scanning(make_room(5)) is False
        assert monitor.stop_scanning(Room(id=6)) is False

        assert platform.get_calls() == []
        assert monitor.tracked_count == 0

    def test_stop_twice(self, monitor, platform):
        """Test a second stop is a no-op."""
        room = make_room(5)
        monitor.start_scanning(room)

        assert monitor.stop_scanning(room) is True
        assert monitor.stop_scanning(room) is False
        assert len(platform.get_calls()) == 4

    def test_restart_after_stop(self, monitor, platform):
        """Test a stopped room can be started again."""
        room = make_room(5)
        monitor.start_scanning(room)
        monitor.stop_scanning(room)

        assert monitor.start_scanning(room) is True
        assert monitor.tracked_count == 1

    def test_stop_all(self, monitor, platform):
        """Test releasing every room at once."""
        for room_id in (1, 2, 3):
            monitor.start_scanning(make_room(room_id))

        assert monitor.stop_all() == 3
        assert monitor.tracked_count == 0
        assert platform.monitored_region_count() == 0


class TestReconfiguredRoom:
    """Test rooms whose beacon fields change while scanning."""

    def test_changed_beacon_replaces_entry(self, monitor, platform):
        """Test restarting a room with a new beacon releases the old one."""
        room = make_room(5)
        monitor.start_scanning(room)

        room.minor = 6
        assert monitor.start_scanning(room) is True

        assert monitor.tracked_count == 1
        assert monitor.tracked_room_ids() == [5]
        assert platform.ranged_constraints == {BeaconIdentity(uuid=VENDOR_UUID, major=1, minor=6)}
        assert platform.monitored_regions == {BeaconRegion(identifier="5", uuid=VENDOR_UUID)}

    def test_stop_after_change_releases_everything(self, monitor, platform):
        """Test a stop after reconfiguring leaves nothing on the platform."""
        room = make_room(5)
        monitor.start_scanning(room)
        room.minor = 6
        monitor.start_scanning(room)

        assert monitor.stop_scanning(room) is True

        assert monitor.tracked_count == 0
        assert platform.monitored_regions == set()
        assert platform.ranged_constraints == set()

    def test_stop_after_beacon_removed(self, monitor, platform):
        """Test a room stripped of its beacon can still be stopped."""
        room = make_room(5)
        monitor.start_scanning(room)

        room.uuid = None
        assert monitor.is_tracking(room)
        assert monitor.stop_scanning(room) is True
        assert platform.ranged_constraints == set()

    def test_beacon_shared_with_other_room_refused(self, monitor, platform, caplog):
        """Test a beacon already tracked for another room is not started twice."""
        monitor.start_scanning(make_room(5))

        assert monitor.start_scanning(make_room(6, minor=5)) is False
        assert monitor.tracked_room_ids() == [5]
        assert "beacon already tracked for room 5" in caplog.text


class TestRanging:
    """Test ranging telemetry updates."""

    def test_updates_tracked_beacon(self, monitor):
        """Test a ranging burst overwrites telemetry in place."""
        monitor.start_scanning(make_room(5))

        updated = monitor.apply_ranging(
            [RangedBeacon(VENDOR_UUID, 1, 5, Proximity.NEAR, rssi=-60, accuracy=1.5)]
        )

        assert updated == 1
        snapshot = monitor.snapshot().for_room(5)
        assert snapshot.proximity is Proximity.NEAR
        assert snapshot.strength == -60
        assert snapshot.accuracy == 1.5

    def test_unknown_beacon_ignored(self, monitor):
        """Test beacons that were never started are ignored."""
        monitor.start_scanning(make_room(5))
        before = monitor.snapshot()

        updated = monitor.apply_ranging(
            [RangedBeacon(VENDOR_UUID, 1, 99, Proximity.IMMEDIATE, rssi=-40, accuracy=0.2)]
        )

        assert updated == 0
        assert monitor.snapshot() == before
        assert monitor.tracked_count == 1

    def test_ranging_with_nothing_tracked(self, monitor):
        """Test ranging before any scan does not crash."""
        assert monitor.apply_ranging([RangedBeacon(VENDOR_UUID, 1, 1)]) == 0
        assert len(monitor.snapshot()) == 0

    def test_out_of_range_values_skipped(self, monitor):
        """Test a beacon with major/minor outside 16 bits does not abort the burst."""
        monitor.start_scanning(make_room(5))

        updated = monitor.apply_ranging(
            [
                RangedBeacon(VENDOR_UUID, 70000, 1, Proximity.NEAR, rssi=-50),
                RangedBeacon(VENDOR_UUID, 1, -1, Proximity.NEAR, rssi=-50),
                RangedBeacon(VENDOR_UUID, 1, 5, Proximity.FAR, rssi=-80, accuracy=6.0),
            ]
        )

        assert updated == 1
        assert monitor.snapshot().for_room(5).proximity is Proximity.FAR

    def test_mixed_burst(self, monitor):
        """Test only tracked beacons in a burst are updated."""
        monitor.start_scanning(make_room(1))
        monitor.start_scanning(make_room(2))

        updated = monitor.apply_ranging(
            [
                RangedBeacon(VENDOR_UUID, 1, 1, Proximity.FAR, rssi=-90, accuracy=8.0),
                RangedBeacon(VENDOR_UUID, 1, 42, Proximity.NEAR, rssi=-50, accuracy=1.0),
                RangedBeacon(VENDOR_UUID, 1, 2, Proximity.IMMEDIATE, rssi=-35, accuracy=0.1),
            ]
        )

        assert updated == 2
        snapshot = monitor.snapshot()
        assert snapshot.for_room(1).proximity is Proximity.FAR
        assert snapshot.for_room(2).proximity is Proximity.IMMEDIATE
        assert snapshot.for_room(42) is None

    def test_snapshot_is_detached(self, monitor):
        """Test snapshots do not change when telemetry changes later."""
        monitor.start_scanning(make_room(5))
        snapshot = monitor.snapshot()

        monitor.apply_ranging([RangedBeacon(VENDOR_UUID, 1, 5, Proximity.NEAR, rssi=-60)])

        assert snapshot.for_room(5).proximity is Proximity.UNKNOWN
