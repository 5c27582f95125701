"""Tests for LocalNotificationObserver."""

import pytest

from beacon_presence import DetectorConfig
from beacon_presence.monitoring import LocalNotification, LocalNotificationObserver


@pytest.fixture
def delivered():
    return []


def test_enter_notification(delivered):
    """Test an enter produces a titled notification with sound."""
    observer = LocalNotificationObserver(delivered.append)

    observer.on_region_callback(5, is_entered=True, emitted=True, beacon_count=3)

    (notification,) = delivered
    assert isinstance(notification, LocalNotification)
    assert notification.title == "CoThings Room: 5"
    assert notification.body == "Action:Enter beacon count:3"
    assert notification.sound is True
    assert notification.identifier.startswith("testNotification")
    assert 200 <= int(notification.identifier[len("testNotification"):]) <= 300


def test_exit_notification(delivered):
    observer = LocalNotificationObserver(delivered.append, app_name="Office")

    observer.on_region_callback(8, is_entered=False, emitted=False, beacon_count=0)

    assert delivered[0].title == "Office Room: 8"
    assert delivered[0].body == "Action:Exit beacon count:0"


def test_toggles(delivered):
    """Test notify_on_enter / notify_on_exit / notify_with_sound are honored."""
    config = DetectorConfig(notify_on_enter=False, notify_with_sound=False)
    observer = LocalNotificationObserver(delivered.append, config)

    observer.on_region_callback(1, is_entered=True, emitted=True, beacon_count=1)
    observer.on_region_callback(1, is_entered=False, emitted=True, beacon_count=1)

    assert len(delivered) == 1
    assert delivered[0].body.startswith("Action:Exit")
    assert delivered[0].sound is False


def test_exit_disabled(delivered):
    observer = LocalNotificationObserver(delivered.append, DetectorConfig(notify_on_exit=False))

    observer.on_region_callback(1, is_entered=False, emitted=True, beacon_count=1)

    assert delivered == []


def test_delivery_failure_is_logged(caplog):
    """Test a failing notifier never raises."""

    def notifier(notification):
        raise ConnectionError("notification center unavailable")

    observer = LocalNotificationObserver(notifier)
    observer.on_region_callback(1, is_entered=True, emitted=True, beacon_count=1)

    assert "notification center unavailable" in caplog.text
