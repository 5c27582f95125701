"""Tests for the Event Bus channels."""

from beacon_presence.core.bus import Channel, EventBus


class TestChannel:
    """Test broadcast channel behavior."""

    def test_multiple_subscribers_receive(self):
        """Test every subscriber gets every value."""
        channel = Channel("enters")
        first, second = [], []

        channel.subscribe(first.append)
        channel.subscribe(second.append)
        channel.send(1)
        channel.send(2)

        assert first == [1, 2]
        assert second == [1, 2]
        assert channel.subscriber_count == 2

    def test_no_replay_for_late_subscriber(self):
        """Test values sent before subscribing are not delivered."""
        channel = Channel("exits")
        channel.send(1)

        received = []
        channel.subscribe(received.append)
        channel.send(2)

        assert received == [2]

    def test_send_without_subscribers(self):
        """Test sending with nobody listening is a no-op."""
        channel = Channel("enters")
        channel.send(1)
        assert channel.subscriber_count == 0

    def test_unsubscribe_callable(self):
        """Test the callable returned by subscribe removes the handler."""
        channel = Channel("enters")
        received = []

        unsubscribe = channel.subscribe(received.append)
        channel.send(1)
        unsubscribe()
        channel.send(2)

        assert received == [1]
        assert channel.subscriber_count == 0

    def test_unsubscribe_handler(self):
        """Test unsubscribing by handler."""
        channel = Channel("enters")
        received = []

        def handler(value):
            received.append(value)

        channel.subscribe(handler)
        channel.unsubscribe(handler)
        channel.send(1)

        assert received == []

    def test_failing_handler_does_not_stop_delivery(self, caplog):
        """Test one bad subscriber cannot break the others."""
        channel = Channel("enters")
        received = []

        def bad_handler(value):
            raise RuntimeError("boom")

        channel.subscribe(bad_handler)
        channel.subscribe(received.append)
        channel.send(5)

        assert received == [5]
        assert "boom" in caplog.text

    def test_handler_unsubscribing_during_send(self):
        """Test a handler may unsubscribe itself while being delivered to."""
        channel = Channel("enters")
        received = []
        unsubscribe = None

        def once(value):
            received.append(value)
            unsubscribe()

        unsubscribe = channel.subscribe(once)
        channel.send(1)
        channel.send(2)

        assert received == [1]


def test_event_bus_has_all_channels():
    """Test the bus exposes its four channels."""
    bus = EventBus()

    assert bus.enters.name == "enters"
    assert bus.exits.name == "exits"
    assert bus.permission.name == "permission"
    assert bus.telemetry.name == "telemetry"
