"""Tests for the event bus."""

from khadas_temp.events import EventBus, event_bus


class TestEventBus:
    """Tests for EventBus."""

    def test_singleton(self) -> None:
        assert EventBus() is event_bus

    def test_publish(self) -> None:
        received = []
        event_bus.subscribe("test", received.append)
        event_bus.publish("test", 42)
        assert received == [42]

    def test_publish_without_subscribers(self) -> None:
        event_bus.publish("nobody", 1)

    def test_unsubscribe(self) -> None:
        received = []
        event_bus.subscribe("test", received.append)
        assert event_bus.unsubscribe("test", received.append) is True
        assert event_bus.unsubscribe("test", received.append) is False
        event_bus.publish("test", 1)
        assert received == []

    def test_unsubscribe_during_publish(self) -> None:
        received = []

        def once(payload):
            received.append(payload)
            event_bus.unsubscribe("test", once)

        event_bus.subscribe("test", once)
        event_bus.publish("test", 1)
        event_bus.publish("test", 2)
        assert received == [1]

    def test_reset(self) -> None:
        event_bus.subscribe("test", print)
        event_bus.reset()
        assert event_bus.subscriber_count("test") == 0

    def test_subscriber_count(self) -> None:
        assert event_bus.subscriber_count("test") == 0
        event_bus.subscribe("test", print)
        event_bus.subscribe("test", repr)
        assert event_bus.subscriber_count("test") == 2
        event_bus.unsubscribe("test", print)
        assert event_bus.subscriber_count("test") == 1
