#!/usr/bin/env python3
"""
Simple event system for communication between components.

The settings store announces changes and the controller announces fresh
display states through the bus. Events are identified by a string name
and can carry an arbitrary payload.
"""

import threading
from typing import Dict, List, Callable, Any

SETTINGS_CHANGED = "settings_changed"
DISPLAY_CHANGED = "display_changed"


class EventBus:
    """
    Event bus that allows components to publish and subscribe to events.

    Subscriptions may be added or removed from any thread. Callbacks run
    on the publishing thread.
    """
    _instance = None

    def __new__(cls):
        """Singleton pattern to ensure only one event bus exists."""
        if cls._instance is None:
            cls._instance = super(EventBus, cls).__new__(cls)
            cls._instance._subscribers = {}
            cls._instance._lock = threading.Lock()
        return cls._instance

    def subscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """
        Subscribe to an event.

        Args:
            event_name: Name of the event to subscribe to
            callback: Function to call when the event is published
        """
        with self._lock:
            self._subscribers.setdefault(event_name, []).append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[Any], None]) -> bool:
        """
        Unsubscribe from an event.

        Returns False when the callback was not subscribed, so removing
        twice is harmless.
        """
        with self._lock:
            callbacks = self._subscribers.get(event_name, [])
            if callback not in callbacks:
                return False
            callbacks.remove(callback)
            return True

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Publish an event with optional payload.

        Args:
            event_name: Name of the event to publish
            payload: Data to send with the event
        """
        with self._lock:
            callbacks = list(self._subscribers.get(event_name, []))
        for callback in callbacks:
            callback(payload)

    def subscriber_count(self, event_name: str) -> int:
        """Number of callbacks currently subscribed to event_name."""
        with self._lock:
            return len(self._subscribers.get(event_name, []))

    def reset(self) -> None:
        """Drop every subscription."""
        with self._lock:
            self._subscribers: Dict[str, List[Callable[[Any], None]]] = {}


# Global event bus instance
event_bus = EventBus()
