#!/usr/bin/env python3
"""
User settings store.

Holds the two user-facing settings, `show-mode` and `show-icons`, and
notifies listeners whenever one of them changes. Notifications carry no
delta; listeners re-read the whole configuration. The store can persist
itself to a YAML file.
"""

import logging
import os
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional

import yaml

from .events import SETTINGS_CHANGED, EventBus, event_bus

SHOW_MODE = "show-mode"
SHOW_ICONS = "show-icons"


class DisplayMode(str, Enum):
    """Which logical sensors the panel shows."""

    SOC_ONLY = "soc"
    DDR_ONLY = "ddr"
    BOTH = "both"

    @property
    def roles(self) -> FrozenSet[str]:
        """Logical sensor names shown in this mode."""
        if self is DisplayMode.SOC_ONLY:
            return frozenset({"soc"})
        if self is DisplayMode.DDR_ONLY:
            return frozenset({"ddr"})
        return frozenset({"soc", "ddr"})


@dataclass(frozen=True)
class DisplayConfig:
    """Snapshot of the display settings."""
    mode: DisplayMode = DisplayMode.BOTH
    show_icons: bool = True


DEFAULTS: Dict[str, Any] = {
    SHOW_MODE: DisplayMode.BOTH.value,
    SHOW_ICONS: True,
}


def _validate(key: str, value: Any) -> Any:
    """Return the canonical form of value for key, raising on bad input."""
    if key == SHOW_MODE:
        if isinstance(value, DisplayMode):
            return value.value
        try:
            return DisplayMode(value).value
        except ValueError:
            raise ValueError(f"Invalid {SHOW_MODE}: {value!r}") from None
    if key == SHOW_ICONS:
        if not isinstance(value, bool):
            raise ValueError(f"Invalid {SHOW_ICONS}: {value!r}")
        return value
    raise KeyError(key)


class SettingsStore:
    """
    Key-value settings store with change notification.

    Listeners are notified through the event bus after a value actually
    changes. With a path, values are loaded from and saved to YAML.
    """

    def __init__(self, path: Optional[str] = None, bus: EventBus = None):
        self.path = path
        self._bus = bus or event_bus
        self._lock = threading.Lock()
        self._values: Dict[str, Any] = dict(DEFAULTS)
        self._listeners: Dict[Callable[[], None], Callable[[Any], None]] = {}
        if path:
            self._load()

    def _load(self) -> None:
        """Load persisted values, keeping defaults for anything invalid."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r") as f:
                stored = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logging.warning("Cannot load settings from %s: %s", self.path, exc)
            return
        if not isinstance(stored, dict):
            logging.warning("Ignoring malformed settings file %s", self.path)
            return
        for key in DEFAULTS:
            if key not in stored:
                continue
            try:
                self._values[key] = _validate(key, stored[key])
            except ValueError as exc:
                logging.warning("%s, keeping default %r", exc, DEFAULTS[key])

    def _save(self) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(self._values, f, default_flow_style=False)
        except OSError as exc:
            logging.error("Unable to save settings to %s: %s", self.path, exc)

    def get(self, key: str) -> Any:
        """Get a setting by key."""
        with self._lock:
            if key not in self._values:
                raise KeyError(key)
            return self._values[key]

    def set(self, key: str, value: Any) -> None:
        """Set a setting, notifying listeners if its value changed."""
        value = _validate(key, value)
        with self._lock:
            if self._values[key] == value:
                return
            self._values[key] = value
            if self.path:
                self._save()
        logging.debug("setting %s → %r", key, value)
        self._bus.publish(SETTINGS_CHANGED, self)

    def display_config(self) -> DisplayConfig:
        """Read a consistent snapshot of both settings."""
        with self._lock:
            return DisplayConfig(
                mode=DisplayMode(self._values[SHOW_MODE]),
                show_icons=self._values[SHOW_ICONS],
            )

    def on_changed(self, callback: Callable[[], None]) -> None:
        """Call callback (without arguments) after any setting changes."""
        def handler(store):
            if store is self:
                callback()

        with self._lock:
            if callback in self._listeners:
                return
            self._listeners[callback] = handler
        self._bus.subscribe(SETTINGS_CHANGED, handler)

    def remove_listener(self, callback: Callable[[], None]) -> bool:
        """Remove a listener added with on_changed. Safe to call twice."""
        with self._lock:
            handler = self._listeners.pop(callback, None)
        if handler is None:
            return False
        return self._bus.unsubscribe(SETTINGS_CHANGED, handler)
