#!/usr/bin/env python3
"""
Lifecycle control module.

Starts and stops periodic sampling and keeps the display state in step
with both the samples and the user settings.
"""

import logging
import math
import queue
import threading
import time
from enum import Enum
from typing import List, Optional

from .config import ConfigManager
from .display import DisplayState, reconcile
from .events import DISPLAY_CHANGED, EventBus, event_bus
from .sampler import TemperatureSampler
from .sensors import Sensor, resolve_sensors
from .settings import SettingsStore

_SETTINGS_CHANGED = object()
_STOP = object()


class ControllerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class LifecycleController:
    """
    Owns the sampling worker and the settings subscription.

    Implements a two-state machine:
    - STOPPED: nothing registered, start() resolves sensors afresh.
    - RUNNING: one worker thread owns the sensors. It samples on a fixed
      period and handles settings changes from an ordered queue, so sensor
      state is never mutated concurrently.

    Startup, every tick and every settings change all go through
    _refresh(), which replaces display_state and publishes it on the bus.
    """

    def __init__(self, config: ConfigManager = None, settings: SettingsStore = None,
                 bus: EventBus = None):
        """Initialize the controller with dependencies."""
        self.config = config or ConfigManager()
        self.bus = bus or event_bus
        self.settings = settings or SettingsStore(self.config.settings_file, bus=self.bus)
        self._lock = threading.RLock()
        self._state = ControllerState.STOPPED
        self._display = DisplayState()
        self._sampler: Optional[TemperatureSampler] = None
        self._events: Optional[queue.Queue] = None
        self._worker: Optional[threading.Thread] = None
        self._stopping: Optional[threading.Event] = None
        self._subscribed = False

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def display_state(self) -> DisplayState:
        """Latest display state; replaced wholesale, never mutated."""
        return self._display

    @property
    def sensors(self) -> List[Sensor]:
        return self._sampler.sensors if self._sampler else []

    def start(self) -> None:
        """Resolve sensors, sample and reconcile once, then run periodically."""
        with self._lock:
            if self._state is ControllerState.RUNNING:
                logging.debug("Controller already running")
                return

            sampler = TemperatureSampler(
                resolve_sensors(self.config.sensors, self.config.thermal_base_dir))
            events: queue.Queue = queue.Queue()
            stopping = threading.Event()
            self._events = events
            self._stopping = stopping
            # changes arriving before the worker starts wait in the queue
            self.settings.on_changed(self._on_settings_changed)
            self._subscribed = True

            try:
                interval = float(self.config.poll_interval)
                if not 0 < interval < math.inf:
                    raise ValueError(f"poll_interval must be positive, got {interval!r}")
                sampler.tick()
                self._sampler = sampler
                self._refresh(sampler)
            except Exception:
                self.settings.remove_listener(self._on_settings_changed)
                self._subscribed = False
                self._events = self._stopping = self._sampler = None
                raise

            self._worker = threading.Thread(
                target=self._run, args=(sampler, events, stopping, interval),
                name="khadas-temp-sampler", daemon=True)
            self._worker.start()
            self._state = ControllerState.RUNNING
            logging.info("Sampling %s every %ss",
                         ", ".join(f"{s.name}@{s.resolved_path}" for s in sampler.sensors),
                         self.config.poll_interval)

    def stop(self) -> None:
        """
        Stop sampling and drop the settings subscription. Idempotent.

        When called from a display_changed subscriber on the worker, the
        remaining subscribers of that same publish still receive the state
        being delivered; nothing is published after that.
        """
        with self._lock:
            if self._state is ControllerState.STOPPED:
                return
            if self._subscribed:
                self.settings.remove_listener(self._on_settings_changed)
                self._subscribed = False
            worker, self._worker = self._worker, None
            events, self._events = self._events, None
            stopping, self._stopping = self._stopping, None
            stopping.set()
            events.put(_STOP)
            self._sampler = None
            self._state = ControllerState.STOPPED

        # join outside the lock so display callbacks may call back into us
        if worker is not threading.current_thread():
            worker.join()
        logging.info("Sampling stopped")

    def _on_settings_changed(self) -> None:
        events = self._events
        if events is not None:
            events.put(_SETTINGS_CHANGED)

    def _run(self, sampler: TemperatureSampler, events: queue.Queue,
             stopping: threading.Event, interval: float) -> None:
        """Worker loop: tick on timeout, refresh on settings change, exit on stop."""
        next_tick = time.monotonic() + interval
        while True:
            try:
                event = events.get(timeout=max(0.0, next_tick - time.monotonic()))
            except queue.Empty:
                event = None

            if event is _STOP or stopping.is_set():
                break
            try:
                if event is None:
                    next_tick += interval
                    # skip missed periods instead of bursting
                    if next_tick <= time.monotonic():
                        next_tick = time.monotonic() + interval
                    sampler.tick()
                self._refresh(sampler)
            except Exception:
                logging.exception("Error in sampling worker, continuing")

    def _refresh(self, sampler: TemperatureSampler) -> None:
        """Re-derive the display state from the samples and full settings."""
        state = reconcile(sampler.sensors, self.settings.display_config())
        self._display = state
        self.bus.publish(DISPLAY_CHANGED, state)
