#!/usr/bin/env python3
"""
Display state module.

Derives what the panel shows for every sensor from the latest samples
and the display settings. The derived state is immutable and rebuilt
from scratch on every change.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from .sensors import Sensor
from .settings import DisplayConfig

PLACEHOLDER = "--°C"

# wide enough to quantize any finite float
_FORMAT_CONTEXT = Context(prec=400)


@dataclass(frozen=True)
class SensorDisplay:
    """What the panel shows for one sensor."""
    visible: bool
    icon_visible: bool
    text: str


@dataclass(frozen=True)
class DisplayState:
    """Ordered, read-only mapping of sensor name to SensorDisplay."""
    slots: Tuple[Tuple[str, SensorDisplay], ...] = ()

    def __getitem__(self, name: str) -> SensorDisplay:
        for slot_name, display in self.slots:
            if slot_name == name:
                return display
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(slot_name == name for slot_name, _ in self.slots)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def as_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            name: {
                "visible": display.visible,
                "iconVisible": display.icon_visible,
                "text": display.text,
            }
            for name, display in self.slots
        }

    def __str__(self) -> str:
        return " ".join(
            f"{name}={display.text if display.visible else 'hidden'}"
            for name, display in self.slots
        )


def format_temperature(value_c: Optional[float], ok: bool = True) -> str:
    """Format a reading with one decimal, or the placeholder if not ok.

    Exact halves round away from zero (45.25 -> "45.3°C").
    """
    if not ok or value_c is None:
        return PLACEHOLDER
    rounded = Decimal(value_c).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP,
                                          context=_FORMAT_CONTEXT)
    return f"{rounded}°C"


def reconcile(sensors: Iterable[Sensor], config: DisplayConfig) -> DisplayState:
    """Build the display state for sensors under config. Pure function."""
    roles = config.mode.roles
    slots = []
    for sensor in sensors:
        reading = sensor.reading
        slots.append((sensor.name, SensorDisplay(
            visible=sensor.name in roles,
            icon_visible=config.show_icons,
            text=format_temperature(reading.value_c, reading.ok),
        )))
    return DisplayState(tuple(slots))
