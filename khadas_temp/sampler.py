#!/usr/bin/env python3
"""
Temperature sampling module.

Reads the resolved temp file of each sensor and converts the
milli-degree integer to degrees Celsius.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

from .sensors import Sensor, read_text

# leading base-10 integer, as the kernel writes it ("45000", "-5000")
_INTEGER_PREFIX = re.compile(r"[+-]?[0-9]+")


def parse_millidegrees(text: Optional[str]) -> Optional[float]:
    """Convert a millidegree reading to °C, None if it holds no integer."""
    if text is None:
        return None
    match = _INTEGER_PREFIX.match(text.strip())
    if not match:
        return None
    try:
        return int(match.group(), 10) / 1000.0
    except OverflowError:
        return None


class TemperatureSampler:
    """
    Samples a fixed set of sensors.

    A failure on one sensor never prevents the others from being sampled.
    """

    def __init__(self, sensors: Sequence[Sensor]):
        self._sensors: List[Sensor] = list(sensors)

    @property
    def sensors(self) -> List[Sensor]:
        return list(self._sensors)

    @staticmethod
    def sample_once(sensor: Sensor) -> Optional[float]:
        """Read one sensor, returning °C or None."""
        return parse_millidegrees(read_text(sensor.resolved_path))

    def tick(self) -> Dict[str, Optional[float]]:
        """Sample every sensor and record the outcome on it."""
        results: Dict[str, Optional[float]] = {}
        for sensor in self._sensors:
            try:
                value = self.sample_once(sensor)
            except Exception:
                logging.exception("Unexpected error sampling %s", sensor.name)
                value = None
            sensor.update(value)
            results[sensor.name] = value
        logging.debug("tick %s", " ".join(
            f"{name}={'--' if value is None else f'{value:.1f}'}"
            for name, value in results.items()
        ))
        return results
