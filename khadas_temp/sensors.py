#!/usr/bin/env python3
"""
Sensor reading module.

Safe reads of sysfs text attributes and resolution of logical sensor
names to the temp file of a matching thermal zone.
"""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Tuple, Union

from .config import SensorConfig

# sysfs attributes are a single short line; never read more than this
MAX_READ_BYTES = 4096

ZONE_PATTERN = re.compile(r"thermal_zone([0-9]+)")

PathLike = Union[str, os.PathLike]


def read_text(path: PathLike) -> Optional[str]:
    """
    Read a small text file and return its stripped contents.

    Returns None if the file is missing, unreadable or not valid UTF-8.
    """
    try:
        with open(path, "rb") as f:
            data = f.read(MAX_READ_BYTES)
        return data.decode("utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logging.debug("Cannot read %s: %s", path, exc)
        return None


def _zone_entries(base_dir: Path) -> List[Tuple[int, Path]]:
    """List thermal_zone<N> entries of base_dir, lowest N first."""
    zones = []
    for entry in os.listdir(base_dir):
        match = ZONE_PATTERN.fullmatch(entry)
        if match:
            zones.append((int(match.group(1)), base_dir / entry))
    zones.sort()
    return zones


def resolve_sensor_path(type_name: str, fallback_path: PathLike, base_dir: PathLike) -> Path:
    """
    Find the temp file of the thermal zone whose type equals type_name.

    Zones are scanned by ascending index so the lowest matching zone wins
    regardless of directory order. Falls back to fallback_path when the
    directory cannot be listed or no zone matches.
    """
    base_dir = Path(base_dir)
    try:
        zones = _zone_entries(base_dir)
    except OSError as exc:
        logging.warning("Cannot list %s (%s), using %s for %s",
                        base_dir, exc, fallback_path, type_name)
        return Path(fallback_path)

    for _, zone_path in zones:
        if read_text(zone_path / "type") == type_name:
            logging.debug("Sensor %s resolved to %s", type_name, zone_path)
            return zone_path / "temp"

    logging.info("No thermal zone of type %s in %s, using %s",
                 type_name, base_dir, fallback_path)
    return Path(fallback_path)


class Reading(NamedTuple):
    value_c: Optional[float]
    ok: bool


class Sensor:
    """
    A logical sensor bound to the temp file chosen at startup.

    The last value and its validity are stored together and replaced in
    one assignment. A failed read keeps the previous value but clears ok.
    """

    def __init__(self, name: str, resolved_path: PathLike):
        self._name = name
        self._resolved_path = Path(resolved_path)
        self._reading = Reading(None, False)

    @property
    def name(self) -> str:
        return self._name

    @property
    def resolved_path(self) -> Path:
        return self._resolved_path

    @property
    def reading(self) -> Reading:
        return self._reading

    @property
    def last_value_c(self) -> Optional[float]:
        return self._reading.value_c

    @property
    def last_read_ok(self) -> bool:
        return self._reading.ok

    def update(self, value_c: Optional[float]) -> None:
        """Record the outcome of one sample (None means the read failed)."""
        if value_c is None:
            self._reading = Reading(self._reading.value_c, False)
        else:
            self._reading = Reading(value_c, True)

    def __repr__(self) -> str:
        return (f"Sensor({self._name!r}, {str(self._resolved_path)!r}, "
                f"last_value_c={self.last_value_c!r}, last_read_ok={self.last_read_ok!r})")


def resolve_sensors(sensor_configs: Iterable[SensorConfig], base_dir: PathLike) -> List[Sensor]:
    """Resolve every configured sensor against base_dir."""
    return [
        Sensor(cfg.name, resolve_sensor_path(cfg.type_name, cfg.fallback_path, base_dir))
        for cfg in sensor_configs
    ]
