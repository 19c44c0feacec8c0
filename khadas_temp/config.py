#!/usr/bin/env python3
"""
Configuration manager for the temperature indicator.

Handles loading and accessing daemon configuration from a YAML file:
which logical sensors exist, where the thermal zones live and how often
they are sampled.
"""

import math
import os
from dataclasses import dataclass
from typing import Any, Tuple

import yaml

THERMAL_BASE_DIR = "/sys/class/thermal"


@dataclass(frozen=True)
class SensorConfig:
    """Configuration for one logical sensor.

    - name: logical name, also the role used by display modes ("soc", "ddr")
    - type_name: content of the zone `type` file identifying the sensor
    - fallback_path: temp file used when no zone declares type_name
    """
    name: str
    type_name: str
    fallback_path: str


DEFAULT_SENSORS: Tuple[SensorConfig, ...] = (
    SensorConfig(
        name="soc",
        type_name="soc_thermal",
        fallback_path=f"{THERMAL_BASE_DIR}/thermal_zone0/temp",
    ),
    SensorConfig(
        name="ddr",
        type_name="ddr_thermal",
        fallback_path=f"{THERMAL_BASE_DIR}/thermal_zone1/temp",
    ),
)


class ConfigManager:
    """
    Manages loading and accessing configuration from YAML file.

    Without a path every property returns its built-in default.
    """

    def __init__(self, config_path=None):
        """Initialize the configuration manager with a config file path."""
        self.config_path = config_path
        self._config = {}
        self._sensors = DEFAULT_SENSORS

        if config_path:
            self.reload()

    def reload(self) -> None:
        """Reload configuration from YAML file."""
        if not self.config_path or not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f) or {}
            if not isinstance(config, dict):
                raise TypeError("top level must be a mapping")

            sensors = []
            for sensor_data in config.get("sensors", []):
                sensors.append(SensorConfig(
                    name=sensor_data["name"],
                    type_name=sensor_data["type"],
                    fallback_path=sensor_data["fallback"],
                ))

            interval = config.get("poll_interval", 2)
            if isinstance(interval, bool) or not isinstance(interval, (int, float)) \
                    or not 0 < interval < math.inf:
                raise TypeError(f"poll_interval must be a positive number, got {interval!r}")
        except Exception as e:
            raise ValueError(f"Error loading configuration: {str(e)}")

        self._config = config
        self._sensors = tuple(sensors) or DEFAULT_SENSORS

    @property
    def thermal_base_dir(self) -> str:
        """Directory holding the thermal_zone<N> entries."""
        return self._config.get("thermal_base_dir", THERMAL_BASE_DIR)

    @property
    def poll_interval(self) -> float:
        """How often to sample sensors (seconds)."""
        return self._config.get("poll_interval", 2)

    @property
    def log_file(self):
        """Optional log file for daemon output."""
        return self._config.get("log_file")

    @property
    def settings_file(self):
        """Optional YAML file persisting show-mode and show-icons."""
        path = self._config.get("settings_file")
        return os.path.expanduser(path) if path else None

    @property
    def sensors(self) -> Tuple[SensorConfig, ...]:
        """Logical sensors to resolve and sample."""
        return self._sensors

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key."""
        return self._config.get(key, default)
