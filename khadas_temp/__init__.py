"""
Khadas Temperature Indicator Package.

Samples the SoC and DDR thermal zones of Khadas boards and keeps a
display state for a desktop panel in step with the user's settings.
"""

__version__ = "0.3.0"

# Core components
from .config import ConfigManager, SensorConfig
from .events import event_bus, EventBus
from .sensors import Sensor, read_text, resolve_sensor_path, resolve_sensors
from .sampler import TemperatureSampler
from .settings import DisplayConfig, DisplayMode, SettingsStore
from .display import DisplayState, SensorDisplay, format_temperature, reconcile
from .controller import ControllerState, LifecycleController

# Commands
from .commands import SelectModeCommand, SetIconsCommand, ToggleIconsCommand

# Re-export key components for the panel host.
# For internal use, direct imports like `from .config import ConfigManager` are preferred.
__all__ = [
    "ConfigManager", "SensorConfig",
    "event_bus", "EventBus",
    "Sensor", "read_text", "resolve_sensor_path", "resolve_sensors",
    "TemperatureSampler",
    "DisplayConfig", "DisplayMode", "SettingsStore",
    "DisplayState", "SensorDisplay", "format_temperature", "reconcile",
    "ControllerState", "LifecycleController",
    "SelectModeCommand", "SetIconsCommand", "ToggleIconsCommand",
    "__version__"
]
