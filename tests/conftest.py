"""Shared pytest fixtures for khadas_temp tests."""

from pathlib import Path
from typing import Callable, Optional

import pytest

from khadas_temp.config import ConfigManager
from khadas_temp.events import event_bus
from khadas_temp.settings import SettingsStore


@pytest.fixture(autouse=True)
def reset_event_bus() -> None:
    """Drop subscriptions left behind by other tests."""
    event_bus.reset()
    yield
    event_bus.reset()


@pytest.fixture
def thermal_dir(tmp_path: Path) -> Path:
    """Empty stand-in for /sys/class/thermal."""
    base = tmp_path / "thermal"
    base.mkdir()
    return base


@pytest.fixture
def make_zone(thermal_dir: Path) -> Callable[..., Path]:
    """Create thermal_zone<N> with optional type and temp files."""

    def make(index: int, type_name: Optional[str] = None, temp: Optional[str] = None) -> Path:
        zone = thermal_dir / f"thermal_zone{index}"
        zone.mkdir()
        if type_name is not None:
            (zone / "type").write_text(type_name + "\n")
        if temp is not None:
            (zone / "temp").write_text(temp)
        return zone

    return make


@pytest.fixture
def board(make_zone, thermal_dir: Path) -> Path:
    """A board with the soc sensor in zone0 and the ddr sensor in zone3."""
    make_zone(0, "soc_thermal", "45000\n")
    make_zone(1, "cpu_thermal", "40000\n")
    make_zone(3, "ddr_thermal", "38500\n")
    return thermal_dir


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], str]:
    def write(text: str) -> str:
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return str(path)

    return write


@pytest.fixture
def board_config(board: Path, write_config) -> ConfigManager:
    """Config pointing at the fake board with a long poll interval."""
    return ConfigManager(write_config(f"""
thermal_base_dir: {board}
poll_interval: 60
sensors:
  - name: soc
    type: soc_thermal
    fallback: {board}/thermal_zone0/temp
  - name: ddr
    type: ddr_thermal
    fallback: {board}/thermal_zone1/temp
"""))


@pytest.fixture
def settings() -> SettingsStore:
    return SettingsStore()
