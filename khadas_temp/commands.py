#!/usr/bin/env python3
"""
Command pattern implementation for panel menu actions.

Each user action from the panel menu becomes a write to the settings
store; the display follows through the change notification.
"""

from abc import ABC, abstractmethod

from .settings import SHOW_ICONS, SHOW_MODE, DisplayMode, SettingsStore


class Command(ABC):
    """Base command interface for the Command pattern."""

    @abstractmethod
    def execute(self) -> None:
        """Execute the command."""
        pass


class SelectModeCommand(Command):
    """Command to choose which sensors are shown."""

    def __init__(self, mode, settings: SettingsStore):
        """
        Initialize the command.

        Args:
            mode: DisplayMode or its value ("soc", "ddr" or "both")
            settings: store receiving the write
        """
        self.mode = DisplayMode(mode)
        self.settings = settings

    def execute(self) -> None:
        self.settings.set(SHOW_MODE, self.mode.value)


class SetIconsCommand(Command):
    """Command to show or hide the sensor icons."""

    def __init__(self, visible: bool, settings: SettingsStore):
        self.visible = visible
        self.settings = settings

    def execute(self) -> None:
        self.settings.set(SHOW_ICONS, self.visible)


class ToggleIconsCommand(Command):
    """Command to flip icon visibility."""

    def __init__(self, settings: SettingsStore):
        self.settings = settings

    def execute(self) -> None:
        self.settings.set(SHOW_ICONS, not self.settings.get(SHOW_ICONS))
