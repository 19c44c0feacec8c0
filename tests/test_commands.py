"""Tests for panel menu commands."""

import pytest

from khadas_temp.commands import SelectModeCommand, SetIconsCommand, ToggleIconsCommand
from khadas_temp.settings import SHOW_ICONS, SHOW_MODE, DisplayMode, SettingsStore


class TestCommands:
    """Tests for the settings-writing commands."""

    def test_select_mode(self, settings: SettingsStore) -> None:
        SelectModeCommand("soc", settings).execute()
        assert settings.get(SHOW_MODE) == "soc"
        SelectModeCommand(DisplayMode.DDR_ONLY, settings).execute()
        assert settings.get(SHOW_MODE) == "ddr"

    def test_select_invalid_mode(self, settings: SettingsStore) -> None:
        with pytest.raises(ValueError):
            SelectModeCommand("none", settings)

    def test_set_icons(self, settings: SettingsStore) -> None:
        SetIconsCommand(False, settings).execute()
        assert settings.get(SHOW_ICONS) is False

    def test_toggle_icons(self, settings: SettingsStore) -> None:
        ToggleIconsCommand(settings).execute()
        assert settings.get(SHOW_ICONS) is False
        ToggleIconsCommand(settings).execute()
        assert settings.get(SHOW_ICONS) is True

    def test_commands_notify(self, settings: SettingsStore) -> None:
        calls = []
        settings.on_changed(lambda: calls.append(settings.display_config()))
        SelectModeCommand("ddr", settings).execute()
        ToggleIconsCommand(settings).execute()
        assert [c.mode for c in calls] == [DisplayMode.DDR_ONLY, DisplayMode.DDR_ONLY]
        assert calls[-1].show_icons is False
