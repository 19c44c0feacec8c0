"""Tests for the headless host helpers."""

from pathlib import Path

import pytest

from khadas_temp import daemon


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_specified_path(self, write_config) -> None:
        path = write_config("poll_interval: 2\n")
        assert daemon.find_config_file(path) == path

    def test_specified_path_missing(self, tmp_path: Path) -> None:
        assert daemon.find_config_file(str(tmp_path / "absent.yaml")) is None

    def test_working_directory(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "config.yaml").write_text("poll_interval: 2\n")
        monkeypatch.chdir(tmp_path)
        assert daemon.find_config_file() == str(tmp_path / "config.yaml")


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self) -> None:
        args = daemon.parse_args([])
        assert args.config is None
        assert args.log_level == "INFO"

    def test_options(self) -> None:
        args = daemon.parse_args(["--config", "x.yaml", "--log-level", "DEBUG"])
        assert args.config == "x.yaml"
        assert args.log_level == "DEBUG"

    def test_bad_level(self) -> None:
        with pytest.raises(SystemExit):
            daemon.parse_args(["--log-level", "LOUD"])


class TestMain:
    """Tests for main."""

    def test_missing_config_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit, match="not found"):
            daemon.main(["--config", str(tmp_path / "absent.yaml")])

    def test_runs_until_interrupted(self, board_config, monkeypatch) -> None:
        started = []

        def interrupt(_seconds):
            raise KeyboardInterrupt

        real_start = daemon.LifecycleController.start

        def start(self):
            real_start(self)
            started.append(self)

        monkeypatch.setattr(daemon.time, "sleep", interrupt)
        monkeypatch.setattr(daemon.LifecycleController, "start", start)
        monkeypatch.setattr(daemon, "setup_logging", lambda *args: None)

        daemon.main(["--config", board_config.config_path])

        controller, = started
        assert controller.state.value == "stopped"
        assert controller.display_state["soc"].text == "45.0°C"
