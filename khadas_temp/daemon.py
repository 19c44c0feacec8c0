#!/usr/bin/env python3
"""Khadas temperature indicator - headless host

Runs the sampling engine outside of a desktop panel and logs every
display change. Useful on boards without a shell session and for
checking which thermal zones were picked.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from .config import ConfigManager
from .controller import LifecycleController
from .display import DisplayState
from .events import DISPLAY_CHANGED, event_bus
from .settings import SettingsStore


def setup_logging(log_file_path: str = None, log_level_str: str = "INFO"):
    """Configure logging system for console and optional file output."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(module)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=handlers,
    )
    logging.debug("Logging initialized at level %s", log_level_str.upper())


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Khadas SoC/DDR temperature indicator (headless).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML configuration file. If not provided, searches in standard locations."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level."
    )
    return parser.parse_args(argv)


def find_config_file(specified_path: str = None):
    """
    Find the configuration file.
    Searches in order: specified path, working directory, /etc, user's config.
    Returns None when nothing is found; built-in defaults apply then.
    """
    if specified_path:
        return specified_path if Path(specified_path).exists() else None

    search_paths = [
        Path.cwd() / "config.yaml",
        Path("/etc/khadas-temp/config.yaml"),
        Path.home() / ".config/khadas-temp/config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            return str(path)

    return None


def log_display(state: DisplayState) -> None:
    logging.info("%s", state)


def main(argv=None) -> None:
    """Run the indicator until interrupted."""
    args = parse_args(argv)

    config_file_path = find_config_file(args.config)
    if args.config and not config_file_path:
        sys.exit(f"[ERR] Configuration file not found: {args.config}")

    config = ConfigManager(config_file_path)
    setup_logging(config.log_file, args.log_level)
    if config_file_path:
        logging.info("Using configuration from: %s", config_file_path)
    else:
        logging.info("No configuration file found, using defaults")

    settings = SettingsStore(config.settings_file)
    controller = LifecycleController(config=config, settings=settings)
    event_bus.subscribe(DISPLAY_CHANGED, log_display)

    controller.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logging.info("KeyboardInterrupt received, exiting.")
    finally:
        controller.stop()
        event_bus.unsubscribe(DISPLAY_CHANGED, log_display)


if __name__ == "__main__":
    main()
