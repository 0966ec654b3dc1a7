"""
Command line entry point: loads config.yaml, registers the provider and either
tests the connection, runs one activity tick, prints the provider dialog or
runs the scheduler until interrupted.
"""

import argparse
import json
import logging
import os
import sys
import time

import pytz

from . import __version__
from .activity import Activity
from .config import ConfigManager
from .errors import ConfigurationError, SolarprognoseError
from .interfaces.solarprognose_interface import SolarprognoseInterface
from .log_handler import MemoryLogHandler, TimezoneFormatter
from .plugin import registry
from .scheduler import ActivityScheduler

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("__main__")


def setup_logging(level="info", tz=pytz.utc):
    """
    Attaches a stdout handler and the in-memory activity history to the plugin
    logger and returns the memory handler.
    """
    formatter = TimezoneFormatter(LOG_FORMAT, LOG_DATE_FORMAT, tz=tz)
    streamhandler = logging.StreamHandler(sys.stdout)
    streamhandler.setFormatter(formatter)
    memory_handler = MemoryLogHandler(max_records=5000, max_alerts=500)
    memory_handler.setFormatter(formatter)
    logger.handlers = [streamhandler, memory_handler]
    logger.setLevel(str(level).upper())
    return memory_handler


def register_plugins():
    if SolarprognoseInterface.DESCRIPTOR.name not in registry:
        registry.register(SolarprognoseInterface.DESCRIPTOR, SolarprognoseInterface)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="solarprognose",
        description="Fetch the hourly solar forecast from solarprognose.de",
    )
    parser.add_argument(
        "config_dir",
        nargs="?",
        default=os.getcwd(),
        help="directory containing config.yaml (default: current directory)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--test", action="store_true", help="test the connection and exit")
    mode.add_argument("--once", action="store_true", help="run one activity and exit")
    mode.add_argument(
        "--dialog",
        action="store_true",
        help="print the provider dialog as JSON and exit",
    )
    return parser.parse_args(argv)


def print_alerts(memory_handler, limit=10):
    """
    Prints the most recent warnings and errors of the activity history.
    """
    alerts = memory_handler.get_alerts(limit=limit)
    if not alerts:
        return
    print("Recent alerts:")
    for alert in alerts:
        print(f"  {alert['timestamp']} {alert['level']} {alert['message']}")


def main(argv=None):
    args = parse_args(argv)
    config_manager = ConfigManager(args.config_dir)
    time_zone = pytz.timezone(config_manager.config["time_zone"])
    memory_handler = setup_logging(config_manager.config["log_level"], time_zone)
    logger.info("[Main] Starting solarprognose - version: %s", __version__)

    setting = config_manager.get_provider_setting()
    register_plugins()
    provider = registry.create(
        SolarprognoseInterface.DESCRIPTOR.name,
        setting=setting,
        locale=config_manager.config["solarprognose"].get("locale"),
    )

    if args.dialog:
        dialog = provider.get_provider_dialog().to_dicts()
        print(json.dumps(dialog, indent=2, ensure_ascii=False))
        return 0

    try:
        setting.validate()
    except ConfigurationError as e:
        logger.error("[Main] %s", e)
        logger.error("[Main] Please adjust %s", config_manager.config_file)
        return 1

    if args.test:
        try:
            print(provider.test_connection(setting))
        except SolarprognoseError as e:
            logger.error("[Main] connection test failed: %s", e)
            print_alerts(memory_handler)
            return 1
        return 0

    activity = Activity.from_config(config_manager.config.get("activity", {}))
    scheduler = ActivityScheduler(provider, activity, time_zone, history=memory_handler)

    if args.once:
        variables = scheduler.run_activity()
        if variables is None:
            print_alerts(memory_handler)
            return 1
        for table in provider.get_default_tables():
            print(table.name)
            print(table.to_dataframe(variables, time_zone).to_string(index=False))
        return 0

    scheduler.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("[Main] Shutting down (user requested)")
    finally:
        status = scheduler.get_status()
        logger.info(
            "[Main] %s forecast hours held, last error: %s",
            status["hours_available"],
            status["last_error"]["error"],
        )
        scheduler.shutdown()
        logging.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
