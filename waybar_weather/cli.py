"""CLI entry point for the waybar weather module."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from waybar_weather.config.loader import get_config_value, load_config
from waybar_weather.config.schema import LogLevel
from waybar_weather.errors import TemplateCompileError
from waybar_weather.ingest.location import NoCoordinatesError
from waybar_weather.service import create_service, resolve_coordinates

DEFAULT_CONFIG = "~/.config/waybar-weather/config.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="waybar-weather",
        description="Weather module for Waybar",
    )
    parser.add_argument(
        "--config", default=None, help=f"Config YAML path (default: {DEFAULT_CONFIG})"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=[level.value for level in LogLevel],
        default=None,
        help="Override config log level",
    )
    # --lat/--lon shared by run and once
    location_p = argparse.ArgumentParser(add_help=False)
    location_p.add_argument("--lat", type=float, default=None, help="Latitude")
    location_p.add_argument("--lon", type=float, default=None, help="Longitude")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser(
        "run", parents=[location_p], help="Print weather updates until terminated"
    )
    sub.add_parser(
        "once", parents=[location_p], help="Fetch once and print a single update"
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. weather.forecast_hours")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(_config_path(args.config))
    except (OSError, ValidationError) as e:
        print(f"Error: failed to load config: {e}", file=sys.stderr)
        return 1

    # stdout carries the bar protocol, so logs go to stderr
    logging.basicConfig(
        level=args.log_level or config.log_level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command in ("run", "once"):
        return _cmd_weather(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _config_path(path: str | None) -> str | None:
    if path is not None:
        return path
    default = Path(DEFAULT_CONFIG).expanduser()
    return str(default) if default.exists() else None


def _cmd_weather(config, args) -> int:
    try:
        coords = resolve_coordinates(config, args.lat, args.lon)
    except (OSError, NoCoordinatesError) as e:
        logger.error("No location available: %s", e)
        return 1

    try:
        service = create_service(config, coords)
    except TemplateCompileError as e:
        logger.error("Invalid %s template: %s", e.template_name, e)
        return 1

    if args.command == "once":
        return 0 if asyncio.run(service.run_once()) else 1

    asyncio.run(service.run())
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            return 1
        print(value)
        return 0
    else:
        print("Usage: waybar-weather config {show|get}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
