"""Command-line entry point.

Usage:
    blelight
    blelight --address d7:31:30:30:34:4c --port 8080 -v
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import ENV_VARS, BridgeConfig
from .exceptions import (
    BLEConnectionError,
    CharacteristicNotFoundError,
    DeviceNotFoundError,
)
from .service import run_bridge

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging (DEBUG when verbose, INFO otherwise)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
    if not verbose:
        # bleak is chatty at DEBUG; only surface its warnings
        logging.getLogger("bleak").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="blelight",
        description="Serve an HTTP endpoint that sets the color of a BLE RGB light.",
        epilog="Every option can also be set with the environment variable "
               "shown in its help text.",
    )
    parser.add_argument(
        "--address",
        help=f"Light BLE address ({ENV_VARS['address']})",
    )
    parser.add_argument(
        "--characteristic",
        dest="characteristic_uuid",
        help=f"Light characteristic UUID ({ENV_VARS['characteristic_uuid']})",
    )
    parser.add_argument(
        "--keep-alive-interval",
        type=float,
        help=f"Seconds between keep-alive frames ({ENV_VARS['keep_alive_interval']})",
    )
    parser.add_argument(
        "--scan-timeout",
        type=float,
        help=f"Seconds to scan for the light, 0 = forever ({ENV_VARS['scan_timeout']})",
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        help=f"Connection timeout in seconds ({ENV_VARS['connect_timeout']})",
    )
    parser.add_argument(
        "--connect-attempts",
        type=int,
        help=f"Connection attempts ({ENV_VARS['connect_attempts']})",
    )
    parser.add_argument(
        "--write-timeout",
        type=float,
        help=f"Per-write timeout in seconds ({ENV_VARS['write_timeout']})",
    )
    parser.add_argument(
        "--host",
        dest="http_host",
        help=f"HTTP bind address ({ENV_VARS['http_host']})",
    )
    parser.add_argument(
        "--port",
        dest="http_port",
        type=int,
        help=f"HTTP port ({ENV_VARS['http_port']})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging (shows every frame sent)",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> BridgeConfig:
    """Defaults, then environment, then command-line flags."""
    config = BridgeConfig.from_env().with_overrides(
        address=args.address,
        characteristic_uuid=args.characteristic_uuid,
        keep_alive_interval=args.keep_alive_interval,
        scan_timeout=args.scan_timeout,
        connect_timeout=args.connect_timeout,
        connect_attempts=args.connect_attempts,
        write_timeout=args.write_timeout,
        http_host=args.http_host,
        http_port=args.http_port,
    )
    config.validate()
    return config


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args)
    except ValueError as e:
        _LOGGER.error("Invalid configuration: %s", e)
        return 2

    try:
        asyncio.run(run_bridge(config))
    except KeyboardInterrupt:
        _LOGGER.info("Stopped with Ctrl+C")
    except (DeviceNotFoundError, BLEConnectionError, CharacteristicNotFoundError) as e:
        _LOGGER.error("Startup failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
