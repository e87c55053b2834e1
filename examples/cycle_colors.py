"""Cycle the light through a few colors without the HTTP server.

Usage:
    uv run python examples/cycle_colors.py
    uv run python examples/cycle_colors.py --address d7:31:30:30:34:4c --delay 0.5 ff0000 00ff00
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime

from blelight import KeepAliveTask, LightDevice, parse_hex_color
from blelight.config import DEFAULT_ADDRESS

DEFAULT_COLORS = ["ff0000", "00ff00", "0000ff", "ffffff"]


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


async def cycle(address: str, colors: list[str], delay: float, rounds: int) -> None:
    """Connect, then show each color in turn."""
    parsed = [parse_hex_color(value) for value in colors]

    async with LightDevice(address) as light:
        print(f"[{_timestamp()}] connected to {address}")
        keep_alive = KeepAliveTask(light.gateway)
        keep_alive.start()
        try:
            for _ in range(rounds):
                for color in parsed:
                    print(f"[{_timestamp()}] #{color.to_hex()}")
                    await light.set_color(color)
                    await asyncio.sleep(delay)
        finally:
            await keep_alive.stop()

        print(
            f"[{_timestamp()}] frames sent={light.gateway.frames_sent} "
            f"failures={light.gateway.write_failures}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Cycle a BLE RGB light through colors.")
    parser.add_argument("colors", nargs="*", default=DEFAULT_COLORS, help="Hex colors to show")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="Light BLE address")
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds per color")
    parser.add_argument("--rounds", type=int, default=3, help="How many times to cycle")
    args = parser.parse_args()

    try:
        asyncio.run(cycle(args.address, args.colors, args.delay, args.rounds))
    except KeyboardInterrupt:
        print("\nStopped.")


if __name__ == "__main__":
    main()
