"""Locate the light by physical address."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bleak import BleakScanner

from .exceptions import DeviceNotFoundError

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice
    from bleak.backends.scanner import AdvertisementData

_LOGGER = logging.getLogger(__name__)

_ADDRESS_DELIMITERS = (":", "-")


def normalize_address(address: str) -> str:
    """Normalize a BLE address for comparison.

    "D7:31:30:30:34:4C" and "d7313030344c" both become "d7313030344c".
    """
    normalized = address.strip().lower()
    for delimiter in _ADDRESS_DELIMITERS:
        normalized = normalized.replace(delimiter, "")
    return normalized


def address_matches(address: str, target: str) -> bool:
    """Exact, case-insensitive comparison of two addresses."""
    return normalize_address(address) == normalize_address(target)


async def locate_device(address: str, timeout: float | None = 30.0) -> BLEDevice:
    """Scan until the device with the given address is seen.

    The scan uses no advertisement filter; every discovered device is checked
    against the target. Scanning stops as soon as the first match is found.

    Args:
        address: Target address, with or without delimiters
        timeout: Seconds to scan before giving up, None to wait forever

    Returns:
        BLEDevice for the matching peripheral

    Raises:
        DeviceNotFoundError: If the device was not seen within timeout
    """
    target = normalize_address(address)
    if not target:
        raise ValueError("Target address must not be empty")

    def _match(device: BLEDevice, advertisement_data: AdvertisementData) -> bool:
        try:
            return normalize_address(device.address) == target
        except (AttributeError, TypeError) as e:
            _LOGGER.debug("Skipping device with unresolvable address: %s", e)
            return False

    _LOGGER.info(
        "Searching for %s (timeout=%s)",
        target,
        "none" if timeout is None else f"{timeout:.1f}s",
    )

    device = await BleakScanner.find_device_by_filter(_match, timeout=timeout)
    if device is None:
        raise DeviceNotFoundError(
            f"Device {address} not found within {timeout}s"
        )

    _LOGGER.info("Found light %s (%s)", device.address, device.name or "unnamed")
    return device
