"""Exception hierarchy for the BLE light bridge."""

from __future__ import annotations


class BLELightError(Exception):
    """Base exception for all blelight errors."""


class DeviceNotFoundError(BLELightError):
    """Scan finished without seeing the configured light."""


class BLEConnectionError(BLELightError):
    """Connecting to the light failed, or the link is not connected."""


class CharacteristicNotFoundError(BLELightError):
    """The connected device does not expose the light characteristic."""


class EncodingError(BLELightError, ValueError):
    """A command frame could not be built."""


class PayloadTooLargeError(EncodingError):
    """Command payload does not fit in a frame."""


class InvalidColorFormatError(BLELightError, ValueError):
    """A color string is not a valid hex color."""


class WriteError(BLELightError):
    """Writing a frame to the light failed."""
