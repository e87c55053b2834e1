"""BLE transport layer."""

from .connection import BLEConnection, find_characteristic

__all__ = [
    "BLEConnection",
    "find_characteristic",
]
