"""BLE Light Bridge.

  Control a BLE RGB light and expose an HTTP endpoint for setting its color.
  """

__version__ = "0.1.0"

from .device import LightDevice
from .discovery import address_matches, locate_device, normalize_address
from .dispatcher import CommandDispatcher
from .exceptions import (
    BLEConnectionError,
    BLELightError,
    CharacteristicNotFoundError,
    DeviceNotFoundError,
    EncodingError,
    InvalidColorFormatError,
    PayloadTooLargeError,
    WriteError,
)
from .gateway import LightLink, TransmissionGateway
from .keepalive import KeepAliveState, KeepAliveTask
from .models.color import RGBColor, parse_hex_color
from .protocol import (
    FRAME_LENGTH,
    LIGHT_CHARACTERISTIC_UUID,
    MAX_PAYLOAD_LENGTH,
    CommandCode,
    build_frame,
    build_keep_alive_command,
    build_light_command,
)

__all__ = [
    # Main API
    "LightDevice",
    "locate_device",
    "CommandDispatcher",
    "TransmissionGateway",
    "LightLink",
    "KeepAliveTask",
    "KeepAliveState",
    # Exceptions
    "BLELightError",
    "DeviceNotFoundError",
    "BLEConnectionError",
    "CharacteristicNotFoundError",
    "EncodingError",
    "PayloadTooLargeError",
    "InvalidColorFormatError",
    "WriteError",
    # Models
    "RGBColor",
    "parse_hex_color",
    # Protocol
    "CommandCode",
    "build_frame",
    "build_keep_alive_command",
    "build_light_command",
    # Utilities
    "normalize_address",
    "address_matches",
    # Constants
    "FRAME_LENGTH",
    "MAX_PAYLOAD_LENGTH",
    "LIGHT_CHARACTERISTIC_UUID",
]
