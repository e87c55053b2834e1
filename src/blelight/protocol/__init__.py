"""BLE protocol implementation."""

from .commands import (
    ALL_SEGMENTS,
    FRAME_LENGTH,
    KEEP_ALIVE_PAYLOAD,
    LIGHT_CHARACTERISTIC_UUID,
    LIGHT_HEADER,
    MAX_PAYLOAD_LENGTH,
    PAYLOAD_FIELD_LENGTH,
    CommandCode,
    build_frame,
    build_keep_alive_command,
    build_light_command,
    compute_checksum,
)

__all__ = [
    "CommandCode",
    "LIGHT_CHARACTERISTIC_UUID",
    "FRAME_LENGTH",
    "PAYLOAD_FIELD_LENGTH",
    "MAX_PAYLOAD_LENGTH",
    "KEEP_ALIVE_PAYLOAD",
    "LIGHT_HEADER",
    "ALL_SEGMENTS",
    "build_frame",
    "build_keep_alive_command",
    "build_light_command",
    "compute_checksum",
]
