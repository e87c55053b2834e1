"""BLE protocol commands for the RGB light."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

from ..exceptions import PayloadTooLargeError


class CommandCode(IntEnum):
    """Command identifiers understood by the light firmware."""

    SET_COLOR = 0x33    # Change the displayed color
    KEEP_ALIVE = 0xAA   # Liveness ping, keeps the link from idling out


# Protocol constants
LIGHT_CHARACTERISTIC_UUID = "00010203-0405-0607-0809-0a0b0c0d2b11"

FRAME_LENGTH = 20           # [cmd:1][payload:18][checksum:1]
PAYLOAD_FIELD_LENGTH = 18   # Zero-padded payload region
MAX_PAYLOAD_LENGTH = 17     # Largest payload accepted by build_frame

KEEP_ALIVE_PAYLOAD = b"\x33"

# Fixed header of a SET_COLOR payload
LIGHT_HEADER = b"\x05\x15\x01"
# Segment mask selecting every segment of the strip
ALL_SEGMENTS = b"\xff\x0f"


def _to_bytes(name: str, values: bytes | Sequence[int]) -> bytes:
    try:
        return bytes(values)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must contain byte values 0-255: {e}") from e


def compute_checksum(command: int, payload: bytes | Sequence[int]) -> int:
    """XOR-fold the payload, seeded with the command identifier.

    Args:
        command: Command identifier (0-255)
        payload: Payload bytes

    Returns:
        Checksum byte
    """
    checksum = command
    for value in payload:
        checksum ^= value
    return checksum & 0xFF


def build_frame(command: int, payload: bytes | Sequence[int] = b"") -> bytes:
    """Build a checksummed command frame.

    Args:
        command: Command identifier (0-255), see CommandCode
        payload: Up to MAX_PAYLOAD_LENGTH bytes

    Returns:
        Frame bytes (always FRAME_LENGTH long)

    Format:
        [cmd:1][payload:18][checksum:1]
        - payload: zero-padded to 18 bytes
        - checksum: cmd ^ payload[0] ^ ... ^ payload[n-1]

    Raises:
        PayloadTooLargeError: If payload exceeds MAX_PAYLOAD_LENGTH
        ValueError: If command or a payload value is not a byte
    """
    if not 0 <= command <= 0xFF:
        raise ValueError(f"command out of range: {command} (must be 0-255)")

    data = _to_bytes("payload", payload)
    if len(data) > MAX_PAYLOAD_LENGTH:
        raise PayloadTooLargeError(
            f"Payload size {len(data)} exceeds maximum {MAX_PAYLOAD_LENGTH}"
        )

    checksum = compute_checksum(command, data)
    padding = bytes(PAYLOAD_FIELD_LENGTH - len(data))

    return bytes([command]) + data + padding + bytes([checksum])


def build_keep_alive_command() -> bytes:
    """Build the periodic keep-alive frame.

    Returns:
        Frame bytes: 0xAA + [0x33] + padding + checksum
    """
    return build_frame(CommandCode.KEEP_ALIVE, KEEP_ALIVE_PAYLOAD)


def build_light_command(red: int, green: int, blue: int) -> bytes:
    """Build a frame that sets the color of every segment.

    Args:
        red: Red channel (0-255)
        green: Green channel (0-255)
        blue: Blue channel (0-255)

    Returns:
        Frame bytes: 0x33 + payload + padding + checksum

    Format (payload, 13 bytes):
        [header:3][r:1][g:1][b:1][reserved:5][segments:2]
        - header: 0x05 0x15 0x01
        - reserved: zeros
        - segments: 0xFF 0x0F (all segments)
    """
    color = _to_bytes("color", (red, green, blue))
    payload = LIGHT_HEADER + color + bytes(5) + ALL_SEGMENTS
    return build_frame(CommandCode.SET_COLOR, payload)
