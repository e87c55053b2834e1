"""Single write path to the light characteristic."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import EncodingError, WriteError
from .protocol import FRAME_LENGTH

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic

    from .transport import BLEConnection

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LightLink:
    """Connection state shared by every writer once binding is done."""

    address: str
    connection: BLEConnection
    characteristic: BleakGATTCharacteristic


class TransmissionGateway:
    """Serializes every frame written to the light.

    Keep-alive ticks and color requests share one BLE link. Each send holds
    the gateway lock for the whole radio write, so exactly one frame is in
    flight at a time and frames never interleave.

    Writes are fire-and-forget (write without response): a frame that was
    written is not confirmed by the light.
    """

    def __init__(self, link: LightLink, write_timeout: float | None = 5.0):
        """Initialize gateway.

        Args:
            link: Bound connection state
            write_timeout: Seconds allowed per write, None for no limit (default: 5)
        """
        self.link = link
        self.write_timeout = write_timeout

        self._lock = asyncio.Lock()
        self.frames_sent = 0
        self.write_failures = 0

    async def send(self, frame: bytes) -> None:
        """Write one frame to the light.

        Args:
            frame: Complete command frame (FRAME_LENGTH bytes)

        Raises:
            EncodingError: If frame has the wrong length
            WriteError: If the write fails or times out
        """
        if len(frame) != FRAME_LENGTH:
            raise EncodingError(
                f"Frame must be {FRAME_LENGTH} bytes, got {len(frame)}"
            )

        async with self._lock:
            _LOGGER.debug("Sending frame: %s", frame.hex(" ").upper())
            try:
                await asyncio.wait_for(
                    self.link.connection.write_without_response(
                        self.link.characteristic, frame
                    ),
                    timeout=self.write_timeout,
                )
            except asyncio.TimeoutError as e:
                self.write_failures += 1
                _LOGGER.warning(
                    "Write to %s timed out after %ss", self.link.address, self.write_timeout
                )
                raise WriteError(
                    f"Write timed out after {self.write_timeout}s"
                ) from e
            except Exception as e:
                self.write_failures += 1
                _LOGGER.warning("Write to %s failed: %s", self.link.address, e)
                raise WriteError(f"Write failed: {e}") from e

            self.frames_sent += 1
