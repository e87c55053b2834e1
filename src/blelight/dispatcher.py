"""Turn color requests into SET_COLOR frames."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models.color import RGBColor, parse_hex_color
from .protocol import build_light_command

if TYPE_CHECKING:
    from .gateway import TransmissionGateway

_LOGGER = logging.getLogger(__name__)


class CommandDispatcher:
    """Parses, encodes and submits color changes through the gateway.

    Concurrent requests are serialized by the gateway; the light shows
    whichever color was written last.
    """

    def __init__(self, gateway: TransmissionGateway):
        self.gateway = gateway

    async def set_color(self, color: RGBColor) -> None:
        """Send a SET_COLOR frame for color.

        Raises:
            WriteError: If the frame could not be written
        """
        _LOGGER.info("Changing color to #%s", color.to_hex())
        await self.gateway.send(build_light_command(*color.as_tuple()))

    async def set_color_hex(self, value: str) -> RGBColor:
        """Parse a hex color string and send it to the light.

        Nothing is written when value is malformed.

        Args:
            value: Hex color such as "ff8800"

        Returns:
            The color that was sent

        Raises:
            InvalidColorFormatError: If value is not a valid hex color
            WriteError: If the frame could not be written
        """
        color = parse_hex_color(value)
        await self.set_color(color)
        return color
