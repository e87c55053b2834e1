"""Main BLE light device class."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .gateway import LightLink, TransmissionGateway
from .models.color import RGBColor
from .protocol import (
    LIGHT_CHARACTERISTIC_UUID,
    build_keep_alive_command,
    build_light_command,
)
from .transport import BLEConnection

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class LightDevice:
    """BLE RGB light.

    Main API for talking to the light. Connecting locates the device by
    address, connects, binds the light characteristic and builds the
    transmission gateway every writer shares.

    Usage:
        async with LightDevice("d7313030344c") as light:
            await light.set_color(RGBColor(255, 136, 0))

        # Skip the scan with a BLEDevice from a previous discovery
        async with LightDevice(address, ble_device=device) as light:
            await light.send_keep_alive()
    """

    def __init__(
            self,
            address: str,
            characteristic_uuid: str = LIGHT_CHARACTERISTIC_UUID,
            ble_device: BLEDevice | None = None,
            scan_timeout: float | None = 30.0,
            connect_timeout: float = 10.0,
            connect_attempts: int = 1,
            write_timeout: float | None = 5.0,
    ):
        """Initialize light device.

        Args:
            address: Light address, with or without delimiters
            characteristic_uuid: UUID of the writable light characteristic
            ble_device: Optional BLEDevice, skips the scan when given
            scan_timeout: Scan timeout in seconds, None to wait forever (default: 30)
            connect_timeout: Connection timeout in seconds (default: 10)
            connect_attempts: Connection attempts (default: 1)
            write_timeout: Per-write timeout in seconds (default: 5)
        """
        self.address = address
        self.characteristic_uuid = characteristic_uuid
        self.write_timeout = write_timeout
        self._connection = BLEConnection(
            address,
            ble_device,
            timeout=connect_timeout,
            scan_timeout=scan_timeout,
            max_attempts=connect_attempts,
        )

        self._link: LightLink | None = None
        self._gateway: TransmissionGateway | None = None

    async def __aenter__(self) -> LightDevice:
        """Connect and bind the light characteristic."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device."""
        await self.disconnect()

    async def connect(self) -> None:
        """Locate, connect and bind.

        Raises:
            DeviceNotFoundError: If the light is not found
            BLEConnectionError: If connecting fails
            CharacteristicNotFoundError: If the light characteristic is missing
        """
        await self._connection.connect()

        try:
            characteristic = self._connection.bind_characteristic(self.characteristic_uuid)
        except Exception:
            await self._connection.disconnect()
            raise

        self._link = LightLink(
            address=self.address,
            connection=self._connection,
            characteristic=characteristic,
        )
        self._gateway = TransmissionGateway(self._link, write_timeout=self.write_timeout)

    async def disconnect(self) -> None:
        """Disconnect from device."""
        await self._connection.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def link(self) -> LightLink:
        """Bound connection state."""
        if self._link is None:
            raise RuntimeError("Device not connected - link unavailable")
        return self._link

    @property
    def gateway(self) -> TransmissionGateway:
        """Gateway all writers must go through."""
        if self._gateway is None:
            raise RuntimeError("Device not connected - gateway unavailable")
        return self._gateway

    async def send_keep_alive(self) -> None:
        """Send one keep-alive frame."""
        await self.gateway.send(build_keep_alive_command())

    async def set_color(self, color: RGBColor) -> None:
        """Set the color of every segment."""
        await self.gateway.send(build_light_command(*color.as_tuple()))
