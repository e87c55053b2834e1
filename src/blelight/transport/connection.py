"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from bleak import BleakClient
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..discovery import locate_device
from ..exceptions import BLEConnectionError, CharacteristicNotFoundError

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic
    from bleak.backends.device import BLEDevice
    from bleak.backends.service import BleakGATTService

_LOGGER = logging.getLogger(__name__)


def find_characteristic(
        services: Iterable[BleakGATTService],
        uuid: str,
) -> BleakGATTCharacteristic:
    """Find a characteristic by UUID.

    Linear scan over every characteristic of every service; the first match
    wins and any further matches are ignored.

    Args:
        services: Discovered GATT services
        uuid: Characteristic UUID (case-insensitive)

    Returns:
        The matching characteristic

    Raises:
        CharacteristicNotFoundError: If no characteristic has this UUID
    """
    target = uuid.lower()
    for service in services:
        for characteristic in service.characteristics:
            if characteristic.uuid.lower() == target:
                return characteristic

    raise CharacteristicNotFoundError(
        f"Characteristic {uuid} not found (wrong device or firmware?)"
    )


class BLEConnection:
    """Manages the BLE connection to the light.

    Features:
    - Scan-by-address when no BLEDevice is supplied
    - Connection via bleak-retry-connector with service caching
    - Context manager for automatic cleanup
    - Write-without-response to a bound characteristic
    """

    def __init__(
            self,
            address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            scan_timeout: float | None = 30.0,
            max_attempts: int = 1,
            use_services_cache: bool = True,
    ):
        """Initialize BLE connection manager.

        Args:
            address: Light address, with or without delimiters
            ble_device: Optional BLEDevice, skips the scan when given
            timeout: Connection timeout in seconds (default: 10)
            scan_timeout: Scan timeout in seconds, None to wait forever (default: 30)
            max_attempts: Connection attempts for bleak-retry-connector (default: 1)
            use_services_cache: Enable GATT service caching (default: True)
        """
        self.address = address
        self.ble_device = ble_device
        self.timeout = timeout
        self.scan_timeout = scan_timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache

        self._client: BleakClient | None = None

    async def __aenter__(self) -> BLEConnection:
        """Connect to device (context manager entry)."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device (context manager exit)."""
        await self.disconnect()

    async def connect(self) -> None:
        """Locate the light and establish the BLE connection.

        Service discovery happens as part of connecting, so characteristics
        can be bound right after this returns.

        Raises:
            DeviceNotFoundError: If the scan does not find the light
            BLEConnectionError: If connection fails or times out
        """
        if self._client and self._client.is_connected:
            return  # Already connected

        device = self.ble_device or await locate_device(
            self.address, timeout=self.scan_timeout
        )

        try:
            _LOGGER.info(
                "Connecting to %s (max_attempts=%d)",
                device.address,
                self.max_attempts,
            )

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or device.address,
                disconnected_callback=self._on_disconnect,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

        except asyncio.TimeoutError as e:
            raise BLEConnectionError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except Exception as e:
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

        _LOGGER.info("Connected to %s", device.address)

    def _on_disconnect(self, client: BleakClient) -> None:
        """Log disconnects; reconnection is left to the caller."""
        _LOGGER.warning("Light %s disconnected", self.address)

    async def disconnect(self) -> None:
        """Disconnect from device."""
        if self._client and self._client.is_connected:
            try:
                _LOGGER.debug("Disconnecting from %s", self.address)
                await self._client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error during disconnect: %s", e)
            finally:
                self._client = None

    def bind_characteristic(self, uuid: str) -> BleakGATTCharacteristic:
        """Select the characteristic with the given UUID.

        Raises:
            BLEConnectionError: If not connected
            CharacteristicNotFoundError: If the device lacks the characteristic
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        characteristic = find_characteristic(self._client.services, uuid)
        _LOGGER.info("Identified light characteristic %s", characteristic.uuid)
        return characteristic

    async def write_without_response(
            self,
            characteristic: BleakGATTCharacteristic,
            data: bytes,
    ) -> None:
        """Write data to a characteristic, no acknowledgment expected.

        Raises:
            BLEConnectionError: If not connected
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        await self._client.write_gatt_char(characteristic, data, response=False)

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected
