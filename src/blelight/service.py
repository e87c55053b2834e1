"""Wire the light, keep-alive loop and HTTP server together."""

from __future__ import annotations

import logging

from .config import BridgeConfig
from .device import LightDevice
from .dispatcher import CommandDispatcher
from .keepalive import KeepAliveTask
from .server import LightServer, create_app

_LOGGER = logging.getLogger(__name__)


async def run_bridge(config: BridgeConfig) -> None:
    """Connect to the light and serve color requests until shutdown.

    Startup errors (light not found, connect failure, missing
    characteristic) propagate to the caller. On shutdown the keep-alive loop
    is stopped before the light is disconnected.
    """
    light = LightDevice(
        config.address,
        characteristic_uuid=config.characteristic_uuid,
        scan_timeout=config.scan_timeout_or_none,
        connect_timeout=config.connect_timeout,
        connect_attempts=config.connect_attempts,
        write_timeout=config.write_timeout,
    )

    async with light:
        keep_alive = KeepAliveTask(light.gateway, interval=config.keep_alive_interval)
        keep_alive.start()
        try:
            dispatcher = CommandDispatcher(light.gateway)
            server = LightServer(
                create_app(dispatcher),
                host=config.http_host,
                port=config.http_port,
            )
            await server.serve()
        finally:
            await keep_alive.stop()
            _LOGGER.info(
                "Frames sent: %d, write failures: %d",
                light.gateway.frames_sent,
                light.gateway.write_failures,
            )

    _LOGGER.info("Done")
