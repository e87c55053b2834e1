"""Periodic keep-alive traffic so the light does not drop an idle link."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import WriteError
from .protocol import build_keep_alive_command

if TYPE_CHECKING:
    from .gateway import TransmissionGateway

_LOGGER = logging.getLogger(__name__)

DEFAULT_KEEP_ALIVE_INTERVAL = 2.0


class KeepAliveState(Enum):
    """Keep-alive loop states."""

    IDLE = "idle"
    SENDING = "sending"


class KeepAliveTask:
    """Background loop sending a keep-alive frame every interval.

    Usage:
        keep_alive = KeepAliveTask(gateway, interval=2.0)
        keep_alive.start()
        ...
        await keep_alive.stop()
    """

    def __init__(
            self,
            gateway: TransmissionGateway,
            interval: float = DEFAULT_KEEP_ALIVE_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.gateway = gateway
        self.interval = interval
        self.state = KeepAliveState.IDLE
        self.sent = 0
        self.failed = 0

        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run(self) -> None:
        """Send keep-alive frames until stop() is called.

        Write failures are logged and the loop carries on; the next tick gets
        another chance.
        """
        frame = build_keep_alive_command()
        while not self._stop_event.is_set():
            # Idle until the interval elapses or stop() is called
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval)
                break
            except asyncio.TimeoutError:
                pass

            self.state = KeepAliveState.SENDING
            try:
                await self.gateway.send(frame)
                self.sent += 1
            except WriteError as e:
                self.failed += 1
                _LOGGER.warning("Keep-alive not delivered: %s", e)
            finally:
                self.state = KeepAliveState.IDLE

    def start(self) -> None:
        """Start the loop as a background task."""
        if self.is_running:
            return
        _LOGGER.info("Starting keep alive loop (every %.1fs)", self.interval)
        self._stop_event.clear()
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Stop the loop and wait for it to finish."""
        self._stop_event.set()
        if self._task is None:
            return
        try:
            await asyncio.wait_for(self._task, timeout=self.interval + 5.0)
        except asyncio.TimeoutError:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        except Exception:
            _LOGGER.exception("Keep alive loop failed")
        finally:
            self._task = None
        _LOGGER.info("Keep alive loop stopped (sent=%d, failed=%d)", self.sent, self.failed)
