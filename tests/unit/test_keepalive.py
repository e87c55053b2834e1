"""Test the keep-alive loop."""

from __future__ import annotations

import asyncio

import pytest

from blelight.exceptions import WriteError
from blelight.keepalive import KeepAliveState, KeepAliveTask
from blelight.protocol import build_keep_alive_command


class _FakeGateway:
    def __init__(self, failures: int = 0):
        self.sent: list[bytes] = []
        self.failures = failures

    async def send(self, frame: bytes) -> None:
        if self.failures:
            self.failures -= 1
            raise WriteError("Write failed: link lost")
        self.sent.append(frame)


async def _wait_for(condition, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


@pytest.mark.asyncio
async def test_sends_keep_alive_frames_until_stopped() -> None:
    gateway = _FakeGateway()
    task = KeepAliveTask(gateway, interval=0.01)

    task.start()
    assert task.is_running
    await _wait_for(lambda: len(gateway.sent) >= 3)
    await task.stop()

    assert not task.is_running
    assert task.state is KeepAliveState.IDLE
    assert set(gateway.sent) == {build_keep_alive_command()}
    assert task.sent == len(gateway.sent)

    # Nothing more after stop()
    count = len(gateway.sent)
    await asyncio.sleep(0.05)
    assert len(gateway.sent) == count


@pytest.mark.asyncio
async def test_write_failure_does_not_stop_loop() -> None:
    gateway = _FakeGateway(failures=2)
    task = KeepAliveTask(gateway, interval=0.01)

    task.start()
    await _wait_for(lambda: len(gateway.sent) >= 1)
    await task.stop()

    assert task.failed == 2
    assert task.sent >= 1


@pytest.mark.asyncio
async def test_first_frame_waits_one_interval() -> None:
    gateway = _FakeGateway()
    task = KeepAliveTask(gateway, interval=10.0)

    task.start()
    await asyncio.sleep(0.05)
    await task.stop()

    assert gateway.sent == []


@pytest.mark.asyncio
async def test_stop_without_start() -> None:
    task = KeepAliveTask(_FakeGateway(), interval=1.0)
    await task.stop()
    assert not task.is_running


@pytest.mark.parametrize("interval", [0, -1.0])
def test_rejects_non_positive_interval(interval) -> None:
    with pytest.raises(ValueError, match="interval must be positive"):
        KeepAliveTask(_FakeGateway(), interval=interval)


@pytest.mark.asyncio
async def test_stop_after_loop_crash_logs_and_returns(caplog) -> None:
    """An unexpected error in the loop is logged by stop(), not re-raised."""

    class _BrokenGateway:
        async def send(self, frame: bytes) -> None:
            raise RuntimeError("gateway bug")

    task = KeepAliveTask(_BrokenGateway(), interval=0.01)
    task.start()
    await _wait_for(lambda: not task.is_running)

    await task.stop()

    assert task._task is None
    assert "Keep alive loop failed" in caplog.text
    assert "gateway bug" in caplog.text
