"""Test color request dispatch."""

from __future__ import annotations

import pytest

from blelight.dispatcher import CommandDispatcher
from blelight.exceptions import InvalidColorFormatError, WriteError
from blelight.models.color import RGBColor
from blelight.protocol import build_light_command


class _FakeGateway:
    def __init__(self, error: Exception | None = None):
        self.sent: list[bytes] = []
        self.error = error

    async def send(self, frame: bytes) -> None:
        if self.error:
            raise self.error
        self.sent.append(frame)


@pytest.mark.asyncio
async def test_set_color_hex_sends_light_frame() -> None:
    gateway = _FakeGateway()
    dispatcher = CommandDispatcher(gateway)

    color = await dispatcher.set_color_hex("ff8800")

    assert color == RGBColor(255, 136, 0)
    assert gateway.sent == [build_light_command(255, 136, 0)]


@pytest.mark.asyncio
async def test_invalid_hex_sends_nothing() -> None:
    gateway = _FakeGateway()
    dispatcher = CommandDispatcher(gateway)

    with pytest.raises(InvalidColorFormatError):
        await dispatcher.set_color_hex("zz0000")

    assert gateway.sent == []


@pytest.mark.asyncio
async def test_write_error_propagates() -> None:
    dispatcher = CommandDispatcher(_FakeGateway(error=WriteError("Write failed: gone")))

    with pytest.raises(WriteError, match="gone"):
        await dispatcher.set_color(RGBColor(0, 0, 255))
