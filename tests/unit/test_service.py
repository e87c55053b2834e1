"""Test bridge wiring and shutdown order."""

from __future__ import annotations

import pytest

from blelight import service
from blelight.config import BridgeConfig
from blelight.exceptions import DeviceNotFoundError


class _FakeGateway:
    frames_sent = 0
    write_failures = 0


class _FakeLight:
    instances: list[_FakeLight] = []

    def __init__(self, address, events, connect_error=None, **kwargs):
        self.address = address
        self.kwargs = kwargs
        self.events = events
        self.connect_error = connect_error
        self.gateway = _FakeGateway()
        _FakeLight.instances.append(self)

    async def __aenter__(self):
        if self.connect_error:
            raise self.connect_error
        self.events.append("connect")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.events.append("disconnect")


@pytest.fixture
def events(monkeypatch) -> list[str]:
    recorded: list[str] = []
    _FakeLight.instances = []

    class _FakeKeepAlive:
        def __init__(self, gateway, interval):
            self.interval = interval

        def start(self):
            recorded.append(f"keepalive-start:{self.interval}")

        async def stop(self):
            recorded.append("keepalive-stop")

    class _FakeServer:
        def __init__(self, app, host, port):
            self.host = host
            self.port = port

        async def serve(self):
            recorded.append(f"serve:{self.host}:{self.port}")

    monkeypatch.setattr(
        service, "LightDevice", lambda address, **kw: _FakeLight(address, recorded, **kw)
    )
    monkeypatch.setattr(service, "KeepAliveTask", _FakeKeepAlive)
    monkeypatch.setattr(service, "LightServer", _FakeServer)
    return recorded


@pytest.mark.asyncio
async def test_run_bridge_order(events) -> None:
    config = BridgeConfig(keep_alive_interval=0.5, http_port=4040, scan_timeout=0)

    await service.run_bridge(config)

    assert events == [
        "connect",
        "keepalive-start:0.5",
        "serve:127.0.0.1:4040",
        "keepalive-stop",
        "disconnect",
    ]
    light = _FakeLight.instances[0]
    assert light.address == "d7313030344c"
    assert light.kwargs["scan_timeout"] is None


@pytest.mark.asyncio
async def test_run_bridge_startup_error_propagates(monkeypatch, events) -> None:
    monkeypatch.setattr(
        service,
        "LightDevice",
        lambda address, **kw: _FakeLight(
            address, events, connect_error=DeviceNotFoundError("nope"), **kw
        ),
    )

    with pytest.raises(DeviceNotFoundError):
        await service.run_bridge(BridgeConfig())

    assert events == []
