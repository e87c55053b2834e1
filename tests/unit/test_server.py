"""Test the HTTP endpoint end to end, down to the bytes written."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from blelight.dispatcher import CommandDispatcher
from blelight.gateway import LightLink, TransmissionGateway
from blelight.protocol import build_light_command
from blelight.server import LightServer, create_app


class _FakeConnection:
    def __init__(self, fail: bool = False):
        self.written: list[bytes] = []
        self.fail = fail

    async def write_without_response(self, characteristic, data: bytes) -> None:
        if self.fail:
            raise OSError("link lost")
        self.written.append(data)


@pytest.fixture
def radio() -> _FakeConnection:
    return _FakeConnection()


@pytest.fixture
def client(radio) -> TestClient:
    link = LightLink(address="d7313030344c", connection=radio, characteristic=object())
    dispatcher = CommandDispatcher(TransmissionGateway(link))
    return TestClient(create_app(dispatcher))


def test_set_red(client, radio) -> None:
    response = client.get("/light/ff0000")

    assert response.status_code == 200
    assert response.text == "Color set"
    assert radio.written == [build_light_command(0xFF, 0x00, 0x00)]
    assert radio.written[0][:14] == bytes.fromhex("33051501ff00000000000000ff0f")


def test_uppercase_and_short_forms(client, radio) -> None:
    assert client.get("/light/00FF00").status_code == 200
    assert client.get("/light/00f").status_code == 200

    assert radio.written == [
        build_light_command(0, 255, 0),
        build_light_command(0, 0, 255),
    ]


def test_invalid_color_is_400_and_writes_nothing(client, radio) -> None:
    response = client.get("/light/zz0000")

    assert response.status_code == 400
    assert "Invalid hex color" in response.json()["detail"]
    assert radio.written == []


def test_write_failure_is_503() -> None:
    link = LightLink(address="d7313030344c", connection=_FakeConnection(fail=True), characteristic=object())
    client = TestClient(create_app(CommandDispatcher(TransmissionGateway(link))))

    response = client.get("/light/ff0000")

    assert response.status_code == 503
    assert "link lost" in response.json()["detail"]


def test_unknown_path_is_404(client, radio) -> None:
    assert client.get("/light").status_code == 404
    assert client.get("/color/ff0000").status_code == 404
    assert radio.written == []


def test_light_server_config() -> None:
    server = LightServer(create_app(CommandDispatcher(None)), host="0.0.0.0", port=8080)  # type: ignore[arg-type]

    assert server.server.config.host == "0.0.0.0"
    assert server.server.config.port == 8080
    assert server.server.config.access_log is False


@pytest.mark.asyncio
async def test_light_server_serve_runs_uvicorn(monkeypatch) -> None:
    server = LightServer(create_app(CommandDispatcher(None)))  # type: ignore[arg-type]
    calls: list[str] = []

    async def _fake_serve() -> None:
        calls.append("serve")

    monkeypatch.setattr(server.server, "serve", _fake_serve)

    await server.serve()

    assert calls == ["serve"]
    assert not hasattr(server, "stop")
