"""HTTP interface for setting the light color.

One endpoint, ``GET /light/{color}``, where color is a hex string such as
``ff8800``. Served with FastAPI on uvicorn.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from . import __version__
from .dispatcher import CommandDispatcher
from .exceptions import InvalidColorFormatError, WriteError

_LOGGER = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3030


def create_app(dispatcher: CommandDispatcher) -> FastAPI:
    """Create the FastAPI application bound to a dispatcher."""
    app = FastAPI(
        title="BLE Light Bridge",
        description="Set the color of a BLE RGB light",
        version=__version__,
    )
    app.state.dispatcher = dispatcher

    @app.get("/light/{color}", response_class=PlainTextResponse)
    async def set_light(color: str) -> str:
        """Set the light to a hex color (e.g. /light/ff8800)."""
        try:
            await dispatcher.set_color_hex(color)
        except InvalidColorFormatError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except WriteError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return "Color set"

    return app


class LightServer:
    """Runs the HTTP app on uvicorn."""

    def __init__(self, app: FastAPI, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        self.app = app
        self.host = host
        self.port = port

        config = uvicorn.Config(
            app,
            host=host,
            port=port,
            log_level="warning",  # Keep uvicorn quiet; our loggers cover requests
            access_log=False,
        )
        self.server = uvicorn.Server(config)

    async def serve(self) -> None:
        """Serve until uvicorn exits on SIGINT/SIGTERM."""
        _LOGGER.info("HTTP server listening on http://%s:%d", self.host, self.port)
        await self.server.serve()
        _LOGGER.info("HTTP server stopped")

