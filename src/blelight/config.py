"""Startup configuration.

Defaults match the values the light ships with. Every field can be
overridden by a BLELIGHT_* environment variable (see ``ENV_VARS``) and then
by a command-line flag.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from .keepalive import DEFAULT_KEEP_ALIVE_INTERVAL
from .protocol import LIGHT_CHARACTERISTIC_UUID
from .server import DEFAULT_HOST, DEFAULT_PORT

_LOGGER = logging.getLogger(__name__)

DEFAULT_ADDRESS = "d7313030344c"

# field name -> environment variable
ENV_VARS = {
    "address": "BLELIGHT_ADDRESS",
    "characteristic_uuid": "BLELIGHT_CHARACTERISTIC",
    "keep_alive_interval": "BLELIGHT_KEEP_ALIVE_INTERVAL",
    "scan_timeout": "BLELIGHT_SCAN_TIMEOUT",
    "connect_timeout": "BLELIGHT_CONNECT_TIMEOUT",
    "connect_attempts": "BLELIGHT_CONNECT_ATTEMPTS",
    "write_timeout": "BLELIGHT_WRITE_TIMEOUT",
    "http_host": "BLELIGHT_HTTP_HOST",
    "http_port": "BLELIGHT_HTTP_PORT",
}


@dataclass(frozen=True)
class BridgeConfig:
    """Light bridge configuration."""

    # Light
    address: str = DEFAULT_ADDRESS
    characteristic_uuid: str = LIGHT_CHARACTERISTIC_UUID

    # Timing (seconds); scan_timeout 0 waits forever
    keep_alive_interval: float = DEFAULT_KEEP_ALIVE_INTERVAL
    scan_timeout: float = 30.0
    connect_timeout: float = 10.0
    connect_attempts: int = 1
    write_timeout: float = 5.0

    # HTTP
    http_host: str = DEFAULT_HOST
    http_port: int = DEFAULT_PORT

    @property
    def scan_timeout_or_none(self) -> float | None:
        """scan_timeout as passed to the locator (None = unbounded)."""
        return self.scan_timeout or None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BridgeConfig:
        """Build config from BLELIGHT_* environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        if environ is None:
            environ = os.environ

        overrides: dict[str, Any] = {}
        types = {f.name: f.type for f in fields(cls)}
        for name, var in ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            overrides[name] = _convert(name, var, raw, types[name])
            _LOGGER.debug("%s overridden by %s", name, var)

        return cls(**overrides)

    def with_overrides(self, **overrides: Any) -> BridgeConfig:
        """Copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: On the first invalid field
        """
        if not self.address.strip():
            raise ValueError("address must not be empty")
        if self.keep_alive_interval <= 0:
            raise ValueError(
                f"keep_alive_interval must be positive, got {self.keep_alive_interval}"
            )
        if self.scan_timeout < 0:
            raise ValueError(f"scan_timeout must not be negative, got {self.scan_timeout}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be positive, got {self.connect_timeout}")
        if self.connect_attempts < 1:
            raise ValueError(f"connect_attempts must be >= 1, got {self.connect_attempts}")
        if self.write_timeout <= 0:
            raise ValueError(f"write_timeout must be positive, got {self.write_timeout}")
        if not 0 < self.http_port <= 65535:
            raise ValueError(f"http_port out of range: {self.http_port} (must be 1-65535)")


def _convert(name: str, var: str, raw: str, type_name: Any) -> Any:
    # Field types are strings under postponed annotations
    type_name = getattr(type_name, "__name__", type_name)
    try:
        if type_name == "int":
            return int(raw)
        if type_name == "float":
            return float(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {var}: {raw!r}") from e
    return raw
