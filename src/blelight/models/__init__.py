"""Data models for the BLE light."""

from .color import RGBColor, parse_hex_color

__all__ = [
    "RGBColor",
    "parse_hex_color",
]
