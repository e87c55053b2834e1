"""RGB color value parsed from caller-supplied hex strings."""

from __future__ import annotations

import re
from dataclasses import dataclass

from PIL import ImageColor

from ..exceptions import InvalidColorFormatError

# "rgb" or "rrggbb", optional leading "#"
_HEX_COLOR_RE = re.compile(r"#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def _check_u8(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of range: {value} (must be 0-255)")


@dataclass(frozen=True, slots=True)
class RGBColor:
    """One color as three 8-bit channel intensities."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        _check_u8("red", self.red)
        _check_u8("green", self.green)
        _check_u8("blue", self.blue)

    @classmethod
    def from_hex(cls, value: str) -> RGBColor:
        """Parse a hex color such as ``ff8800``, ``#FF8800`` or ``f80``.

        Raises:
            InvalidColorFormatError: If value is not a 3- or 6-digit hex color
        """
        if not isinstance(value, str) or not _HEX_COLOR_RE.fullmatch(value):
            raise InvalidColorFormatError(f"Invalid hex color: {value!r}")

        try:
            red, green, blue = ImageColor.getrgb("#" + value.lstrip("#"))[:3]
        except ValueError as e:
            raise InvalidColorFormatError(f"Invalid hex color: {value!r}") from e

        return cls(red, green, blue)

    def to_hex(self) -> str:
        """Lowercase ``rrggbb`` form without a leading ``#``."""
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue


def parse_hex_color(value: str) -> RGBColor:
    """Parse a hex color string into an RGBColor."""
    return RGBColor.from_hex(value)
