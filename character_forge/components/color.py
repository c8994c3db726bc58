"""8-bit RGBA color value.

Colors are immutable and hashable so they can live in persistent maps and
palette vectors. Shade derivation (``brighter`` / ``darker``) scales the RGB
channels by :data:`COLOR_ADJUSTMENT_FACTOR` and never touches alpha.
"""

import string
from dataclasses import dataclass
from typing import Tuple

COLOR_ADJUSTMENT_FACTOR = 0.7

# Smallest channel value that still visibly brightens when divided by the factor.
MIN_BRIGHT = int(1.0 / (1.0 - COLOR_ADJUSTMENT_FACTOR))

_HEX_DIGITS = frozenset(string.hexdigits)


class ColorParseError(ValueError):
    """Raised when hex color text cannot be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Invalid hex color {text!r}: {reason}")
        self.text = text


@dataclass(frozen=True)
class Rgba:
    """Four 8-bit channels.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
        a: Alpha channel (0-255), 255 is opaque.
    """

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, text: str) -> "Rgba":
        """Parse ``RRGGBB`` or ``RRGGBBAA`` with an optional leading ``#``."""
        digits = text[1:] if text.startswith("#") else text
        if len(digits) not in (6, 8):
            raise ColorParseError(text, f"invalid hex length: {len(digits)}")
        if not all(c in _HEX_DIGITS for c in digits):
            raise ColorParseError(text, "non-hex characters")
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        return cls(*channels)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def brighter(self) -> "Rgba":
        """Return a lighter shade.

        Pure black becomes a uniform dark grey instead of staying black, and
        channels in ``(0, MIN_BRIGHT)`` are raised to ``MIN_BRIGHT`` before
        scaling so very dark colors still move.
        """
        if self.r == 0 and self.g == 0 and self.b == 0:
            return Rgba(MIN_BRIGHT, MIN_BRIGHT, MIN_BRIGHT, self.a)

        def lift(channel: int) -> int:
            if 0 < channel < MIN_BRIGHT:
                channel = MIN_BRIGHT
            return int(min(channel / COLOR_ADJUSTMENT_FACTOR, 255.0))

        return Rgba(lift(self.r), lift(self.g), lift(self.b), self.a)

    def darker(self) -> "Rgba":
        """Return a darker shade (each RGB channel scaled and truncated)."""
        return Rgba(
            int(self.r * COLOR_ADJUSTMENT_FACTOR),
            int(self.g * COLOR_ADJUSTMENT_FACTOR),
            int(self.b * COLOR_ADJUSTMENT_FACTOR),
            self.a,
        )


BLACK = Rgba(0, 0, 0, 255)
WHITE = Rgba(255, 255, 255, 255)
TRANSPARENT = Rgba(0, 0, 0, 0)
MAGENTA = Rgba(255, 0, 255, 255)
