"""Cyclic color palette.

The palette is an ordered list with a cursor; order matters because the
editor steps through it. An empty palette never fails: every accessor
returns :data:`~character_forge.components.color.MAGENTA` so a missing
palette is visible on screen instead of crashing the caller.
"""

import logging
from typing import Iterable

from pyrsistent import pvector
from pyrsistent.typing import PVector

from character_forge.components.color import MAGENTA, ColorParseError, Rgba

logger = logging.getLogger(__name__)


class ColorPalette:
    """Ordered colors with a cursor.

    Attributes:
        colors: Palette entries in stepping order.
        index: Cursor position.
    """

    colors: PVector[Rgba]
    index: int

    def __init__(self, colors: Iterable[Rgba] = ()) -> None:
        self.colors = pvector(colors)
        self.index = 0

    @classmethod
    def from_hex(cls, values: Iterable[str]) -> "ColorPalette":
        """Build a palette from hex strings, skipping unparsable entries."""
        colors = []
        for value in values:
            try:
                colors.append(Rgba.from_hex(value))
            except ColorParseError as exc:
                logger.warning("Skipping palette entry: %s", exc)
        return cls(colors)

    def __len__(self) -> int:
        return len(self.colors)

    def current(self) -> Rgba:
        if not self.colors:
            logger.debug("current() on empty palette, returning sentinel")
            return MAGENTA
        return self.colors[self.index]

    def peek(self) -> Rgba:
        """Return the next color without moving the cursor."""
        if not self.colors:
            return MAGENTA
        return self.colors[(self.index + 1) % len(self.colors)]

    def next_cyclic(self) -> Rgba:
        """Advance the cursor (wrapping) and return the new current color."""
        if not self.colors:
            return MAGENTA
        self.index = (self.index + 1) % len(self.colors)
        return self.colors[self.index]
