"""character_forge.components
=================================

Aggregate import surface for the value types a character is built from.

Colors, shade sets, assets, parts and outline tables are immutable
dataclasses; changing one means building a new instance (``dataclasses.replace``
or the ``with_*`` / ``set`` helpers) and storing it back on the
:class:`~character_forge.character.Character`. ``ColorPalette`` is the one
stateful exception: it carries a cursor the editor steps through.

Downstream code can import everything from one place, e.g.::

    from character_forge.components import Asset, CharacterPart, Point, Rgba

"""

from .asset import Asset, AssetParseError, parse_filename
from .color import (
    BLACK,
    MAGENTA,
    TRANSPARENT,
    WHITE,
    ColorParseError,
    Rgba,
)
from .outlines import DEFAULT_OUTLINE_COLOR, Outlines
from .palette import ColorPalette
from .part import CharacterPart, Point
from .shades import ShadeSet, derive_shades

__all__ = [
    # Colors
    "BLACK",
    "MAGENTA",
    "TRANSPARENT",
    "WHITE",
    "ColorParseError",
    "Rgba",
    "ShadeSet",
    "derive_shades",
    "ColorPalette",
    "DEFAULT_OUTLINE_COLOR",
    "Outlines",
    # Layers
    "Asset",
    "AssetParseError",
    "parse_filename",
    "CharacterPart",
    "Point",
]
