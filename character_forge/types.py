"""Common type aliases and enumerations.

``LayerKind`` and ``Region`` are the two closed sets every other module keys
on: layer kinds select which character part an image belongs to (and its
default draw order), regions select which shade set recolors a pixel.
"""

from enum import StrEnum
from typing import Iterator, Tuple


Size = Tuple[float, float]
"""Width and height of a canvas, in canvas units."""

PixelSize = Tuple[int, int]
"""Width and height of a bitmap, in pixels."""


class LayerKind(StrEnum):
    """Drawable character part categories.

    Definition order is the default bottom-to-top draw order. Values are the
    literal kind tokens used in asset filenames (``Name_Kind.png``).
    """

    HAIR_BACK = "HairBack"
    ARMOUR = "Armour"
    FACE = "Face"
    HAIR = "Hair"
    ACCESSORY = "Accessory"
    TOKEN = "Token"


def selectable_layer_kinds() -> Iterator[LayerKind]:
    """Yield the kinds offered for selection (hair-back follows hair)."""
    return (kind for kind in LayerKind if kind is not LayerKind.HAIR_BACK)


class Region(StrEnum):
    """Colourable regions of a character.

    ``OUTLINE`` is a pseudo-region: outline colors live in a per-layer table
    rather than a shade set, so it is skipped by palette-driven loops.
    """

    HAIR = "Hair"
    EYE_AND_BEARD = "Eye & Beard"
    SKIN = "Skin"
    METAL = "Metal"
    TRIM = "Trim"
    CLOTH = "Cloth"
    LEATHER = "Leather"
    ACCESSORY = "Accessory"
    OUTLINE = "Outline"


def paintable_regions() -> Iterator[Region]:
    """Yield every region that owns a shade set."""
    return (region for region in Region if region is not Region.OUTLINE)
