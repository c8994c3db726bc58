"""Index-based layer recoloring.

Layer art encodes a small fixed palette in the red channel: red values
``0, 10, 20, ..., 200`` select slots ``0..20`` of a lookup table (``red // 10``).
Green and blue are unused by the encoding and alpha is the opacity mask.
Which shade lands in which slot depends on the layer kind:

====== ============================ =================================
Slots  Face / Accessory layers      Every other layer
====== ============================ =================================
0      outline for the layer kind   outline for the layer kind
1-3    eye & beard light/mid/dark   hair light/mid/dark
4-8    skin, five shades            skin, five shades
9-11   accessory light/mid/dark     metal light/mid/dark
12-14  (unmapped)                   trim light/mid/dark
15-17  (unmapped)                   cloth light/mid/dark
18-20  (unmapped)                   leather light/mid/dark
====== ============================ =================================

A visible pixel whose slot is mapped takes all four channels of the mapped
color (the target's alpha replaces the source alpha). Transparent pixels and
pixels with an unmapped slot, including any red value >= 210, pass through.
"""

import logging
from typing import List, Mapping, Optional, Sequence

import numpy as np
from PIL import Image

from character_forge.components import Outlines, Rgba, ShadeSet
from character_forge.types import LayerKind, Region
from character_forge.utils.image import BoolArray, UInt8Array, rgba_array

logger = logging.getLogger(__name__)

RECOLOR_SLOTS = 21
RED_STEP = 10

OUTLINE_SLOT = 0
MULTI_SLOTS = (1, 2, 3)
SKIN_SLOTS = (4, 5, 6, 7, 8)
ACCESSORY_METAL_SLOTS = (9, 10, 11)
TRIM_SLOTS = (12, 13, 14)
CLOTH_SLOTS = (15, 16, 17)
LEATHER_SLOTS = (18, 19, 20)

RecolorTable = List[Optional[Rgba]]

_FACE_LIKE = frozenset({LayerKind.FACE, LayerKind.ACCESSORY})


def _three_shades(shades: ShadeSet) -> Sequence[Rgba]:
    return (shades.lighter, shades.neutral, shades.darker)


def _five_shades(shades: ShadeSet) -> Sequence[Rgba]:
    return (
        shades.lighter,
        shades.neutral,
        shades.darker,
        shades.darker2,
        shades.darker3,
    )


def build_recolor_table(
    kind: LayerKind,
    colors: Mapping[Region, ShadeSet],
    outlines: Outlines,
) -> RecolorTable:
    """Return the 21-slot lookup table for a layer of ``kind``.

    Regions missing from ``colors`` leave their slots unmapped.
    """
    if kind in _FACE_LIKE:
        layout = [
            (Region.EYE_AND_BEARD, MULTI_SLOTS),
            (Region.SKIN, SKIN_SLOTS),
            (Region.ACCESSORY, ACCESSORY_METAL_SLOTS),
        ]
    else:
        layout = [
            (Region.HAIR, MULTI_SLOTS),
            (Region.SKIN, SKIN_SLOTS),
            (Region.METAL, ACCESSORY_METAL_SLOTS),
            (Region.TRIM, TRIM_SLOTS),
            (Region.CLOTH, CLOTH_SLOTS),
            (Region.LEATHER, LEATHER_SLOTS),
        ]

    table: RecolorTable = [None] * RECOLOR_SLOTS
    table[OUTLINE_SLOT] = outlines.get(kind)
    for region, slots in layout:
        shades = colors.get(region)
        if shades is None:
            logger.debug("No shades for %s, leaving slots %s unmapped", region, slots)
            continue
        picks = _five_shades(shades) if len(slots) == 5 else _three_shades(shades)
        for slot, color in zip(slots, picks):
            table[slot] = color
    return table


def recolor(
    image: Image.Image,
    kind: LayerKind,
    colors: Mapping[Region, ShadeSet],
    outlines: Outlines,
) -> None:
    """Remap ``image``'s index-encoded pixels in place.

    ``image`` must be an RGBA image the caller owns. Decoded asset images are
    shared between parts and characters; use :func:`recolored` (or copy
    first) when the source must survive.
    """
    table = build_recolor_table(kind, colors, outlines)

    # Pad so every possible red value (0..255 -> 0..25) indexes the LUT.
    max_slot = 255 // RED_STEP + 1
    lut: UInt8Array = np.zeros((max_slot, 4), dtype=np.uint8)
    mapped: BoolArray = np.zeros(max_slot, dtype=np.bool_)
    for slot, color in enumerate(table):
        if color is not None:
            lut[slot] = color.as_tuple()
            mapped[slot] = True

    arr = rgba_array(image)
    slots = arr[..., 0] // RED_STEP
    target: BoolArray = (arr[..., 3] > 0) & mapped[slots]
    if not target.any():
        return

    arr[target] = lut[slots[target]]
    image.paste(Image.fromarray(arr), (0, 0))


def recolored(
    image: Image.Image,
    kind: LayerKind,
    colors: Mapping[Region, ShadeSet],
    outlines: Outlines,
) -> Image.Image:
    """Return a recolored private RGBA copy of ``image``; the source is untouched.

    Non-RGBA sources (e.g. palette-mode PNGs) are converted on the way.
    """
    out = image.copy() if image.mode == "RGBA" else image.convert("RGBA")
    recolor(out, kind, colors, outlines)
    return out
