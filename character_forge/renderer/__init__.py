"""Rendering subpackage.

Turns a :class:`~character_forge.character.Character` into a flat bitmap.
The renderer focuses on:

* Index-based recoloring of layer art to the character's shade sets.
* Per-layer nearest-neighbour scale, mirror and rotation so pixel art stays
    crisp at any export resolution.
* Bottom-to-top layering in a caller-chosen draw order.

Every step works on private copies: decoded asset images are shared between
parts and characters and are never written to, so independent exports can
run in parallel.

See :mod:`character_forge.renderer.recolor` for the palette lookup and
:mod:`character_forge.renderer.export` for composition.
"""

from .export import (
    DEFAULT_PORTRAIT_LAYERS,
    DEFAULT_TOKEN_LAYERS,
    CharacterRenderer,
    ExportSize,
    export_character,
)
from .recolor import build_recolor_table, recolor, recolored

__all__ = [
    "DEFAULT_PORTRAIT_LAYERS",
    "DEFAULT_TOKEN_LAYERS",
    "CharacterRenderer",
    "ExportSize",
    "export_character",
    "build_recolor_table",
    "recolor",
    "recolored",
]
