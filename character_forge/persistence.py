"""Character save format.

Saved characters are canvas independent: positions are divided by the
authoring canvas width/height and scales by its height before saving, then
multiplied back against whatever canvas is current when loading. Portrait
layers use the portrait canvas; the token layer uses the token canvas.

The dict form is plain JSON data. Assets are stored by identity only (their
pixels are re-attached by the caller, see
:func:`character_forge.library.refresh_part_images`); colors are stored as
``#RRGGBBAA`` base colors and shade sets are re-derived on load.
"""

import copy
import json
from dataclasses import replace
from typing import Any, Dict

from pyrsistent import pmap

from character_forge.character import Character
from character_forge.components import (
    Asset,
    CharacterPart,
    Outlines,
    Point,
    Rgba,
    derive_shades,
)
from character_forge.types import LayerKind, Region, Size

PORTRAIT_KINDS = tuple(kind for kind in LayerKind if kind is not LayerKind.TOKEN)


def _rescale(
    character: Character,
    portrait_size: Size,
    token_size: Size,
    invert: bool,
) -> Character:
    out = copy.copy(character)
    groups = [(PORTRAIT_KINDS, portrait_size), ((LayerKind.TOKEN,), token_size)]

    for kinds, (width, height) in groups:
        if width <= 0 or height <= 0:
            continue
        for kind in kinds:
            part = out.get_part(kind)
            if part is None:
                continue
            if invert:
                position = Point(part.position.x * width, part.position.y * height)
                scale = part.scale * height
            else:
                position = Point(part.position.x / width, part.position.y / height)
                scale = part.scale / height
            out.set_part(kind, replace(part, position=position, scale=scale))
    return out


def normalize_character(
    character: Character, portrait_size: Size, token_size: Size
) -> Character:
    """Return a copy with positions/scales relative to the canvas sizes.

    Both canvases are required so a saved record never mixes normalized
    portrait layers with an absolute token layer. A canvas with no area
    leaves its layers untouched.
    """
    return _rescale(character, portrait_size, token_size, invert=False)


def denormalize_character(
    character: Character, portrait_size: Size, token_size: Size
) -> Character:
    """Return a copy with normalized positions/scales mapped onto the canvases."""
    return _rescale(character, portrait_size, token_size, invert=True)


# -------- dict / JSON --------


def _asset_to_dict(asset: Asset) -> Dict[str, Any]:
    return {
        "id": asset.id,
        "name": asset.name,
        "kind": str(asset.kind),
        "path": asset.path,
        "companion_id": asset.companion_id,
    }


def _asset_from_dict(data: Dict[str, Any]) -> Asset:
    return Asset(
        name=data["name"],
        kind=LayerKind(data["kind"]),
        path=data.get("path", ""),
        companion_id=data.get("companion_id"),
    )


def _part_to_dict(part: CharacterPart) -> Dict[str, Any]:
    return {
        "position": {"x": part.position.x, "y": part.position.y},
        "scale": part.scale,
        "rotation": part.rotation,
        "flipped": part.flipped,
        "asset": _asset_to_dict(part.asset),
    }


def _part_from_dict(data: Dict[str, Any]) -> CharacterPart:
    return CharacterPart(
        asset=_asset_from_dict(data["asset"]),
        position=Point(float(data["position"]["x"]), float(data["position"]["y"])),
        scale=float(data["scale"]),
        rotation=float(data["rotation"]),
        flipped=bool(data.get("flipped", False)),
    )


def character_to_dict(character: Character) -> Dict[str, Any]:
    return {
        "name": character.name,
        "parts": {
            str(kind): _part_to_dict(part) for kind, part in character.parts()
        },
        "colors": {
            str(region): shades.base.to_hex()
            for region, shades in character.colors.items()
        },
        "outlines": {
            str(kind): color.to_hex() for kind, color in character.outlines.colors.items()
        },
    }


def character_from_dict(data: Dict[str, Any]) -> Character:
    """Rebuild a character; missing colors and outlines keep their defaults.

    Raises ``ValueError`` (including ``ColorParseError``) or ``KeyError`` on a
    malformed record.
    """
    character = Character(name=data.get("name", ""))
    for kind_name, part_data in data.get("parts", {}).items():
        character.set_part(LayerKind(kind_name), _part_from_dict(part_data))

    colors = dict(character.colors)
    for region_name, hex_text in data.get("colors", {}).items():
        region = Region(region_name)
        if region is Region.OUTLINE:
            continue
        colors[region] = derive_shades(Rgba.from_hex(hex_text))
    character.colors = pmap(colors)

    outlines: Outlines = character.outlines
    for kind_name, hex_text in data.get("outlines", {}).items():
        outlines = outlines.set(LayerKind(kind_name), Rgba.from_hex(hex_text))
    character.outlines = outlines
    return character


def dumps(character: Character, **kwargs: Any) -> str:
    return json.dumps(character_to_dict(character), **kwargs)


def loads(text: str) -> Character:
    return character_from_dict(json.loads(text))
