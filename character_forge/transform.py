"""Character part mutators.

Every function here edits a :class:`Character` in place and upholds the
hair / hair-back contract: whenever the hair layer is placed, moved, scaled,
rotated or flipped, the hair-back layer (if present) receives the same
scale, rotation and flip and the same positional delta. Calls that target
``HairBack`` directly are redirected to ``Hair`` so the pair never drifts.

Placement follows the pixel-art convention of integer scales: a layer is
scaled by ``floor(canvas height / native size)`` (at least 1) so it is
never shrunk below its native resolution.
"""

import math
from dataclasses import replace
from typing import Iterable, Mapping, Optional, Tuple

from character_forge.character import Character
from character_forge.components import Asset, CharacterPart, Point
from character_forge.types import LayerKind, Size

NATIVE_PORTRAIT_SIZE = 96
NATIVE_TOKEN_SIZE = 64


def integer_scale(canvas_height: float, native_size: int) -> float:
    """Largest whole-number scale that fits ``native_size`` into the canvas."""
    return float(max(math.floor(canvas_height / native_size), 1))


def default_placement(
    kind: LayerKind, canvas_size: Size, native_size: int = NATIVE_PORTRAIT_SIZE
) -> Tuple[Point, float]:
    """Return the default (position, scale) for a freshly selected layer.

    Layers are centred on the canvas, except armour which sits on the bottom
    edge.
    """
    width, height = canvas_size
    scale = integer_scale(height, native_size)
    position = Point(width / 2.0, height / 2.0)
    if kind is LayerKind.ARMOUR:
        position = Point(position.x, height - native_size * scale / 2.0)
    return position, scale


def _target(kind: LayerKind) -> LayerKind:
    return LayerKind.HAIR if kind is LayerKind.HAIR_BACK else kind


def _sync_hair_back(character: Character, dx: float = 0.0, dy: float = 0.0) -> None:
    hair = character.get_part(LayerKind.HAIR)
    hair_back = character.get_part(LayerKind.HAIR_BACK)
    if hair is None or hair_back is None:
        return
    character.set_part(
        LayerKind.HAIR_BACK,
        replace(
            hair_back,
            position=hair_back.position.translated(dx, dy),
            scale=hair.scale,
            rotation=hair.rotation,
            flipped=hair.flipped,
        ),
    )


def place_part(
    character: Character,
    kind: LayerKind,
    part: CharacterPart,
    hair_back_library: Optional[Mapping[str, Asset]] = None,
) -> None:
    """Set ``part`` as the ``kind`` layer.

    Placing hair also replaces the hair-back layer: the companion asset (when
    declared and found in ``hair_back_library``) is placed with the hair's
    transform, otherwise any existing hair-back is removed.
    """
    character.set_part(kind, part)
    if kind is not LayerKind.HAIR:
        return

    companion_id = part.asset.companion_id
    companion = None
    if companion_id is not None and hair_back_library is not None:
        companion = hair_back_library.get(companion_id)
    if companion is None:
        character.remove_part(LayerKind.HAIR_BACK)
    else:
        character.set_part(LayerKind.HAIR_BACK, replace(part, asset=companion))


def place_asset(
    character: Character,
    asset: Asset,
    canvas_size: Size,
    hair_back_library: Optional[Mapping[str, Asset]] = None,
) -> None:
    """Select ``asset`` with its default placement.

    Selecting the asset that is already on the character deselects it
    instead. Token assets are placed against their own (token) canvas.
    """
    kind = asset.kind
    current = character.get_part(kind)
    if current is not None and current.asset == asset:
        remove_asset(character, kind)
        return

    native = NATIVE_TOKEN_SIZE if kind is LayerKind.TOKEN else NATIVE_PORTRAIT_SIZE
    position, scale = default_placement(kind, canvas_size, native)
    part = CharacterPart(asset=asset, position=position, scale=scale)
    place_part(character, kind, part, hair_back_library)


def remove_asset(character: Character, kind: LayerKind) -> None:
    """Remove the ``kind`` layer; removing hair also removes hair-back."""
    kind = _target(kind)
    character.remove_part(kind)
    if kind is LayerKind.HAIR:
        character.remove_part(LayerKind.HAIR_BACK)


def move_part(character: Character, kind: LayerKind, dx: float, dy: float) -> None:
    kind = _target(kind)
    part = character.get_part(kind)
    if part is None:
        return
    character.set_part(kind, replace(part, position=part.position.translated(dx, dy)))
    if kind is LayerKind.HAIR:
        _sync_hair_back(character, dx, dy)


def scale_part(character: Character, kind: LayerKind, factor: float) -> None:
    """Multiply the layer's scale by ``factor`` around its centre."""
    kind = _target(kind)
    part = character.get_part(kind)
    if part is None:
        return
    character.set_part(kind, replace(part, scale=part.scale * factor))
    if kind is LayerKind.HAIR:
        _sync_hair_back(character)


def rotate_part(character: Character, kind: LayerKind, radians: float) -> None:
    """Rotate the layer clockwise by ``radians``; rotation stays in [0, 2*pi)."""
    kind = _target(kind)
    part = character.get_part(kind)
    if part is None:
        return
    rotation = (part.rotation + radians) % math.tau
    character.set_part(kind, replace(part, rotation=rotation))
    if kind is LayerKind.HAIR:
        _sync_hair_back(character)


def flip_part(character: Character, kind: LayerKind) -> None:
    kind = _target(kind)
    part = character.get_part(kind)
    if part is None:
        return
    character.set_part(kind, replace(part, flipped=not part.flipped))
    if kind is LayerKind.HAIR:
        _sync_hair_back(character)


def scale_parts(
    character: Character, factor: float, kinds: Iterable[LayerKind]
) -> None:
    """
    Rescale positions and scales of ``kinds`` by ``factor``, e.g. after the
    authoring canvas was resized. Hair-back follows hair.
    """
    targets = set(kinds)
    if LayerKind.HAIR in targets:
        targets.add(LayerKind.HAIR_BACK)
    for kind in targets:
        part = character.get_part(kind)
        if part is None:
            continue
        character.set_part(
            kind,
            replace(
                part,
                position=Point(part.position.x * factor, part.position.y * factor),
                scale=part.scale * factor,
            ),
        )
