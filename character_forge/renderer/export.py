from enum import Enum
import logging
from typing import Optional, Sequence, Tuple

from PIL import Image

from character_forge.character import Character
from character_forge.components import CharacterPart
from character_forge.renderer.recolor import recolored
from character_forge.types import LayerKind, PixelSize, Size
from character_forge.utils.image import (
    crop_center,
    mirror,
    overlay,
    resize_nearest,
    rotate_about_center,
    round_half_up,
    transparent_canvas,
)

logger = logging.getLogger(__name__)


DEFAULT_PORTRAIT_LAYERS: Tuple[LayerKind, ...] = (
    LayerKind.HAIR_BACK,
    LayerKind.ARMOUR,
    LayerKind.FACE,
    LayerKind.HAIR,
    LayerKind.ACCESSORY,
)
DEFAULT_TOKEN_LAYERS: Tuple[LayerKind, ...] = (LayerKind.TOKEN,)


class ExportSize(Enum):
    """Output resolution presets for portrait and token exports."""

    HALF = "Half"
    ORIGINAL = "Original"
    DOUBLE = "Double"

    @property
    def portrait(self) -> PixelSize:
        return {
            ExportSize.HALF: (48, 48),
            ExportSize.ORIGINAL: (96, 96),
            ExportSize.DOUBLE: (192, 192),
        }[self]

    @property
    def token(self) -> PixelSize:
        return {
            ExportSize.HALF: (32, 32),
            ExportSize.ORIGINAL: (64, 64),
            ExportSize.DOUBLE: (128, 128),
        }[self]

    def display_name(self) -> str:
        (pw, ph), (tw, th) = self.portrait, self.token
        return f"{self.value} ({pw}x{ph}) ({tw}x{th})"


def render_layer(
    character: Character,
    kind: LayerKind,
    part: CharacterPart,
    export_scale: float,
) -> Optional[Image.Image]:
    """
    Recolor, scale, mirror and rotate one part into a private image.
    Returns None when the part has no pixels or scales down to nothing.
    """
    source = part.asset.image
    if source is None:
        logger.debug("Skipping %s: asset %s has no pixel data", kind, part.asset.id)
        return None

    layer = recolored(source, kind, character.colors, character.outlines)

    scale = part.scale * export_scale
    width = round_half_up(layer.width * scale)
    height = round_half_up(layer.height * scale)
    if width <= 0 or height <= 0:
        logger.debug("Skipping %s: scaled to %dx%d", kind, width, height)
        return None

    layer = resize_nearest(layer, (width, height))
    if part.flipped:
        layer = mirror(layer)
    return rotate_about_center(layer, part.rotation)


def export_character(
    character: Character,
    layers: Sequence[LayerKind],
    output_size: PixelSize,
    canvas_size: Size,
) -> Optional[Image.Image]:
    """
    Flatten ``character``'s layers into one RGBA image of ``output_size``.

    ``layers`` selects which parts are drawn and their bottom-to-top order.
    Part positions and scales are in the coordinate space of ``canvas_size``
    (the authoring canvas) and are rescaled by ``output width / canvas
    width``. Returns None when the authoring canvas has no area.
    """
    canvas_w, canvas_h = canvas_size
    if canvas_w == 0 or canvas_h == 0:
        return None

    out_w, out_h = output_size
    if out_w < 0 or out_h < 0:
        raise ValueError(f"Invalid output size: {output_size}")

    # Oversized working buffer so rotated/scaled layers past the edges are not
    # clipped before the final crop.
    buffer_dim = max(out_w, out_h) * 2
    buffer = transparent_canvas((buffer_dim, buffer_dim))
    buffer_center = buffer_dim // 2

    export_scale = out_w / canvas_w

    for kind in layers:
        part = character.get_part(kind)
        if part is None:
            continue

        layer = render_layer(character, kind, part, export_scale)
        if layer is None:
            continue

        # Origin uses the same truncated halves as crop_center.
        left = (
            (buffer_center - out_w // 2)
            + part.position.x * export_scale
            - layer.width / 2.0
        )
        top = (
            (buffer_center - out_h // 2)
            + part.position.y * export_scale
            - layer.height / 2.0
        )
        overlay(buffer, layer, int(left), int(top))

    return crop_center(buffer, output_size)


class CharacterRenderer:
    layers: Tuple[LayerKind, ...]
    output_size: PixelSize
    canvas_size: Size

    def __init__(
        self,
        layers: Sequence[LayerKind] = DEFAULT_PORTRAIT_LAYERS,
        output_size: PixelSize = ExportSize.ORIGINAL.portrait,
        canvas_size: Optional[Size] = None,
    ):
        self.layers = tuple(layers)
        self.output_size = output_size
        self.canvas_size = canvas_size or (
            float(output_size[0]),
            float(output_size[1]),
        )

    @classmethod
    def portrait(
        cls, export_size: ExportSize, canvas_size: Optional[Size] = None
    ) -> "CharacterRenderer":
        return cls(DEFAULT_PORTRAIT_LAYERS, export_size.portrait, canvas_size)

    @classmethod
    def token(
        cls, export_size: ExportSize, canvas_size: Optional[Size] = None
    ) -> "CharacterRenderer":
        return cls(DEFAULT_TOKEN_LAYERS, export_size.token, canvas_size)

    def render(self, character: Character) -> Optional[Image.Image]:
        return export_character(
            character,
            layers=self.layers,
            output_size=self.output_size,
            canvas_size=self.canvas_size,
        )
