# tests/unit/test_export.py

import math
from typing import List

import pytest
from PIL import Image

from character_forge.character import Character
from character_forge.renderer import (
    DEFAULT_PORTRAIT_LAYERS,
    CharacterRenderer,
    ExportSize,
    export_character,
)
from character_forge.types import LayerKind, Region
from tests.test_utils import (
    UNMAPPED_RED,
    make_asset,
    make_character_with,
    make_layer_image,
    make_part,
    opaque_pixels,
)


def opaque_columns(image: Image.Image, row: int) -> List[int]:
    return [x for x in range(image.width) if image.getpixel((x, row))[3] > 0]


def test_zero_canvas_returns_none() -> None:
    character = make_character_with(LayerKind.FACE, make_layer_image())
    assert export_character(character, DEFAULT_PORTRAIT_LAYERS, (96, 96), (0, 96)) is None
    assert export_character(character, DEFAULT_PORTRAIT_LAYERS, (96, 96), (96, 0)) is None


def test_negative_output_rejected() -> None:
    with pytest.raises(ValueError):
        export_character(Character(), DEFAULT_PORTRAIT_LAYERS, (-1, 10), (10, 10))


def test_empty_character_is_transparent() -> None:
    out = export_character(Character(), DEFAULT_PORTRAIT_LAYERS, (96, 96), (96, 96))
    assert out is not None
    assert out.size == (96, 96)
    assert out.mode == "RGBA"
    assert opaque_pixels(out) == 0


def test_layer_centred_on_position() -> None:
    character = make_character_with(LayerKind.FACE, make_layer_image())
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert opaque_pixels(out) == 100
    assert opaque_columns(out, 50) == list(range(45, 55))
    assert out.getpixel((45, 45)) == (UNMAPPED_RED, 0, 0, 255)
    assert out.getpixel((44, 45))[3] == 0
    assert out.getpixel((45, 55))[3] == 0


def test_output_scales_with_canvas_ratio() -> None:
    character = make_character_with(LayerKind.FACE, make_layer_image())
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (200, 200), (100, 100))
    assert out is not None
    assert opaque_pixels(out) == 400
    assert opaque_columns(out, 100) == list(range(90, 110))


def test_part_scale_applies() -> None:
    character = make_character_with(LayerKind.FACE, make_layer_image(), scale=2.0)
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert opaque_pixels(out) == 400


def test_tiny_scale_is_skipped() -> None:
    character = make_character_with(LayerKind.FACE, make_layer_image(), scale=0.01)
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert opaque_pixels(out) == 0


def test_part_without_pixels_is_skipped() -> None:
    character = Character()
    character.set_part(LayerKind.FACE, make_part(make_asset("Bare", LayerKind.FACE)))
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (32, 32), (32, 32))
    assert out is not None
    assert opaque_pixels(out) == 0


def test_flip_mirrors_layer() -> None:
    image = Image.new("RGBA", (2, 1), (0, 0, 0, 0))
    image.putpixel((0, 0), (UNMAPPED_RED, 0, 0, 255))

    plain = make_character_with(LayerKind.FACE, image)
    out = export_character(plain, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert opaque_columns(out, 49) == [49]

    flipped = make_character_with(LayerKind.FACE, image, flipped=True)
    out = export_character(flipped, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert opaque_columns(out, 49) == [50]


def test_rotation_is_clockwise() -> None:
    image = Image.new("RGBA", (3, 3), (0, 0, 0, 0))
    image.putpixel((1, 0), (UNMAPPED_RED, 0, 0, 255))

    plain = make_character_with(LayerKind.FACE, image, position=(48.0, 48.0))
    out = export_character(plain, DEFAULT_PORTRAIT_LAYERS, (96, 96), (96, 96))
    assert out is not None
    assert out.getpixel((47, 46))[3] == 255

    rotated = make_character_with(
        LayerKind.FACE, image, position=(48.0, 48.0), rotation=math.pi / 2
    )
    out = export_character(rotated, DEFAULT_PORTRAIT_LAYERS, (96, 96), (96, 96))
    assert out is not None
    assert opaque_pixels(out) == 1
    assert out.getpixel((48, 47))[3] == 255


def test_odd_output_size() -> None:
    character = make_character_with(
        LayerKind.FACE, make_layer_image((1, 1)), position=(2.5, 2.5)
    )
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (5, 5), (5, 5))
    assert out is not None
    assert out.size == (5, 5)
    assert opaque_pixels(out) == 1
    assert out.getpixel((2, 2))[3] == 255


def test_layers_drawn_bottom_to_top() -> None:
    character = Character()
    armour = make_asset("A", LayerKind.ARMOUR, make_layer_image(fill=(UNMAPPED_RED, 1, 0, 255)))
    face = make_asset("F", LayerKind.FACE, make_layer_image(fill=(UNMAPPED_RED, 2, 0, 255)))
    character.set_part(LayerKind.ARMOUR, make_part(armour))
    character.set_part(LayerKind.FACE, make_part(face))

    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert out.getpixel((50, 50)) == (UNMAPPED_RED, 2, 0, 255)

    reordered = [LayerKind.FACE, LayerKind.ARMOUR]
    out = export_character(character, reordered, (100, 100), (100, 100))
    assert out is not None
    assert out.getpixel((50, 50)) == (UNMAPPED_RED, 1, 0, 255)


def test_unlisted_layers_are_not_drawn() -> None:
    character = make_character_with(LayerKind.TOKEN, make_layer_image())
    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))
    assert out is not None
    assert opaque_pixels(out) == 0


def test_export_recolors_without_touching_source() -> None:
    source = make_layer_image((4, 4), (0, 0, 0, 255))
    before = source.tobytes()
    character = make_character_with(LayerKind.FACE, source)

    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))

    assert out is not None
    assert source.tobytes() == before
    outline = character.outline_color(LayerKind.FACE).as_tuple()
    assert out.getpixel((50, 50)) == outline


@pytest.mark.parametrize(
    "size, label",
    [
        (ExportSize.HALF, "Half (48x48) (32x32)"),
        (ExportSize.ORIGINAL, "Original (96x96) (64x64)"),
        (ExportSize.DOUBLE, "Double (192x192) (128x128)"),
    ],
)
def test_export_size_presets(size: ExportSize, label: str) -> None:
    assert size.display_name() == label
    assert size.portrait[0] == size.token[0] * 3 // 2


def test_renderer_presets() -> None:
    portrait = CharacterRenderer.portrait(ExportSize.DOUBLE, canvas_size=(96.0, 96.0))
    assert portrait.layers == DEFAULT_PORTRAIT_LAYERS
    assert portrait.output_size == (192, 192)

    token = CharacterRenderer.token(ExportSize.HALF)
    assert token.layers == (LayerKind.TOKEN,)
    assert token.canvas_size == (32.0, 32.0)

    character = make_character_with(
        LayerKind.TOKEN, make_layer_image((4, 4)), position=(16.0, 16.0)
    )
    out = token.render(character)
    assert out is not None
    assert out.size == (32, 32)
    assert opaque_pixels(out) == 16


def test_palette_mode_layer_is_recolored() -> None:
    source = Image.new("P", (4, 4), 0)
    source.putpalette([40, 0, 0] + [0, 0, 0] * 255)
    character = make_character_with(LayerKind.FACE, source)

    out = export_character(character, DEFAULT_PORTRAIT_LAYERS, (100, 100), (100, 100))

    assert out is not None
    assert opaque_pixels(out) == 16
    skin = character.colors[Region.SKIN].lighter.as_tuple()
    assert out.getpixel((50, 50)) == skin
    assert source.mode == "P"
