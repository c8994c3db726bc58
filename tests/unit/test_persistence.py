# tests/unit/test_persistence.py

import json

import pytest

from character_forge.character import Character
from character_forge.components import ColorParseError, Point, Rgba
from character_forge.persistence import (
    character_from_dict,
    character_to_dict,
    denormalize_character,
    dumps,
    loads,
    normalize_character,
)
from character_forge.types import LayerKind, Region
from tests.test_utils import make_asset, make_layer_image, make_part


def sample_character() -> Character:
    character = Character(name="Ser Test")
    character.set_part(
        LayerKind.FACE,
        make_part(make_asset("Face", LayerKind.FACE), position=(48.0, 24.0), scale=2.0),
    )
    character.set_part(
        LayerKind.HAIR,
        make_part(
            make_asset("Style", LayerKind.HAIR, companion_id="Style_HairBack"),
            rotation=1.25,
            flipped=True,
        ),
    )
    character.set_part(
        LayerKind.TOKEN,
        make_part(make_asset("Tok", LayerKind.TOKEN), position=(32.0, 16.0), scale=4.0),
    )
    character.set_color(Region.CLOTH, Rgba(10, 20, 30, 255))
    character.set_outline_color(LayerKind.ARMOUR, Rgba(1, 2, 3, 4))
    return character


def test_normalize_uses_portrait_and_token_canvases() -> None:
    character = sample_character()
    normalized = normalize_character(character, (96.0, 48.0), (64.0, 64.0))

    face = normalized.get_part(LayerKind.FACE)
    token = normalized.get_part(LayerKind.TOKEN)
    assert face is not None and token is not None
    assert face.position == Point(0.5, 0.5)
    assert face.scale == pytest.approx(2.0 / 48.0)
    assert token.position == Point(0.5, 0.25)
    assert token.scale == pytest.approx(4.0 / 64.0)

    # The source character is untouched.
    original = character.get_part(LayerKind.FACE)
    assert original is not None and original.position == Point(48.0, 24.0)


def test_denormalize_inverts_normalize() -> None:
    character = sample_character()
    restored = denormalize_character(
        normalize_character(character, (96.0, 48.0), (64.0, 64.0)),
        (96.0, 48.0),
        (64.0, 64.0),
    )
    for kind, part in character.parts():
        back = restored.get_part(kind)
        assert back is not None
        assert back.position.x == pytest.approx(part.position.x)
        assert back.position.y == pytest.approx(part.position.y)
        assert back.scale == pytest.approx(part.scale)


def test_normalize_with_empty_token_canvas_leaves_token() -> None:
    character = sample_character()
    normalized = normalize_character(character, (96.0, 48.0), (0.0, 0.0))
    face = normalized.get_part(LayerKind.FACE)
    assert face is not None and face.position == Point(0.5, 0.5)
    assert normalized.get_part(LayerKind.TOKEN) == character.get_part(LayerKind.TOKEN)


@pytest.mark.parametrize("size", [(0.0, 48.0), (96.0, 0.0)])
def test_zero_canvas_is_left_untouched(size: tuple) -> None:
    character = sample_character()
    normalized = normalize_character(character, size, (64.0, 64.0))
    assert normalized.get_part(LayerKind.FACE) == character.get_part(LayerKind.FACE)


def test_dict_round_trip() -> None:
    character = sample_character()
    restored = character_from_dict(character_to_dict(character))

    assert restored.name == "Ser Test"
    assert [k for k, _ in restored.parts()] == [k for k, _ in character.parts()]
    for kind, part in character.parts():
        assert restored.get_part(kind) == part
    assert restored.colors == character.colors
    assert restored.outlines == character.outlines


def test_dict_keeps_asset_identity_only() -> None:
    character = Character()
    asset = make_asset("Face", LayerKind.FACE, make_layer_image())
    character.set_part(LayerKind.FACE, make_part(asset))

    data = character_to_dict(character)
    assert data["parts"]["Face"]["asset"]["id"] == "Face_Face"
    assert "image" not in data["parts"]["Face"]["asset"]

    restored = character_from_dict(data)
    face = restored.get_part(LayerKind.FACE)
    assert face is not None
    assert face.asset == asset
    assert face.asset.image is None


def test_json_round_trip() -> None:
    character = sample_character()
    text = dumps(character, indent=2)
    assert json.loads(text)["colors"]["Cloth"] == "#0A141EFF"
    restored = loads(text)
    assert restored.colors[Region.CLOTH].base == Rgba(10, 20, 30, 255)
    assert restored.outline_color(LayerKind.ARMOUR) == Rgba(1, 2, 3, 4)


def test_missing_sections_keep_defaults() -> None:
    restored = character_from_dict({"name": "Bare"})
    default = Character()
    assert restored.colors == default.colors
    assert restored.outlines == default.outlines
    assert list(restored.parts()) == []


def test_outline_region_in_colors_is_ignored() -> None:
    restored = character_from_dict({"colors": {"Outline": "#FFFFFF"}})
    assert Region.OUTLINE not in restored.colors


def test_malformed_records_raise() -> None:
    with pytest.raises(ColorParseError):
        character_from_dict({"colors": {"Hair": "not-a-color"}})
    with pytest.raises(ValueError):
        character_from_dict({"outlines": {"Hat": "#FFFFFF"}})


def test_token_canvas_is_required() -> None:
    with pytest.raises(TypeError):
        normalize_character(sample_character(), (96.0, 48.0))  # type: ignore[call-arg]
