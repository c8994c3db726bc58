"""Character part (layer instance) component."""

from dataclasses import dataclass

from character_forge.components.asset import Asset


@dataclass(frozen=True)
class Point:
    """2D position in authoring canvas units.

    Attributes:
        x: Horizontal offset from the canvas' left edge.
        y: Vertical offset from the canvas' top edge.
    """

    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class CharacterPart:
    """Placement of one asset on the character.

    ``position`` is the layer's centre in the coordinate space it was
    authored in. The asset is a snapshot: its pixel data may lag the asset
    library until a collaborator refreshes it (see
    :func:`character_forge.library.refresh_part_images`).

    Attributes:
        asset: Asset drawn by this part.
        position: Centre of the layer on the authoring canvas.
        scale: Uniform scale factor.
        rotation: Clockwise rotation in radians.
        flipped: Mirror horizontally before rotating.
    """

    asset: Asset
    position: Point
    scale: float = 1.0
    rotation: float = 0.0
    flipped: bool = False
