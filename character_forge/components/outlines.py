"""Outline color table component.

One outline color per layer kind. ``HairBack`` has no entry of its own:
reads and writes for it are redirected to ``Hair`` so front and back hair
always share an outline.
"""

from dataclasses import dataclass

from pyrsistent import pmap
from pyrsistent.typing import PMap

from character_forge.components.color import BLACK, Rgba
from character_forge.types import LayerKind

DEFAULT_OUTLINE_COLOR = Rgba(56, 32, 64, 255)


def _table_key(kind: LayerKind) -> LayerKind:
    return LayerKind.HAIR if kind is LayerKind.HAIR_BACK else kind


@dataclass(frozen=True)
class Outlines:
    """Persistent layer kind -> outline color table.

    Attributes:
        colors: Outline color per layer kind (never keyed by ``HairBack``).
    """

    colors: PMap[LayerKind, Rgba]

    @classmethod
    def default(cls) -> "Outlines":
        return cls(
            pmap(
                {
                    kind: DEFAULT_OUTLINE_COLOR
                    for kind in LayerKind
                    if kind is not LayerKind.HAIR_BACK
                }
            )
        )

    def get(self, kind: LayerKind) -> Rgba:
        """Return the outline color for ``kind`` (black if unset)."""
        return self.colors.get(_table_key(kind), BLACK)

    def set(self, kind: LayerKind, color: Rgba) -> "Outlines":
        """Return a new table with ``kind``'s outline set to ``color``."""
        return Outlines(self.colors.set(_table_key(kind), color))
