"""The ``Character`` record.

A character is a name, at most one :class:`CharacterPart` per
:class:`~character_forge.types.LayerKind`, a region -> shade set map and an
outline table. Unlike its components, a ``Character`` is mutable: editors,
the randomizer and the persistence layer update it in place.

Design notes:

* Parts are stored in one named optional field per layer kind.
  ``_PART_FIELDS`` maps each kind to its field; the module checks the map
  covers every kind, so adding a ``LayerKind`` fails loudly at import time
  until the record grows a matching field.
* Color stores are persistent maps (``pyrsistent.PMap``). Setting a color
  swaps in a new map with a freshly derived :class:`ShadeSet`.
* The hair / hair-back transform invariant is a contract on the mutators in
  :mod:`character_forge.transform`, not on this record.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from pyrsistent import pmap
from pyrsistent.typing import PMap

from character_forge.components import (
    CharacterPart,
    Outlines,
    Rgba,
    ShadeSet,
    derive_shades,
)
from character_forge.types import LayerKind, Region

DEFAULT_BASE_COLORS: Dict[Region, Rgba] = {
    Region.HAIR: Rgba(224, 216, 64),
    Region.EYE_AND_BEARD: Rgba(64, 50, 25),
    Region.SKIN: Rgba(248, 248, 192),
    Region.METAL: Rgba(100, 100, 100),
    Region.TRIM: Rgba(247, 173, 82),
    Region.CLOTH: Rgba(82, 82, 115),
    Region.LEATHER: Rgba(148, 100, 66),
    Region.ACCESSORY: Rgba(0, 0, 0),
}

_PART_FIELDS: Dict[LayerKind, str] = {
    LayerKind.HAIR_BACK: "hair_back",
    LayerKind.ARMOUR: "armour",
    LayerKind.FACE: "face",
    LayerKind.HAIR: "hair",
    LayerKind.ACCESSORY: "accessory",
    LayerKind.TOKEN: "token",
}
if set(_PART_FIELDS) != set(LayerKind):
    raise TypeError("every LayerKind needs a part field")


def default_colors() -> PMap[Region, ShadeSet]:
    """Return the default shade set for every paintable region."""
    return pmap(
        {region: derive_shades(base) for region, base in DEFAULT_BASE_COLORS.items()}
    )


@dataclass
class Character:
    """Mutable character record.

    Attributes:
        name: Free-form character name.
        hair_back: Back-hair layer, kept in step with ``hair``.
        armour: Armour layer.
        face: Face layer.
        hair: Front hair layer.
        accessory: Accessory layer.
        token: Map token layer (drawn on its own canvas).
        colors: Shade set per paintable region.
        outlines: Outline color per layer kind.
    """

    name: str = ""
    hair_back: Optional[CharacterPart] = None
    armour: Optional[CharacterPart] = None
    face: Optional[CharacterPart] = None
    hair: Optional[CharacterPart] = None
    accessory: Optional[CharacterPart] = None
    token: Optional[CharacterPart] = None
    colors: PMap[Region, ShadeSet] = field(default_factory=default_colors)
    outlines: Outlines = field(default_factory=Outlines.default)

    # -------- Parts --------

    def get_part(self, kind: LayerKind) -> Optional[CharacterPart]:
        return getattr(self, _PART_FIELDS[kind])

    def set_part(self, kind: LayerKind, part: CharacterPart) -> None:
        setattr(self, _PART_FIELDS[kind], part)

    def remove_part(self, kind: LayerKind) -> None:
        setattr(self, _PART_FIELDS[kind], None)

    def parts(self) -> Iterator[Tuple[LayerKind, CharacterPart]]:
        """Yield present parts in default draw order."""
        for kind in LayerKind:
            part = self.get_part(kind)
            if part is not None:
                yield kind, part

    # -------- Colors --------

    def shades(self, region: Region) -> Optional[ShadeSet]:
        return self.colors.get(region)

    def set_color(self, region: Region, base: Rgba) -> None:
        """Set ``region``'s base color and re-derive all of its shades."""
        if region is Region.OUTLINE:
            raise ValueError(
                "Outline colors are per layer kind, use set_outline_color()"
            )
        self.colors = self.colors.set(region, derive_shades(base))

    def outline_color(self, kind: LayerKind) -> Rgba:
        return self.outlines.get(kind)

    def set_outline_color(self, kind: LayerKind, color: Rgba) -> None:
        self.outlines = self.outlines.set(kind, color)
