"""Random character generation.

Both entry points mutate the given :class:`Character` in place and draw from
a private ``random.Random(seed)``, so concurrent callers never share RNG
state and a fixed seed reproduces the same character.
"""

import logging
import random
from typing import Mapping, Optional, Sequence

from character_forge.character import Character
from character_forge.components import CharacterPart, ColorPalette
from character_forge.library import AssetLibraries, find_companion
from character_forge.transform import default_placement, place_part
from character_forge.types import LayerKind, Region, Size, paintable_regions

logger = logging.getLogger(__name__)


def randomize_assets(
    character: Character,
    libraries: AssetLibraries,
    kinds: Sequence[LayerKind],
    canvas_size: Size,
    seed: Optional[int] = None,
) -> None:
    """Pick a random asset for each of ``kinds`` with a non-empty library.

    Every pick gets the default placement for ``canvas_size``. A hair pick
    brings its companion back-hair along, or clears back-hair when it
    declares none.
    """
    rng = random.Random(seed)

    for kind in kinds:
        library = libraries.get(kind)
        if not library:
            continue
        asset = rng.choice(list(library.values()))

        position, scale = default_placement(kind, canvas_size)
        part = CharacterPart(asset=asset, position=position, scale=scale)

        if kind is LayerKind.HAIR and asset.companion_id is not None:
            if find_companion(libraries, asset) is None:
                logger.warning(
                    "Hair %s declares companion %s but it is not in the library",
                    asset.id,
                    asset.companion_id,
                )
        place_part(character, kind, part, libraries.get(LayerKind.HAIR_BACK))


def randomize_colors(
    character: Character,
    palettes: Mapping[Region, ColorPalette],
    seed: Optional[int] = None,
) -> None:
    """Give every paintable region with a non-empty palette a random color."""
    rng = random.Random(seed)

    for region in paintable_regions():
        palette = palettes.get(region)
        if palette is None or len(palette) == 0:
            continue
        base = rng.choice(palette.colors)
        character.set_color(region, base)
