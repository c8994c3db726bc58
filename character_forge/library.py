"""Asset library helpers.

A library is an ordered ``asset id -> Asset`` mapping per layer kind. The
renderer never loads files itself: collaborators discover and decode assets,
and these helpers only organise what they hand over.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, Optional

from character_forge.character import Character
from character_forge.components import Asset, AssetParseError
from character_forge.types import LayerKind

logger = logging.getLogger(__name__)

AssetLibrary = Dict[str, Asset]
AssetLibraries = Dict[LayerKind, AssetLibrary]


def empty_libraries() -> AssetLibraries:
    return {kind: {} for kind in LayerKind}


def add_asset(libraries: AssetLibraries, asset: Asset) -> None:
    """Insert ``asset`` into its kind's library, replacing any same-id entry."""
    libraries.setdefault(asset.kind, {})[asset.id] = asset


def build_libraries(paths: Iterable[str]) -> AssetLibraries:
    """Build libraries from asset locations.

    Locations whose filename does not follow ``Name_Kind`` are logged and
    skipped; the rest keep their input order.
    """
    libraries = empty_libraries()
    for path in paths:
        try:
            asset = Asset.from_path(path)
        except AssetParseError as exc:
            logger.warning("Skipping file %r: %s", path, exc)
            continue
        add_asset(libraries, asset)
    return libraries


def find_companion(libraries: AssetLibraries, hair: Asset) -> Optional[Asset]:
    """Return the back-hair asset linked from ``hair``, if any."""
    if hair.companion_id is None:
        return None
    return libraries.get(LayerKind.HAIR_BACK, {}).get(hair.companion_id)


def refresh_part_images(character: Character, libraries: AssetLibraries) -> int:
    """Attach library pixels to parts whose asset snapshot has none.

    Returns the number of parts updated.
    """
    refreshed = 0
    for kind, part in list(character.parts()):
        if part.asset.image is not None:
            continue
        source = libraries.get(kind, {}).get(part.asset.id)
        if source is None or source.image is None:
            continue
        character.set_part(kind, replace(part, asset=part.asset.with_image(source.image)))
        refreshed += 1
    return refreshed
