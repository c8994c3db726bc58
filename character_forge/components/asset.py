"""Asset identity component.

An ``Asset`` names one loadable layer image. Identity is the ``Name_Kind``
id; decoded pixels are optional, shared between every part that references
the asset, and never take part in equality or hashing.

Filenames follow ``<Name>_<Kind>.png`` where ``<Kind>`` is one of the
:class:`~character_forge.types.LayerKind` tokens. Hair assets link to their
back-hair companion ``<Name>_HairBack``.
"""

import io
from dataclasses import dataclass, field, replace
from pathlib import PurePath
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from character_forge.types import LayerKind

USER_ASSET_SCHEME = "user-asset://"


class AssetParseError(ValueError):
    """Raised when an asset filename or its image bytes cannot be parsed."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Cannot load asset {filename!r}: {reason}")
        self.filename = filename


def parse_filename(stem: str) -> Tuple[str, LayerKind]:
    """Split a ``Name_Kind`` stem into its name and layer kind.

    The split happens on the last underscore so names may contain
    underscores themselves.
    """
    name, sep, token = stem.rpartition("_")
    if not sep:
        raise AssetParseError(stem, "filename does not contain '_' separator")
    try:
        kind = LayerKind(token)
    except ValueError:
        raise AssetParseError(stem, f"unknown layer kind {token!r}") from None
    return name, kind


def _companion_id(stem: str, kind: LayerKind) -> Optional[str]:
    return f"{stem}Back" if kind is LayerKind.HAIR else None


@dataclass(frozen=True, eq=False)
class Asset:
    """A named, typed reference to a layer image.

    Attributes:
        name: Display name (the ``Name`` part of the filename).
        kind: Layer kind the image belongs to.
        path: Location reference understood by the loading collaborator.
        companion_id: For hair assets, id of the matching back-hair asset.
        image: Decoded RGBA pixels, shared and treated as read-only.
    """

    name: str
    kind: LayerKind
    path: str = ""
    companion_id: Optional[str] = None
    image: Optional[Image.Image] = field(default=None, repr=False)

    @property
    def id(self) -> str:
        return f"{self.name}_{self.kind}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_image(self, image: Optional[Image.Image]) -> "Asset":
        """Return a copy of this asset referencing ``image``."""
        return replace(self, image=image)

    @classmethod
    def from_path(cls, path: str) -> "Asset":
        """Build an asset (without pixels) from its file location."""
        stem = PurePath(path).stem
        name, kind = parse_filename(stem)
        return cls(
            name=name,
            kind=kind,
            path=str(path),
            companion_id=_companion_id(stem, kind),
        )

    @classmethod
    def from_bytes(cls, filename: str, data: bytes) -> "Asset":
        """Build an asset from an uploaded filename and its encoded bytes."""
        stem = filename.removesuffix(".png")
        name, kind = parse_filename(stem)
        try:
            with Image.open(io.BytesIO(data)) as decoded:
                image = decoded.convert("RGBA")
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
        ) as exc:
            raise AssetParseError(filename, f"undecodable image: {exc}") from exc
        return cls(
            name=name,
            kind=kind,
            path=f"{USER_ASSET_SCHEME}{filename}",
            companion_id=_companion_id(stem, kind),
            image=image,
        )
