"""Shade set component.

A region's colors are stored as a base color plus five derived shades. The
whole set is recomputed whenever the base changes; there is no incremental
update path.
"""

from dataclasses import dataclass

from character_forge.components.color import Rgba


@dataclass(frozen=True)
class ShadeSet:
    """Base color and its derived shades.

    Attributes:
        base: Color the shades were derived from.
        lighter: ``base.brighter()``.
        neutral: Same as ``base``.
        darker: ``base.darker()``.
        darker2: ``base`` darkened twice.
        darker3: ``base`` darkened three times.
    """

    base: Rgba
    lighter: Rgba
    neutral: Rgba
    darker: Rgba
    darker2: Rgba
    darker3: Rgba

    def with_base(self, base: Rgba) -> "ShadeSet":
        return derive_shades(base)


def derive_shades(base: Rgba) -> ShadeSet:
    """Derive the full shade set from ``base``."""
    darker = base.darker()
    darker2 = darker.darker()
    return ShadeSet(
        base=base,
        lighter=base.brighter(),
        neutral=base,
        darker=darker,
        darker2=darker2,
        darker3=darker2.darker(),
    )
