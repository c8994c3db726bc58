import math
import numpy as np
import numpy.typing as npt
from PIL import Image, ImageOps
from typing import Tuple

# Type aliases for clarity
UInt8Array = npt.NDArray[np.uint8]
BoolArray = npt.NDArray[np.bool_]

CLEAR = (0, 0, 0, 0)


def round_half_up(value: float) -> int:
    """Round a non-negative float to the nearest int, halves going up."""
    return int(math.floor(value + 0.5))


def resize_nearest(image: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Resize without smoothing so pixel art stays crisp."""
    return image.resize(size, resample=Image.Resampling.NEAREST)


def mirror(image: Image.Image) -> Image.Image:
    """Return a horizontally mirrored copy."""
    return ImageOps.mirror(image)


def rotate_about_center(image: Image.Image, radians: float) -> Image.Image:
    """
    Rotate clockwise by ``radians`` around the image centre, keeping the
    canvas size. Corners exposed by the rotation are fully transparent.
    """
    if radians == 0.0:
        return image.copy()
    # Pillow rotates counter-clockwise in degrees.
    return image.rotate(
        -math.degrees(radians),
        resample=Image.Resampling.NEAREST,
        expand=False,
        fillcolor=CLEAR,
    )


def overlay(base: Image.Image, top: Image.Image, x: int, y: int) -> None:
    """
    Alpha-composite ``top`` onto ``base`` in place with its top-left corner at
    ``(x, y)``. Offsets may be negative or reach past ``base``; the part of
    ``top`` outside ``base`` is clipped.
    """
    left, upper = max(x, 0), max(y, 0)
    right = min(x + top.width, base.width)
    lower = min(y + top.height, base.height)
    if right <= left or lower <= upper:
        return

    visible = top.crop((left - x, upper - y, right - x, lower - y))
    base.alpha_composite(visible, (left, upper))


def crop_center(image: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """
    Crop ``size`` out of the middle of ``image``. The origin uses truncating
    integer halves on both sides, so odd sizes sit one pixel up-left.
    """
    width, height = size
    x0 = image.width // 2 - width // 2
    y0 = image.height // 2 - height // 2
    return image.crop((x0, y0, x0 + width, y0 + height))


def transparent_canvas(size: Tuple[int, int]) -> Image.Image:
    return Image.new("RGBA", size, CLEAR)


def rgba_array(image: Image.Image) -> UInt8Array:
    """Return a writable ``(h, w, 4)`` uint8 copy of an RGBA image's pixels."""
    if image.mode != "RGBA":
        raise ValueError(f"Expected an RGBA image, got mode {image.mode!r}")
    return np.array(image, dtype=np.uint8)
