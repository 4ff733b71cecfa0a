from __future__ import annotations

import math
from typing import Tuple

Box = Tuple[int, int, int, int]
Dimensions = Tuple[int, int]


def aspect_ratio(height: int, width: int) -> float:
    """Return the height/width ratio used by every resize helper.

    A degenerate zero-width image counts as square.
    """
    if width == 0:
        return 1.0
    return float(height) / float(width)


def edge_crop_box(
    height: int, width: int, top: int, right: int, bottom: int, left: int
) -> Box:
    """Crop box removing the given number of pixels from each edge.

    Args:
        height: Current image height.
        width: Current image width.
        top, right, bottom, left: Pixels to remove from each edge.

    Returns:
        Pillow crop box (left, upper, right, lower). Not validated: a negative
        resulting size is passed through to the backend.
    """
    crop_height: int = height - top - bottom
    crop_width: int = width - right - left
    return (left, top, left + crop_width, top + crop_height)


def center_crop_box(height: int, width: int, crop_height: int, crop_width: int) -> Box:
    """Crop box of crop_height x crop_width centred on the image.

    A zero side extends from the origin to the image edge.
    """
    left: int = (width - crop_width) // 2
    top: int = (height - crop_height) // 2
    if crop_width == 0:
        crop_width = width - left
    if crop_height == 0:
        crop_height = height - top
    return (left, top, left + crop_width, top + crop_height)


def square_crop_box(height: int, width: int) -> Box:
    """Square crop box of side min(height, width).

    Horizontally centred but always top-aligned.
    """
    side: int = min(height, width)
    left: int = abs(width - side) // 2
    top: int = 0
    return (left, top, left + side, top + side)


def resize_dimensions(height: int, width: int, target_height: int, target_width: int) -> Dimensions:
    """Zero out one requested dimension so the backend keeps the aspect ratio.

    Only applies when both targets are nonzero: landscape images (ratio < 1)
    keep the requested width, everything else keeps the requested height.

    Returns:
        (height, width) where a zero means "infer from the other side".
    """
    if target_height != 0 and target_width != 0:
        ratio = aspect_ratio(height, width)
        target_width = target_width if ratio < 1 else 0
        target_height = 0 if ratio < 1 else target_height
    return (target_height, target_width)


def scale_dimensions(height: int, width: int, target_height: int, target_width: int) -> Dimensions:
    """Keep one requested dimension by orientation, always zeroing the other."""
    ratio = aspect_ratio(height, width)
    if ratio < 1:
        return (0, target_width)
    return (target_height, 0)


def ratio_dimensions(height: int, width: int, target_height: int, target_width: int) -> Dimensions:
    """Explicit dimensions for the adaptive and sample resizers.

    Landscape images keep the requested width and take floor(ratio * width)
    as height; others keep the requested height and take
    floor(ratio * height) as width. Each side is at least 1 pixel.
    """
    ratio = aspect_ratio(height, width)
    if ratio < 1:
        new_width = target_width
        new_height = math.floor(ratio * target_width)
    else:
        new_height = target_height
        new_width = math.floor(ratio * target_height)
    return (max(1, int(new_height)), max(1, int(new_width)))


def fill_dimensions(height: int, width: int, target_height: int, target_width: int) -> Dimensions:
    """Infer a zero target dimension from the current aspect ratio.

    Returns (0, 0) when both targets are zero, meaning "leave unchanged".
    """
    if target_height == 0 and target_width == 0:
        return (0, 0)
    if height == 0 or width == 0:
        # No ratio to infer from
        side = target_height or target_width
        return (max(1, target_height or side), max(1, target_width or side))
    if target_height == 0:
        target_height = int(round(height * target_width / float(width)))
    elif target_width == 0:
        target_width = int(round(width * target_height / float(height)))
    return (max(1, target_height), max(1, target_width))
