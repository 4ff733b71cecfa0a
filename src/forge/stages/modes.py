"""Pixel mode normalisation shared by the filtering stages."""

import numpy as np
from PIL import Image

FILTERABLE_MODES = ("L", "RGB", "RGBA", "CMYK")
HIGH_DEPTH_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N", "F")


def has_alpha(image: Image.Image) -> bool:
    """True for alpha bands and for palette images with a transparent entry."""
    return "A" in image.getbands() or "transparency" in image.info


def to_filterable(image: Image.Image) -> Image.Image:
    """Convert an image to a mode Pillow's filters and numpy round trips accept.
    
    8-bit L/RGB/RGBA/CMYK pass through. 16-bit and float greyscale are scaled
    down to 8-bit L; everything else becomes RGB, or RGBA when it carries
    transparency.
    """
    if image.mode in FILTERABLE_MODES:
        return image
    
    if image.mode in HIGH_DEPTH_MODES:
        # 0-65535 onto 0-255
        img_array = np.array(image).astype(np.float64) / 257.0
        return Image.fromarray(np.clip(np.round(img_array), 0, 255).astype(np.uint8))
    
    return image.convert("RGBA" if has_alpha(image) else "RGB")
