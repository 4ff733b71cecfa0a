"""Testing and validation utilities for Forge."""

import io
import numpy as np
from typing import Dict, Tuple
from PIL import Image, ImageDraw


def create_test_image(width: int = 400, height: int = 300, mode: str = "RGB") -> Image.Image:
    """Create a synthetic image with shapes in distinct colours.
    
    Args:
        width: Image width
        height: Image height
        mode: PIL mode, "RGB", "RGBA" or "L"
        
    Returns:
        PIL Image
    """
    background = {"RGB": (255, 255, 255), "RGBA": (255, 255, 255, 255), "L": 255}[mode]
    image = Image.new(mode, (width, height), color=background)
    draw = ImageDraw.Draw(image)
    
    # Red block top-left, blue ellipse bottom-right
    draw.rectangle([width // 8, height // 8, width // 2, height // 2],
                   fill=_colour(mode, (220, 30, 30)))
    draw.ellipse([width // 2, height // 2, width - width // 8, height - height // 8],
                 fill=_colour(mode, (30, 60, 200)))
    return image


def _colour(mode: str, rgb: Tuple[int, int, int]):
    if mode == "L":
        return int(sum(rgb) / 3)
    if mode == "RGBA":
        return rgb + (255,)
    return rgb


def encode_image(image: Image.Image, image_format: str = "PNG", **kwargs) -> bytes:
    """Encode an image to bytes in the given format."""
    buffer = io.BytesIO()
    image.save(buffer, format=image_format, **kwargs)
    return buffer.getvalue()


def compare_images(image1: Image.Image, image2: Image.Image) -> Dict[str, float]:
    """Compare two same-sized images.
    
    Returns:
        Dictionary with 'mse' and 'psnr' (inf for identical images)
    """
    if image1.size != image2.size:
        raise ValueError(f"Image sizes differ: {image1.size} vs {image2.size}")
    
    array1 = np.array(image1.convert("RGB")).astype(np.float64)
    array2 = np.array(image2.convert("RGB")).astype(np.float64)
    
    mse = float(np.mean((array1 - array2) ** 2))
    if mse == 0:
        psnr = float("inf")
    else:
        psnr = float(20 * np.log10(255.0 / np.sqrt(mse)))
    
    return {"mse": mse, "psnr": psnr}


def mean_colour(image: Image.Image) -> Tuple[float, float, float]:
    """Average RGB value of an image."""
    array = np.array(image.convert("RGB")).astype(np.float64)
    return tuple(float(v) for v in array.reshape(-1, 3).mean(axis=0))
