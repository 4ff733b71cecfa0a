"""Rotation processing stage."""

import logging
from typing import Optional, Union, Tuple
from PIL import Image

Color = Union[str, int, Tuple[int, ...]]


class RotateStage:
    """Rotates images clockwise onto an expanded canvas."""
    
    def __init__(self):
        self.logger = logging.getLogger(__name__)
    
    def process(self, image: Image.Image, degrees: float,
                background: Optional[Color] = None) -> Image.Image:
        """Rotate an image clockwise.
        
        Args:
            image: Input PIL Image
            degrees: Clockwise rotation in degrees
            background: Fill colour for uncovered corners. Defaults to
                transparent for images with alpha, black otherwise.
            
        Returns:
            Rotated PIL Image
        """
        if background is None and self._has_alpha(image):
            background = (0,) * len(image.getbands())
        
        # Pillow rotates counter-clockwise
        rotated_image = image.rotate(
            -degrees,
            resample=Image.Resampling.BICUBIC,
            expand=True,
            fillcolor=background
        )
        
        self.logger.debug(f"Rotated {degrees} degrees: {image.size} -> {rotated_image.size}")
        return rotated_image
    
    def _has_alpha(self, image: Image.Image) -> bool:
        return "A" in image.getbands()
