"""Crop processing stage."""

import logging
from PIL import Image

from ..utils import edge_crop_box, center_crop_box, square_crop_box


class CropStage:
    """Handles edge, centre and square cropping."""
    
    def __init__(self):
        self.logger = logging.getLogger(__name__)
    
    def crop_edges(self, image: Image.Image, top: int = 0, right: int = 0,
                   bottom: int = 0, left: int = 0) -> Image.Image:
        """Remove the given number of pixels from each edge.
        
        Args:
            image: Input PIL Image
            top, right, bottom, left: Pixels removed from each edge
            
        Returns:
            Cropped PIL Image
        """
        crop_box = edge_crop_box(image.height, image.width, top, right, bottom, left)
        return self._crop(image, crop_box)
    
    def crop_to(self, image: Image.Image, height: int = 0, width: int = 0) -> Image.Image:
        """Crop to exactly height x width around the image centre."""
        crop_box = center_crop_box(image.height, image.width, height, width)
        return self._crop(image, crop_box)
    
    def crop_square(self, image: Image.Image) -> Image.Image:
        """Crop to the largest top-aligned square."""
        crop_box = square_crop_box(image.height, image.width)
        return self._crop(image, crop_box)
    
    def _crop(self, image: Image.Image, crop_box) -> Image.Image:
        cropped_image = image.crop(crop_box)
        self.logger.debug(f"Crop completed: {image.size} -> {cropped_image.size}, box: {crop_box}")
        return cropped_image
