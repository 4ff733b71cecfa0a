"""Resize processing stage."""

import logging
import numpy as np
from typing import Tuple
from PIL import Image, ImageFilter

from ..settings import SETTINGS
from ..utils import resize_dimensions, scale_dimensions, ratio_dimensions, fill_dimensions
from .modes import to_filterable


FILTER_MAP = {
    "POINT": Image.Resampling.NEAREST,
    "NEAREST": Image.Resampling.NEAREST,
    "BOX": Image.Resampling.BOX,
    "TRIANGLE": Image.Resampling.BILINEAR,
    "BILINEAR": Image.Resampling.BILINEAR,
    "HAMMING": Image.Resampling.HAMMING,
    "CUBIC": Image.Resampling.BICUBIC,
    "BICUBIC": Image.Resampling.BICUBIC,
    "CATROM": Image.Resampling.BICUBIC,
    "MITCHELL": Image.Resampling.BICUBIC,
    "LANCZOS": Image.Resampling.LANCZOS,
    "SINC": Image.Resampling.LANCZOS,
}


class ResizeStage:
    """Handles the resize family: filtered, adaptive, sample, scale and thumbnail."""
    
    def __init__(self):
        self.settings = SETTINGS["editor"]
        self.logger = logging.getLogger(__name__)
    
    def resize(self, image: Image.Image, height: int = 0, width: int = 0,
               filter_name: str = None, blur: float = None) -> Image.Image:
        """Aspect-preserving resize with a named resampling filter.
        
        Args:
            image: Input PIL Image
            height: Target height, 0 to infer
            width: Target width, 0 to infer
            filter_name: Filter name, e.g. "lanczos" or "point"
            blur: Blur factor; values above 1 soften the result
            
        Returns:
            Resized PIL Image
        """
        if filter_name is None:
            filter_name = self.settings.DEFAULT_FILTER
        if blur is None:
            blur = self.settings.DEFAULT_BLUR
        
        resample_filter = self.get_resample_filter(filter_name)
        target = resize_dimensions(image.height, image.width, height, width)
        
        resized_image = self._resize(image, target, resample_filter)
        
        if blur > 1:
            resized_image = to_filterable(resized_image).filter(ImageFilter.GaussianBlur(radius=blur - 1))
            self.logger.debug(f"Applied resize blur: {blur}")
        
        return resized_image
    
    def resize_adaptive(self, image: Image.Image, height: int = 0, width: int = 0) -> Image.Image:
        """Area-averaging resize to explicit ratio-derived dimensions."""
        import cv2
        
        new_height, new_width = ratio_dimensions(image.height, image.width, height, width)
        
        source = to_filterable(image)
        if source.mode == "CMYK":
            source = source.convert("RGB")
        
        img_cv = np.array(source)
        resized = cv2.resize(img_cv, (new_width, new_height), interpolation=cv2.INTER_AREA)
        resized_image = Image.fromarray(resized)
        
        self.logger.debug(f"Adaptive resize: {image.size} -> {resized_image.size}")
        return resized_image
    
    def resize_sample(self, image: Image.Image, height: int = 0, width: int = 0) -> Image.Image:
        """Nearest-neighbour resample to explicit ratio-derived dimensions."""
        new_height, new_width = ratio_dimensions(image.height, image.width, height, width)
        resized_image = image.resize((new_width, new_height), Image.Resampling.NEAREST)
        
        self.logger.debug(f"Sample resize: {image.size} -> {resized_image.size}")
        return resized_image
    
    def resize_scale(self, image: Image.Image, height: int = 0, width: int = 0) -> Image.Image:
        """Fast box-filter resize keeping one side by orientation."""
        target = scale_dimensions(image.height, image.width, height, width)
        return self._resize(image, target, Image.Resampling.BOX)
    
    def resize_thumbnail(self, image: Image.Image, height: int = 0, width: int = 0) -> Image.Image:
        """Thumbnail resize that also drops ancillary metadata."""
        target = resize_dimensions(image.height, image.width, height, width)
        resized_image = self._resize(
            image, target, Image.Resampling.LANCZOS,
            reducing_gap=self.settings.THUMBNAIL_REDUCING_GAP
        )
        resized_image.info = {}
        return resized_image
    
    def get_resample_filter(self, filter_name: str) -> Image.Resampling:
        """Get PIL resampling filter from a filter name.
        
        Args:
            filter_name: Filter name, case-insensitive
            
        Returns:
            PIL resampling filter, the fallback filter for unknown names
        """
        fallback = FILTER_MAP[self.settings.FALLBACK_FILTER.upper()]
        return FILTER_MAP.get(str(filter_name).upper(), fallback)
    
    def _resize(self, image: Image.Image, target: Tuple[int, int],
                resample_filter: Image.Resampling, **kwargs) -> Image.Image:
        """Resize to (height, width), inferring a zero side from the aspect ratio."""
        new_height, new_width = fill_dimensions(image.height, image.width, *target)
        
        if new_height == 0 and new_width == 0:
            self.logger.debug("No target dimensions given, resize skipped")
            return image
        
        resized_image = image.resize((new_width, new_height), resample_filter, **kwargs)
        self.logger.debug(f"Resize completed: {image.size} -> {resized_image.size}")
        return resized_image
