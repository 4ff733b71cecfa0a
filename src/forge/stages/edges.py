"""Edge enhancement processing stage."""

import logging
from PIL import Image, ImageFilter

from .modes import to_filterable


class EdgeEnhancementStage:
    """Handles unsharp-mask sharpening."""
    
    def __init__(self):
        self.logger = logging.getLogger(__name__)
    
    def unsharp(self, image: Image.Image, radius: float, sigma: float,
                amount: float, threshold: float) -> Image.Image:
        """Apply unsharp mask sharpening.
        
        Takes ImageMagick-style parameters and maps them onto Pillow's
        UnsharpMask: the Gaussian radius is sigma (or radius when sigma is 0),
        amount is a fraction of 100 percent and threshold a fraction of the
        full 0-255 range.
        
        Args:
            image: Input PIL Image
            radius: Kernel radius in pixels
            sigma: Gaussian standard deviation
            amount: Difference added back, 1.0 = 100%
            threshold: Minimum difference to sharpen, 0.0 to 1.0
            
        Returns:
            Sharpened PIL Image
        """
        unsharp_filter = ImageFilter.UnsharpMask(
            radius=sigma if sigma else radius,
            percent=int(round(amount * 100)),
            threshold=int(round(threshold * 255))
        )
        
        sharpened_image = to_filterable(image).filter(unsharp_filter)
        self.logger.debug(f"Applied unsharp mask: radius={radius}, sigma={sigma}, "
                          f"amount={amount}, threshold={threshold}")
        return sharpened_image
