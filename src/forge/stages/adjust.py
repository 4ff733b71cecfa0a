"""Adjustment processing stage for brightness, saturation and hue modulation."""

import logging
import numpy as np
from PIL import Image

from ..settings import SETTINGS
from .modes import to_filterable


class AdjustmentStage:
    """Handles HSV modulation with ImageMagick-style percentages."""
    
    def __init__(self):
        self.settings = SETTINGS["editor"]
        self.logger = logging.getLogger(__name__)
    
    def modulate(self, image: Image.Image, brightness: float = None,
                 saturation: float = None, hue: float = None) -> Image.Image:
        """Scale brightness and saturation and rotate hue.
        
        Args:
            image: Input PIL Image
            brightness: Value percentage (100 = no change)
            saturation: Saturation percentage (100 = no change)
            hue: Hue percentage; rotation is (hue - 100) * 1.8 degrees,
                so 0 and 200 are half turns and 300 is a full turn
            
        Returns:
            Modulated PIL Image
        """
        if brightness is None:
            brightness = self.settings.MODULATE_BRIGHTNESS
        if saturation is None:
            saturation = self.settings.MODULATE_SATURATION
        if hue is None:
            hue = self.settings.MODULATE_HUE
        
        source = to_filterable(image)
        alpha = source.getchannel("A") if "A" in source.getbands() else None
        
        # Convert to numpy array in HSV space, all channels 0-255
        hsv_array = np.array(source.convert("RGB").convert("HSV")).astype(np.float32)
        
        hsv_array[:, :, 0] = (hsv_array[:, :, 0] + self.hue_shift(hue)) % 256
        hsv_array[:, :, 1] *= saturation / 100.0
        hsv_array[:, :, 2] *= brightness / 100.0
        
        # Clip to valid range
        hsv_array = np.clip(np.round(hsv_array), 0, 255).astype(np.uint8)
        
        channels = [Image.fromarray(hsv_array[:, :, i]) for i in range(3)]
        adjusted_image = Image.merge("HSV", channels).convert("RGB")
        
        if image.mode == "LA" or source.mode == "L":
            adjusted_image = adjusted_image.convert("L")
        if alpha is not None:
            adjusted_image.putalpha(alpha)
        
        self.logger.debug(f"Applied modulation: brightness={brightness}, "
                          f"saturation={saturation}, hue={hue}")
        return adjusted_image
    
    def hue_shift(self, hue: float) -> float:
        """Hue percentage as an offset on Pillow's 0-255 hue channel."""
        degrees = (hue - 100) * 1.8
        return (degrees / 360.0) * 256.0
