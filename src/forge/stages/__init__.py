"""Processing stages for the image editor."""

from .resize import ResizeStage
from .crop import CropStage
from .rotate import RotateStage
from .adjust import AdjustmentStage
from .edges import EdgeEnhancementStage

__all__ = ["ResizeStage", "CropStage", "RotateStage", "AdjustmentStage", "EdgeEnhancementStage"]
