"""Forge: a fluent wrapper for cropping, resizing, rotating and sharpening images."""

from .editor import ImageEditor
from .errors import EditorError, ImageLoadError, ImageSaveError

__all__ = ["ImageEditor", "EditorError", "ImageLoadError", "ImageSaveError"]

__version__ = "1.0.0"
