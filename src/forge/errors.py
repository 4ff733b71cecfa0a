"""Exceptions raised by the image editor when error raising is enabled."""


class EditorError(Exception):
    """Base exception for image editor failures."""
    pass


class ImageLoadError(EditorError):
    """Raised when an input decodes neither as a path nor as a blob."""
    pass


class ImageSaveError(EditorError):
    """Raised when the encoder or filesystem rejects a save."""
    pass
