"""Fluent image editor coordinating the processing stages."""

import io
import os
import time
import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from PIL import Image

from .settings import SETTINGS
from .errors import ImageLoadError, ImageSaveError
from .stages import ResizeStage, CropStage, RotateStage, AdjustmentStage, EdgeEnhancementStage

Source = Union[str, bytes, bytearray, memoryview, "os.PathLike[str]", Image.Image]

LOSSY_FORMATS = {"JPEG", "MPO", "WEBP", "AVIF"}
RGB_ONLY_FORMATS = {"JPEG", "MPO"}


class ImageEditor:
    """Loads one image and applies a chain of in-place edits.

    Every edit replaces the owned image and returns the editor, so calls
    chain: ``ImageEditor(path).crop(10, 0, 10, 0).resize(200, 0).save(85, out)``.

    Load and save failures are recorded as the last error message (see
    ``get_error_message``) instead of raising, unless ``raise_errors`` is set.
    An editor that failed to load keeps working as a no-op.
    """

    def __init__(self, source: Source, raise_errors: Optional[bool] = None):
        """Decode ``source`` as a path, falling back to decoding it as a blob.

        Args:
            source: File path, encoded image bytes, or an open PIL Image
            raise_errors: Raise ImageLoadError/ImageSaveError on failure
                instead of only recording the message. Defaults to settings.
        """
        self.settings = SETTINGS["editor"]
        self.logger = logging.getLogger(__name__)

        if raise_errors is None:
            raise_errors = self.settings.RAISE_ERRORS
        self.raise_errors = raise_errors

        self.save_quality: int = self.settings.DEFAULT_QUALITY
        self.error: str = self.settings.UNKNOWN_ERROR

        self.crop_stage = CropStage()
        self.resize_stage = ResizeStage()
        self.rotate_stage = RotateStage()
        self.adjustment_stage = AdjustmentStage()
        self.edge_stage = EdgeEnhancementStage()

        self.operations: List[str] = []
        self.operation_timings: Dict[str, float] = {}

        self._format: Optional[str] = None
        self._adopted: Optional[Image.Image] = None
        self.image: Optional[Image.Image] = self._load_image(source)

    def __enter__(self) -> "ImageEditor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        if self.image is None:
            return "<ImageEditor (not loaded)>"
        return f"<ImageEditor {self.image.width}x{self.image.height} {self.image.mode} {self.format}>"

    @property
    def is_loaded(self) -> bool:
        """True while the editor owns a decoded image."""
        return self.image is not None

    @property
    def dimensions(self) -> Optional[Tuple[int, int]]:
        """Current (height, width), read from the image on every access."""
        if self.image is None:
            return None
        return (self.image.height, self.image.width)

    @property
    def format(self) -> str:
        """Format used when encoding to bytes."""
        return self._output_format()

    # Crop

    def crop(self, top: int = 0, right: int = 0, bottom: int = 0, left: int = 0) -> "ImageEditor":
        """Remove pixels from each edge; the origin moves to (left, top)."""
        return self._apply("crop", self.crop_stage.crop_edges, top, right, bottom, left)

    def crop_to(self, height: int = 0, width: int = 0) -> "ImageEditor":
        """Centre-crop to height x width; a zero side runs to the image edge."""
        return self._apply("crop_to", self.crop_stage.crop_to, height, width)

    def crop_square(self) -> "ImageEditor":
        """Crop to a square of side min(height, width), top-aligned."""
        return self._apply("crop_square", self.crop_stage.crop_square)

    # Colour

    def modulate(self, brightness: float = 100, saturation: float = 100,
                 hue: float = 300) -> "ImageEditor":
        """Adjust brightness, saturation and hue as percentages (100 = unchanged)."""
        return self._apply("modulate", self.adjustment_stage.modulate,
                           brightness, saturation, hue)

    # Resize

    def resize(self, height: int = 0, width: int = 0, filter: str = "lanczos",
               blur: float = 1) -> "ImageEditor":
        """Aspect-preserving resize with a named filter.

        When both sides are given only one is kept: the width for landscape
        images, the height otherwise. Unknown filter names use "point".
        """
        return self._apply("resize", self.resize_stage.resize, height, width, filter, blur)

    def resize_adaptive(self, height: int = 0, width: int = 0) -> "ImageEditor":
        return self._apply("resize_adaptive", self.resize_stage.resize_adaptive, height, width)

    def resize_sample(self, height: int = 0, width: int = 0) -> "ImageEditor":
        return self._apply("resize_sample", self.resize_stage.resize_sample, height, width)

    def resize_scale(self, height: int = 0, width: int = 0) -> "ImageEditor":
        return self._apply("resize_scale", self.resize_stage.resize_scale, height, width)

    def resize_thumbnail(self, height: int = 0, width: int = 0) -> "ImageEditor":
        return self._apply("resize_thumbnail", self.resize_stage.resize_thumbnail, height, width)

    # Geometry and sharpening

    def rotate(self, degrees: float, background: Any = None) -> "ImageEditor":
        """Rotate clockwise by ``degrees`` onto an expanded canvas."""
        return self._apply("rotate", self.rotate_stage.process, degrees, background)

    def unsharp(self, radius: float, sigma: float, amount: float,
                threshold: float) -> "ImageEditor":
        """Sharpen with an unsharp mask."""
        return self._apply("unsharp", self.edge_stage.unsharp, radius, sigma, amount, threshold)

    # Output

    def save(self, quality: int, path: Optional[Union[str, "os.PathLike[str]"]] = None) -> Union[bool, bytes, None]:
        """Set the save quality, then write to ``path`` or return encoded bytes.

        Args:
            quality: Compression quality, applied to lossy formats when
                strictly between 0 and 100
            path: Output file. Parent directories are created and the file
                is made world readable/writable.

        Returns:
            True/False for a file save, the encoded bytes when no path is
            given, None when no image is loaded
        """
        self.save_quality = quality
        return self._save_image(path)

    def view(self) -> Optional[bytes]:
        """Return the current image encoded as bytes without writing it."""
        return self._save_image(None)

    def get_image(self) -> Optional[Image.Image]:
        """Get the owned PIL Image."""
        return self.image

    def get_error_message(self) -> str:
        """Get the most recent load or save error."""
        return self.error

    def get_history(self) -> List[str]:
        """Names of the operations applied so far, in order."""
        return list(self.operations)

    def get_operation_timings(self) -> Dict[str, float]:
        """Accumulated seconds spent per operation name."""
        return self.operation_timings.copy()

    def close(self) -> None:
        """Release the owned image."""
        if self.image is not None:
            self.image.close()
            self.image = None

    def _apply(self, name: str, operation, *args) -> "ImageEditor":
        """Run one stage operation on the owned image and keep its result."""
        if self.image is None:
            self.logger.warning(f"Skipping {name}: no image loaded")
            return self

        previous = self.image
        start = time.time()
        self.image = operation(previous, *args)
        elapsed = time.time() - start

        self.operations.append(name)
        self.operation_timings[name] = self.operation_timings.get(name, 0.0) + elapsed

        # Release decoded sources and intermediates, never the caller's image
        if previous is not self.image and previous is not self._adopted:
            previous.close()

        if SETTINGS["system"].DISPLAY_PROCESSING_TIME:
            self.logger.info(f"{name} completed in {elapsed:.3f}s")

        return self

    def _load_image(self, source: Source) -> Optional[Image.Image]:
        """Decode the source, trying it as a path first and as a blob second."""
        if isinstance(source, Image.Image):
            self._format = source.format
            self._adopted = source
            return source

        try:
            image = self._decode_path(source)
        except (OSError, ValueError, TypeError) as e:
            self.logger.debug(f"Could not read {self._describe(source)} as a path: {e}")
        else:
            return self._loaded(image)

        try:
            image = self._decode_blob(source)
        except (OSError, ValueError, TypeError) as e:
            self.error = f"Could not load image '{self._describe(source)}' for editing"
            self.logger.error(f"{self.error}: {e}")
            if self.raise_errors:
                raise ImageLoadError(self.error) from e
            return None

        return self._loaded(image)

    def _decode_path(self, source: Source) -> Image.Image:
        if not isinstance(source, (str, bytes, os.PathLike)):
            raise TypeError(f"{type(source).__name__} is not a path")

        image = Image.open(source)
        image.load()
        return image

    def _decode_blob(self, source: Source) -> Image.Image:
        if isinstance(source, (str, os.PathLike)):
            data = os.fsencode(source)
        else:
            data = bytes(source)

        image = Image.open(io.BytesIO(data))
        image.load()
        return image

    def _loaded(self, image: Image.Image) -> Image.Image:
        self._format = image.format
        self.logger.debug(f"Loaded image: {image.size[0]}x{image.size[1]} ({image.mode}, {image.format})")
        return image

    def _describe(self, source: Source) -> str:
        """Printable form of a source for error messages."""
        if isinstance(source, memoryview):
            return f"<{source.nbytes}-byte blob>"
        if isinstance(source, (bytes, bytearray)):
            return f"<{len(source)}-byte blob>"
        if isinstance(source, os.PathLike):
            return os.fspath(source)
        return str(source)

    def _save_image(self, path) -> Union[bool, bytes, None]:
        """Write to ``path``, or encode to bytes when no path is given."""
        if self.image is None:
            self.logger.warning("Nothing to save: no image loaded")
            return False if path else None

        if not path:
            return self._encode()

        path = os.fspath(path)
        image_format = self._format_for_path(path)

        try:
            dirname = os.path.dirname(path)
            if dirname and not os.path.isdir(dirname):
                os.makedirs(dirname, exist_ok=True)

            image = self._prepare_for_format(self.image, image_format)
            image.save(path, format=image_format, **self._encoder_options(image_format))
        except (OSError, ValueError, KeyError) as e:
            self.error = f"Could not save image '{path}'"
            self.logger.error(f"{self.error}: {e}")
            if self.raise_errors:
                raise ImageSaveError(self.error) from e
            return False

        try:
            os.chmod(path, self.settings.OUTPUT_MODE)
        except OSError as e:
            self.logger.warning(f"Could not set permissions on {path}: {e}")

        self.logger.debug(f"Saved image: {path} ({image_format}, quality {self.save_quality})")
        return True

    def _encode(self) -> bytes:
        image_format = self._output_format()
        buffer = io.BytesIO()
        self._prepare_for_format(self.image, image_format).save(buffer, format=image_format)
        return buffer.getvalue()

    def _output_format(self) -> str:
        """Source format when Pillow can write it, else the configured default."""
        Image.init()
        if self._format and self._format.upper() in Image.SAVE:
            return self._format.upper()
        return self.settings.DEFAULT_FORMAT

    def _format_for_path(self, path: str) -> str:
        extension = os.path.splitext(path)[1].lower()
        return Image.registered_extensions().get(extension) or self._output_format()

    def _prepare_for_format(self, image: Image.Image, image_format: str) -> Image.Image:
        """Drop alpha and palettes for formats that only store RGB."""
        if image_format in RGB_ONLY_FORMATS and image.mode not in ("RGB", "L", "CMYK"):
            return image.convert("RGB")
        return image

    def _encoder_options(self, image_format: str) -> Dict[str, Any]:
        quality = self.save_quality
        if (image_format in LOSSY_FORMATS and isinstance(quality, (int, float))
                and 0 < quality < 100):
            return {"quality": int(quality)}
        return {}
