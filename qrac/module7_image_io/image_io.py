"""
Image file I/O for QRAC grids.

Reads PNG/BMP/PPM (and, with a warning, JPEG) into RGB(A) arrays and writes
grids as lossless PNG or BMP. Paths go through np.fromfile / tofile so that
non-ASCII file names work on every platform.
"""

import logging
import os

import cv2
import numpy as np

from ..exceptions import ImageLoadError, ImageSaveError
from ..module4_image_mapping import with_alpha
from .interfaces import PixelSource, PixelSink

logger = logging.getLogger(__name__)

SUPPORTED_OUTPUT_FORMATS = ("png", "bmp")

JPEG_SIGNATURES = (b"\xFF\xD8\xFF\xE0", b"\xFF\xD8\xFF\xE1")


def is_jpeg_file(path: str) -> bool:
    """True if the file starts with a JFIF/EXIF JPEG signature."""
    try:
        with open(path, "rb") as f:
            header = f.read(4)
    except OSError:
        return False
    return header in JPEG_SIGNATURES


def has_jpeg_extension(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in (".jpg", ".jpeg")


class ImageFileSource(PixelSource):
    """Loads image files into (H, W, C) uint8 RGB or RGBA arrays."""

    def read(self, location: str) -> np.ndarray:
        """
        Raises:
            FileNotFoundError: If the file does not exist
            ImageLoadError: If the file cannot be decoded as an 8-bit image
        """
        if not os.path.isfile(location):
            raise FileNotFoundError(f"Image file not found: {location}")

        if has_jpeg_extension(location) or is_jpeg_file(location):
            logger.warning(
                f"{location} is JPEG: lossy compression usually corrupts QRAC data. "
                f"Use PNG or BMP"
            )

        raw = np.fromfile(location, dtype=np.uint8)
        if raw.size == 0:
            raise ImageLoadError(f"Image file is empty: {location}")
        image = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED)
        if image is None:
            raise ImageLoadError(f"Failed to load image: {location}")
        if image.dtype != np.uint8:
            raise ImageLoadError(
                f"Unsupported image depth {image.dtype} in {location}; expected 8 bits per channel"
            )

        if image.ndim == 3 and image.shape[2] == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        elif image.ndim == 3 and image.shape[2] == 4:
            image = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

        logger.debug(f"Loaded {location}: shape {image.shape}")
        return image


class ImageFileSink(PixelSink):
    """
    Writes (H, W, 3|4) RGB(A) grids as PNG or BMP, chosen by extension.

    Parameters:
        alpha (bool): add an opaque alpha channel to 3-channel grids
    """

    def __init__(self, alpha: bool = False):
        self.alpha = alpha

    def write(self, location: str, pixels: np.ndarray) -> None:
        """
        Raises:
            ValueError: If the extension is not .png or .bmp, or the grid shape is invalid
            ImageSaveError: If encoding or writing fails
        """
        extension = os.path.splitext(location)[1].lower().lstrip(".")
        if extension not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported output format '{extension}'. Use one of {SUPPORTED_OUTPUT_FORMATS}"
            )

        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(f"Invalid grid shape {pixels.shape}. Expected (H, W, 3) or (H, W, 4)")

        if self.alpha:
            pixels = with_alpha(pixels)

        if pixels.shape[2] == 4:
            bgr = cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)
        else:
            bgr = cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR)

        output_dir = os.path.dirname(location)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir, exist_ok=True)

        ok, encoded = cv2.imencode("." + extension, bgr)
        if not ok:
            raise ImageSaveError(f"Failed to encode image: {location}")
        try:
            encoded.tofile(location)
        except OSError as e:
            raise ImageSaveError(f"Failed to save output image {location}: {e}") from e

        logger.info(f"Image saved: {location} ({pixels.shape[1]}x{pixels.shape[0]}, {pixels.shape[2]} channels)")
