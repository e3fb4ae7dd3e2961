"""
Channel normalization helpers.
"""

import numpy as np


def ensure_rgb(pixels: np.ndarray) -> np.ndarray:
    """
    Return an image with at least 3 channels.

    Grayscale (H, W) or (H, W, 1) and gray+alpha (H, W, 2) images are
    expanded by replicating the first channel into R, G and B; any alpha is
    dropped. Images with 3 or more channels are returned unchanged.
    """
    pixels = np.asarray(pixels, dtype=np.uint8)
    if pixels.ndim == 2:
        pixels = pixels[..., np.newaxis]
    if pixels.ndim != 3:
        raise ValueError(f"Invalid image shape {pixels.shape}. Expected (H, W) or (H, W, C)")

    if pixels.shape[2] >= 3:
        return pixels
    return np.repeat(pixels[..., :1], 3, axis=2)


def with_alpha(pixels: np.ndarray, alpha: int = 255) -> np.ndarray:
    """Add a constant alpha channel to an (H, W, 3) image; 4-channel input is returned as-is."""
    pixels = np.asarray(pixels, dtype=np.uint8)
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Invalid image shape {pixels.shape}. Expected (H, W, 3) or (H, W, 4)")
    if pixels.shape[2] == 4:
        return pixels

    alpha_channel = np.full(pixels.shape[:2] + (1,), alpha, dtype=np.uint8)
    return np.concatenate([pixels, alpha_channel], axis=2)
