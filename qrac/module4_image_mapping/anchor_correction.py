"""
Anchor Correction

Repairs a damaged QRAC image by snapping every data channel back onto its
interval anchor and every filler pixel to pure zero. Alpha (channel 3 and
beyond) is passed through untouched.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..config import SYMBOLS_PER_PIXEL
from ..module1_quantization import QuantizationScheme, FILLER_INDEX
from .mapper import grid_pixels

logger = logging.getLogger(__name__)


@dataclass
class CorrectionReport:
    """Statistics from one anchor-correction pass."""
    deviating_values: int
    filler_pixels: int
    total_pixels: int
    deviation_ratio: float
    changed_values: int = 0

    @property
    def already_pure(self) -> bool:
        """True when the pass left every channel value unchanged."""
        return self.changed_values == 0


class AnchorCorrector:
    """
    Snaps pixel values back onto the anchors of a QuantizationScheme.
    """

    def __init__(self, scheme: QuantizationScheme):
        self.scheme = scheme
        self._anchor_table = scheme.anchor_table()
        self._index_table = scheme.index_table()

    def correct(
        self,
        pixels: np.ndarray,
        width: int,
        height: int,
        channels: int
    ) -> Tuple[np.ndarray, CorrectionReport]:
        """
        Return a corrected (height, width, channels) copy and a report.

        Rules per pixel:
            - first 3 channels all filler-valued: set to 0
            - otherwise each channel becomes the anchor of its interval, or 0
              if that single channel is filler-valued
        """
        if channels < SYMBOLS_PER_PIXEL:
            raise ValueError(
                f"Pixel buffer needs at least {SYMBOLS_PER_PIXEL} channels, got {channels}"
            )

        grid = grid_pixels(pixels, width, height, channels).copy()
        rgb = grid[:, :SYMBOLS_PER_PIXEL]

        filler_pixels = np.all(rgb <= self.scheme.filler_max_value, axis=1)
        snapped = self._anchor_table[rgb]
        snapped[filler_pixels] = 0

        # Lone filler channels in data pixels are cleared but not counted
        data_channels = (self._index_table[rgb] != FILLER_INDEX) & ~filler_pixels[:, None]
        deviating = int(np.count_nonzero((rgb != snapped) & data_channels))

        filler_count = int(np.count_nonzero(filler_pixels))
        total_pixels = width * height
        data_values = (total_pixels - filler_count) * SYMBOLS_PER_PIXEL
        ratio = deviating / data_values if data_values > 0 else 0.0

        changed = int(np.count_nonzero(rgb != snapped))
        grid[:, :SYMBOLS_PER_PIXEL] = snapped

        report = CorrectionReport(
            deviating_values=deviating,
            filler_pixels=filler_count,
            total_pixels=total_pixels,
            deviation_ratio=ratio,
            changed_values=changed,
        )
        logger.info(
            f"Detected {deviating} pixel values deviating from anchors "
            f"({ratio * 100:.2f}%), {filler_count} filler pixels"
        )
        return grid.reshape(height, width, channels), report
