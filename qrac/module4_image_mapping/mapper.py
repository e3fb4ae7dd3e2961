"""
Symbol Image Mapper

Lays symbols onto a pixel grid (3 symbols per pixel, one per RGB channel)
and extracts them back.

Pixel value 0 is the universal filler color: the grid starts all-zero, and
on extraction a pixel whose first 3 channels are all filler-valued yields
3 Filler symbols. Extraction always yields width*height*3 symbols; callers
rely on symbols_to_bits truncation rather than on the symbol count.
"""

import logging
from typing import List, Sequence

import numpy as np

from ..config import SYMBOLS_PER_PIXEL
from ..exceptions import CapacityError
from ..module1_quantization import QuantizationScheme, Data, Filler, FILLER, Symbol, FILLER_INDEX

logger = logging.getLogger(__name__)

# Type alias
PixelGrid = np.ndarray  # Shape: (H, W, C), dtype: uint8, C >= 3


def required_pixels(symbol_count: int) -> int:
    return (symbol_count + SYMBOLS_PER_PIXEL - 1) // SYMBOLS_PER_PIXEL


def _validate_dimensions(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise ValueError(f"Invalid grid dimensions: {width}x{height}")


class SymbolImageMapper:
    """
    Maps symbol sequences to RGB pixel grids and back for one scheme.
    """

    def __init__(self, scheme: QuantizationScheme):
        self.scheme = scheme
        self._anchors = scheme.anchors()
        self._index_table = scheme.index_table()

    def layout(self, symbols: Sequence[Symbol], width: int, height: int) -> PixelGrid:
        """
        Write symbols into a zero-initialised (height, width, 3) grid.

        Symbol i goes to pixel i // 3, channel i % 3 (row-major). Data symbols
        are written as their interval anchor; Filler leaves the channel at 0.

        Raises:
            CapacityError: If ceil(len(symbols) / 3) > width * height
            ValueError: If a Data index is outside the scheme's intervals
        """
        _validate_dimensions(width, height)

        available = width * height
        needed = required_pixels(len(symbols))
        if needed > available:
            raise CapacityError(required=needed, available=available)

        grid = np.zeros(available * SYMBOLS_PER_PIXEL, dtype=np.uint8)
        if len(symbols) > 0:
            indices = self._symbol_indices(symbols)
            data_mask = indices != FILLER_INDEX
            grid[:len(symbols)][data_mask] = self._anchors[indices[data_mask]]

        logger.debug(f"Laid out {len(symbols)} symbols on {width}x{height} grid ({needed} pixels used)")
        return grid.reshape(height, width, SYMBOLS_PER_PIXEL)

    def extract(
        self,
        pixel_buffer: np.ndarray,
        width: int,
        height: int,
        channels: int
    ) -> List[Symbol]:
        """
        Read width*height*3 symbols from a pixel buffer.

        Only the first width*height pixels are read. Surplus buffer bytes
        are ignored; missing bytes are read as filler.

        Args:
            pixel_buffer: uint8 buffer of any shape, interpreted as flat
                width*height*channels intensities
            width: Grid width
            height: Grid height
            channels: Channels per pixel (>= 3); channels beyond 3 are ignored

        Returns:
            symbols: exactly width*height*3 symbols
        """
        indices = self.extract_indices(pixel_buffer, width, height, channels)
        data_symbols = [self.scheme.data_symbol(i) for i in range(self.scheme.interval_count())]
        return [
            FILLER if i == FILLER_INDEX else data_symbols[i]
            for i in indices.tolist()
        ]

    def extract_indices(
        self,
        pixel_buffer: np.ndarray,
        width: int,
        height: int,
        channels: int
    ) -> np.ndarray:
        """
        Vectorised form of extract(): interval indices, FILLER_INDEX for filler.
        """
        _validate_dimensions(width, height)
        if channels < SYMBOLS_PER_PIXEL:
            raise ValueError(
                f"Pixel buffer needs at least {SYMBOLS_PER_PIXEL} channels, got {channels}"
            )

        pixels = grid_pixels(pixel_buffer, width, height, channels)
        rgb = pixels[:, :SYMBOLS_PER_PIXEL]

        filler_pixels = np.all(rgb <= self.scheme.filler_max_value, axis=1)
        indices = self._index_table[rgb].astype(np.int64)
        indices[filler_pixels] = FILLER_INDEX

        return indices.reshape(-1)

    def _symbol_indices(self, symbols: Sequence[Symbol]) -> np.ndarray:
        count = self.scheme.interval_count()
        indices = np.empty(len(symbols), dtype=np.int64)
        for position, symbol in enumerate(symbols):
            if isinstance(symbol, Data):
                if not 0 <= symbol.index < count:
                    raise ValueError(
                        f"Symbol index {symbol.index} at position {position} "
                        f"out of range [0, {count})"
                    )
                indices[position] = symbol.index
            elif isinstance(symbol, Filler):
                indices[position] = FILLER_INDEX
            else:
                raise TypeError(f"Not a symbol at position {position}: {symbol!r}")
        return indices


def grid_pixels(pixel_buffer: np.ndarray, width: int, height: int, channels: int) -> np.ndarray:
    """
    View a buffer as (width*height, channels) pixels.

    Surplus bytes are dropped; a short buffer is zero-padded (read as filler).
    """
    flat = np.asarray(pixel_buffer, dtype=np.uint8).reshape(-1)
    needed = width * height * channels
    if len(flat) < needed:
        logger.debug(f"Pixel buffer short by {needed - len(flat)} bytes; padding with filler")
        flat = np.concatenate([flat, np.zeros(needed - len(flat), dtype=np.uint8)])
    elif len(flat) > needed:
        logger.debug(f"Ignoring {len(flat) - needed} surplus pixel buffer bytes")
    return flat[:needed].reshape(width * height, channels)
