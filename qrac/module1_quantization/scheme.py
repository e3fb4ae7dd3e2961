"""
Quantization scheme: interval and anchor math.

Channel values 0..filler_max_value are reserved for filler. The remaining
range filler_max_value+1..255 is split into intervals of width L (the last
one may be narrower). A symbol is an interval index; it is written as the
interval's anchor (integer midpoint) and read back by interval lookup.
"""

from typing import List

import numpy as np

from ..config import CodecConfig, compute_interval_count
from .symbols import Data, FILLER, Symbol

# Marks filler entries in the value -> index lookup table.
FILLER_INDEX = -1


class QuantizationScheme:
    """
    Pure mapping between channel values and symbols for one CodecConfig.

    Example (L=5, filler_max_value=10):
        interval_count() == 49, bits_per_symbol() == 5
        interval 0 covers 11..15, anchor 13
        interval 48 covers 251..255, anchor 253
    """

    def __init__(self, config: CodecConfig):
        self.config = config
        self.interval_width = config.interval_width
        self.filler_max_value = config.filler_max_value
        self._interval_count = compute_interval_count(
            config.filler_max_value, config.interval_width
        )
        # One shared Data instance per index
        self._data_symbols = tuple(Data(i) for i in range(self._interval_count))

    def interval_count(self) -> int:
        return self._interval_count

    def bits_per_symbol(self) -> int:
        """floor(log2(interval_count)): payload bits carried by one symbol."""
        return self._interval_count.bit_length() - 1

    def interval_bounds(self, index: int) -> tuple:
        """Inclusive (start, end) channel values of interval `index`."""
        if not 0 <= index < self._interval_count:
            raise ValueError(
                f"Interval index {index} out of range [0, {self._interval_count})"
            )
        start = self.filler_max_value + 1 + index * self.interval_width
        end = min(start + self.interval_width - 1, 255)
        return start, end

    def anchor(self, index: int) -> int:
        """Midpoint (floored) of interval `index`."""
        start, end = self.interval_bounds(index)
        return start + (end - start) // 2

    def is_filler(self, value: int) -> bool:
        return value <= self.filler_max_value

    def to_symbol(self, value: int) -> Symbol:
        """
        Decode a channel value into a symbol.

        Values past the last full interval clamp to the last index, since the
        final interval may be narrower than L.
        """
        if self.is_filler(value):
            return FILLER
        index = (value - (self.filler_max_value + 1)) // self.interval_width
        if index >= self._interval_count:
            index = self._interval_count - 1
        return self._data_symbols[index]

    def data_symbol(self, raw: int) -> Data:
        """Wrap a raw integer as Data, reduced modulo interval_count."""
        return self._data_symbols[raw % self._interval_count]

    def anchors(self) -> np.ndarray:
        """Anchor value of every interval, indexed by interval."""
        return np.array(
            [self.anchor(i) for i in range(self._interval_count)], dtype=np.uint8
        )

    def index_table(self) -> np.ndarray:
        """
        256-entry lookup: channel value -> interval index, FILLER_INDEX for filler.
        """
        values = np.arange(256, dtype=np.int32)
        indices = (values - (self.filler_max_value + 1)) // self.interval_width
        indices = np.minimum(indices, self._interval_count - 1)
        indices[values <= self.filler_max_value] = FILLER_INDEX
        return indices.astype(np.int16)

    def anchor_table(self) -> np.ndarray:
        """
        256-entry lookup: channel value -> anchor of its interval, 0 for filler.
        """
        indices = self.index_table()
        table = np.zeros(256, dtype=np.uint8)
        data_mask = indices != FILLER_INDEX
        table[data_mask] = self.anchors()[indices[data_mask]]
        return table

    def describe(self) -> List[dict]:
        """Per-interval summary (index, start, end, anchor) for diagnostics."""
        summary = []
        for i in range(self._interval_count):
            start, end = self.interval_bounds(i)
            summary.append({"index": i, "start": start, "end": end, "anchor": self.anchor(i)})
        return summary
