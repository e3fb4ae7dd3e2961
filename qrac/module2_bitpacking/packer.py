"""
Bit Packer

Converts between bytes, bit streams and symbol sequences.

Encode pads, decode truncates:
    - bits_to_bytes and bits_to_symbols zero-pad an incomplete trailing group
    - symbols_to_bits skips Filler symbols entirely and truncates to exactly
      the expected bit count

Unused grid capacity is filled with Filler pixels, which must never be read
back as zero data bits.
"""

from itertools import islice
from typing import Iterable, List, Sequence

import numpy as np

from ..module1_quantization import QuantizationScheme, Data, Symbol, is_data


def bytes_to_bits(data: bytes) -> np.ndarray:
    """
    Expand bytes into a bit array, MSB first.

    Args:
        data: Bytes

    Returns:
        bits: uint8 array of 0/1 values, length 8 * len(data)
    """
    if len(data) == 0:
        return np.array([], dtype=np.uint8)
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8), bitorder='big')


def bits_to_bytes(bits: np.ndarray) -> bytes:
    """
    Pack bits into bytes, MSB first.

    If the number of bits is not a multiple of 8, the last byte is padded
    with zeros on the low-order side.
    """
    bits = np.asarray(bits, dtype=np.uint8)
    if len(bits) == 0:
        return b''

    bits = bits & 1
    remainder = len(bits) % 8
    if remainder != 0:
        bits = np.concatenate([bits, np.zeros(8 - remainder, dtype=np.uint8)])

    return np.packbits(bits, bitorder='big').tobytes()


def _check_width(bits_per_symbol: int) -> None:
    if bits_per_symbol < 1:
        raise ValueError(f"bits_per_symbol must be >= 1, got {bits_per_symbol}")


class BitPacker:
    """
    Packs bit streams into Data symbols and unpacks symbol sequences.

    The scheme supplies interval_count, used to reduce packed integers.
    """

    def __init__(self, scheme: QuantizationScheme):
        self.scheme = scheme

    bytes_to_bits = staticmethod(bytes_to_bits)
    bits_to_bytes = staticmethod(bits_to_bytes)

    def bits_to_symbols(self, bits: np.ndarray, bits_per_symbol: int) -> List[Data]:
        """
        Group bits into k-bit windows (MSB first) and wrap each as Data.

        An incomplete trailing window is zero-padded. Each integer is reduced
        modulo interval_count.

        Args:
            bits: 0/1 array
            bits_per_symbol: k

        Returns:
            ceil(len(bits) / k) Data symbols
        """
        _check_width(bits_per_symbol)
        bits = np.asarray(bits, dtype=np.uint8)
        if len(bits) == 0:
            return []

        k = bits_per_symbol
        symbol_count = (len(bits) + k - 1) // k
        padded = np.zeros(symbol_count * k, dtype=np.int64)
        padded[:len(bits)] = bits & 1

        weights = 1 << np.arange(k - 1, -1, -1, dtype=np.int64)
        values = padded.reshape(symbol_count, k) @ weights

        return [self.scheme.data_symbol(int(v)) for v in values]

    def symbols_to_bits(
        self,
        symbols: Iterable[Symbol],
        bits_per_symbol: int,
        expected_bit_count: int
    ) -> np.ndarray:
        """
        Unpack symbols into exactly expected_bit_count bits.

        Filler symbols contribute no bits. Each Data(s) contributes the k-bit
        binary expansion of s, MSB first. Reading stops as soon as enough bits
        are collected; the result is shorter only if the symbols run out.
        """
        _check_width(bits_per_symbol)
        if expected_bit_count < 0:
            raise ValueError(f"expected_bit_count must be >= 0, got {expected_bit_count}")
        if expected_bit_count == 0:
            return np.array([], dtype=np.uint8)

        k = bits_per_symbol
        needed = (expected_bit_count + k - 1) // k
        indices = np.fromiter(
            islice((s.index for s in symbols if is_data(s)), needed),
            dtype=np.int64
        )
        if len(indices) == 0:
            return np.array([], dtype=np.uint8)

        shifts = np.arange(k - 1, -1, -1, dtype=np.int64)
        bits = ((indices[:, None] >> shifts) & 1).astype(np.uint8).reshape(-1)
        return bits[:expected_bit_count]


def count_data_symbols(symbols: Sequence[Symbol]) -> int:
    """Number of non-filler symbols."""
    return sum(1 for s in symbols if is_data(s))
