"""
Module 2: Bit Packing

Byte <-> bit <-> symbol conversions with explicit padding (encode) and
filler-skipping truncation (decode).

Public API:
    - BitPacker(scheme).bits_to_symbols(bits, k)
    - BitPacker(scheme).symbols_to_bits(symbols, k, expected_bit_count)
    - bytes_to_bits(data) / bits_to_bytes(bits)
    - count_data_symbols(symbols)
"""

from .packer import BitPacker, bytes_to_bits, bits_to_bytes, count_data_symbols

__all__ = [
    "BitPacker",
    "bytes_to_bits",
    "bits_to_bytes",
    "count_data_symbols",
]

__version__ = "1.0.0"
