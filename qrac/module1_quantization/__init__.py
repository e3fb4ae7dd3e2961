"""
Module 1: Quantization Scheme

Maps a CodecConfig to an interval count, anchor values, and the
value -> symbol decoding used by the image mapper.

Public API:
    - QuantizationScheme: interval/anchor math
    - Data, Filler, FILLER, Symbol: the symbol variant
"""

from .scheme import QuantizationScheme, FILLER_INDEX
from .symbols import Data, Filler, FILLER, Symbol, is_data

__all__ = [
    "QuantizationScheme",
    "FILLER_INDEX",
    "Data",
    "Filler",
    "FILLER",
    "Symbol",
    "is_data",
]

__version__ = "1.0.0"
