# file: qrac/module3_fec/__init__.py

"""
Module 3: Forward Error Correction (FEC)

Appends, verifies and corrects a redundancy suffix on the payload before it
is packed into symbols. The default backend is a best-effort XOR parity
codec; a Reed-Solomon backend is available through configuration.

Public API:
    - fec_encode(data: bytes, config) -> bytes
    - fec_decode(data: bytes, config) -> (bytes, bool)
    - fec_decode_with_report(data: bytes, config) -> FECDecodeReport
    - compute_ber(original: bytes, received: bytes) -> float
"""

from .encoder import fec_encode
from .decoder import fec_decode, fec_decode_with_report
from .parity_codec import XorParityCodec, FECDecodeReport
from .rs_codec import ReedSolomonCodec
from .metrics import compute_ber, compute_byte_error_rate, compute_redundancy_overhead
from .errors import (
    FECError,
    FECEncodingError,
    FECDecodingError,
    FECCorrectionError,
    FECConfigurationError,
)

__version__ = "1.0.0"

__all__ = [
    "fec_encode",
    "fec_decode",
    "fec_decode_with_report",
    "XorParityCodec",
    "FECDecodeReport",
    "ReedSolomonCodec",
    "compute_ber",
    "compute_byte_error_rate",
    "compute_redundancy_overhead",
    "FECError",
    "FECEncodingError",
    "FECDecodingError",
    "FECCorrectionError",
    "FECConfigurationError",
]
