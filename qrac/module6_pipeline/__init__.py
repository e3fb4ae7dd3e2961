"""
Module 6: Encode / Decode Pipeline

Chains the quantization, bit packing, FEC, mapping and planning modules
into the two end-to-end flows.

This module does NOT:
- Read or write image files (handled by Module 7)
- Parse command-line arguments (handled by qrac.cli)

Public API:
    - QRACEncoder: bytes -> pixel grid
    - QRACDecoder: pixel grid -> DecodeResult
    - ContentTypeDetector, detect_file_type: advisory output type
"""

from .encoder import QRACEncoder
from .decoder import QRACDecoder, DecodeResult
from .content_type import ContentTypeDetector, detect_file_type

__all__ = [
    'QRACEncoder',
    'QRACDecoder',
    'DecodeResult',
    'ContentTypeDetector',
    'detect_file_type',
]

__version__ = '1.0.0'
