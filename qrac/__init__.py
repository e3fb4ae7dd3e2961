"""
QRAC: Quantized RGB Anchor Codec

Stores arbitrary bytes in the RGB channels of a lossless image. Each
channel value carries one quantization-interval index; values at or below
the filler threshold mean "no data".

    payload -> FEC -> bits -> symbols -> pixel grid
    pixel grid -> symbols -> bits -> FEC verify/correct -> payload

Modules:
    - module1_quantization: interval scheme and symbols
    - module2_bitpacking: bytes <-> bits <-> symbols
    - module3_fec: XOR parity / Reed-Solomon redundancy
    - module4_image_mapping: symbol layout, extraction, anchor repair
    - module5_dimension_planning: grid sizing
    - module6_pipeline: end-to-end encoder / decoder
    - module7_image_io: image and file collaborators
"""

from .config import CodecConfig, SizingTiers, load_config, default_codec_config
from .exceptions import (
    QRACError,
    ConfigurationError,
    CapacityError,
    ImageLoadError,
    ImageSaveError,
)
from .module6_pipeline import QRACEncoder, QRACDecoder, DecodeResult

__all__ = [
    'CodecConfig',
    'SizingTiers',
    'load_config',
    'default_codec_config',
    'QRACError',
    'ConfigurationError',
    'CapacityError',
    'ImageLoadError',
    'ImageSaveError',
    'QRACEncoder',
    'QRACDecoder',
    'DecodeResult',
]

__version__ = '1.0.0'
