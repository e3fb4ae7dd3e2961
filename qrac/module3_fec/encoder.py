# file: qrac/module3_fec/encoder.py

"""
FEC encoding entry point.

Provides fec_encode() which dispatches on CodecConfig.fec_type.
"""

from ..config import CodecConfig
from .parity_codec import XorParityCodec
from .rs_codec import ReedSolomonCodec
from .errors import FECEncodingError, FECConfigurationError


def fec_encode(data: bytes, config: CodecConfig) -> bytes:
    """
    Append forward error correction to a payload.

    Args:
        data: Payload bytes
        config: CodecConfig; fec_type selects the backend

    Returns:
        FEC-protected byte buffer

    Raises:
        FECEncodingError: If input is not bytes
        FECConfigurationError: If the FEC type is unknown

    Example:
        >>> config = CodecConfig(5, 10, 0.25, 15, 16)
        >>> protected = fec_encode(b"payload!", config)
        >>> len(protected)
        10
    """
    if not isinstance(data, (bytes, bytearray)):
        raise FECEncodingError(f"Input must be bytes, got {type(data)}")

    if config.fec_type == 'xor_parity':
        return XorParityCodec(config.fec_redundancy_ratio, config.max_fec_warnings).encode(data)
    elif config.fec_type == 'reed_solomon':
        return ReedSolomonCodec(nsym=config.rs_nsym).encode(data)
    else:
        raise FECConfigurationError(f"Unknown FEC type: {config.fec_type}")
