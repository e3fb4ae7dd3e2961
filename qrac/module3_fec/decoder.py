# file: qrac/module3_fec/decoder.py

"""
FEC decoding entry point.

Provides fec_decode() with explicit residual-error reporting. Decoding never
raises on corrupted content: residual errors are reported through the
all_corrected flag.
"""

from typing import Tuple

from ..config import CodecConfig
from .parity_codec import XorParityCodec, FECDecodeReport
from .rs_codec import ReedSolomonCodec, decode_best_effort
from .errors import FECDecodingError, FECConfigurationError


def fec_decode(data: bytes, config: CodecConfig) -> Tuple[bytes, bool]:
    """
    Verify and correct a FEC-protected buffer.

    Args:
        data: FEC-protected bytes
        config: CodecConfig; fec_type selects the backend

    Returns:
        (payload, all_corrected)

    Raises:
        FECDecodingError: If input is not bytes
        FECConfigurationError: If the FEC type is unknown

    Error Handling:
        - all_corrected=True: every redundancy check verifies
        - all_corrected=False: best-effort payload, may contain errors
    """
    report = fec_decode_with_report(data, config)
    return report.payload, report.all_corrected


def fec_decode_with_report(data: bytes, config: CodecConfig) -> FECDecodeReport:
    """
    Same as fec_decode() but returns the full FECDecodeReport.

    The Reed-Solomon backend fills only payload, all_corrected and warnings.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise FECDecodingError(f"Input must be bytes, got {type(data)}")

    if config.fec_type == 'xor_parity':
        codec = XorParityCodec(config.fec_redundancy_ratio, config.max_fec_warnings)
        return codec.decode_with_report(data)
    elif config.fec_type == 'reed_solomon':
        return _decode_reed_solomon(bytes(data), config)
    else:
        raise FECConfigurationError(f"Unknown FEC type: {config.fec_type}")


def _decode_reed_solomon(data: bytes, config: CodecConfig) -> FECDecodeReport:
    codec = ReedSolomonCodec(nsym=config.rs_nsym)
    payload, ok = decode_best_effort(codec, data)
    warnings = [] if ok else ["Reed-Solomon correction incomplete; payload may contain errors"]
    return FECDecodeReport(payload=payload, all_corrected=ok, warnings=warnings)
