"""
QRAC Decoder

Orchestrates the decode pipeline:
    pixel grid from an external image reader
    → channel normalization (gray → RGB)
    → symbol extraction (filler pixels skipped)
    → symbols to bits (truncated to whole bytes)
    → bits to bytes
    → FEC verify / correct
    → payload + advisory content type

Decoding never raises on corrupted content. Residual FEC errors are
reported through DecodeResult.all_corrected.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..config import CodecConfig
from ..module1_quantization import QuantizationScheme
from ..module2_bitpacking import BitPacker, bits_to_bytes, count_data_symbols
from ..module3_fec import fec_decode_with_report, FECDecodeReport
from ..module4_image_mapping import SymbolImageMapper, AnchorCorrector, CorrectionReport, ensure_rgb
from .content_type import ContentTypeDetector

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """
    Result of decoding one pixel grid.

    Attributes:
        payload: Recovered bytes (FEC stripped, best-effort on failure)
        all_corrected: False when redundancy checks still fail after correction
        content_type: Advisory extension ('txt', 'zip', 'bin', ...)
        warnings: FEC diagnostics
        fec_report: Full FEC report
    """
    payload: bytes
    all_corrected: bool
    content_type: str
    warnings: List[str] = field(default_factory=list)
    fec_report: Optional[FECDecodeReport] = None


class QRACDecoder:
    """
    Main decode engine: pixel grid in, bytes out.
    """

    def __init__(self, config: CodecConfig, detector: Optional[ContentTypeDetector] = None):
        self.config = config

        self.scheme = QuantizationScheme(config)
        self.packer = BitPacker(self.scheme)
        self.mapper = SymbolImageMapper(self.scheme)
        self.corrector = AnchorCorrector(self.scheme)
        self.detector = detector if detector is not None else ContentTypeDetector()

    def decode(
        self,
        pixels: np.ndarray,
        width: Optional[int] = None,
        height: Optional[int] = None,
        channels: Optional[int] = None
    ) -> DecodeResult:
        """
        Decode a pixel grid.

        Args:
            pixels: (H, W), (H, W, C) uint8 image, or a flat buffer together
                with width, height and channels
            width, height, channels: Required only for flat buffers

        Returns:
            DecodeResult
        """
        result, _ = self._decode_internal(pixels, width, height, channels)
        return result

    def decode_with_metadata(
        self,
        pixels: np.ndarray,
        width: Optional[int] = None,
        height: Optional[int] = None,
        channels: Optional[int] = None
    ) -> Tuple[DecodeResult, Dict[str, Any]]:
        """
        Decode and collect per-stage metadata.

        Returns:
            result: DecodeResult
            metadata: Dictionary containing:
                - width, height, channels
                - storable_symbols: width * height * 3
                - data_symbols: non-filler symbols extracted
                - extracted_bits, extracted_bytes
                - payload_bytes, all_corrected, content_type
                - decoding_time: seconds
        """
        return self._decode_internal(pixels, width, height, channels)

    def repair(
        self,
        pixels: np.ndarray,
        width: Optional[int] = None,
        height: Optional[int] = None,
        channels: Optional[int] = None
    ) -> Tuple[np.ndarray, CorrectionReport]:
        """
        Snap a drifted grid back onto anchors (filler pixels to 0, alpha kept).

        Returns:
            corrected: (H, W, C) uint8 array
            report: CorrectionReport
        """
        grid, width, height, channels = self._normalize(pixels, width, height, channels)
        return self.corrector.correct(grid, width, height, channels)

    def _decode_internal(
        self,
        pixels: np.ndarray,
        width: Optional[int],
        height: Optional[int],
        channels: Optional[int]
    ) -> Tuple[DecodeResult, Dict[str, Any]]:
        start_time = time.time()

        grid, width, height, channels = self._normalize(pixels, width, height, channels)
        logger.info(f"Loaded image: {width}x{height} pixels, {channels} channels")

        symbols = self.mapper.extract(grid, width, height, channels)
        bits_per_symbol = self.scheme.bits_per_symbol()

        # The last encode symbol is zero-padded; keep whole bytes only
        data_symbols = count_data_symbols(symbols)
        expected_bits = (data_symbols * bits_per_symbol) // 8 * 8

        bits = self.packer.symbols_to_bits(symbols, bits_per_symbol, expected_bits)
        extracted = bits_to_bytes(bits)
        logger.info(
            f"Extracted {data_symbols} data symbols -> {len(bits)} bits -> {len(extracted)} bytes"
        )

        fec_report = fec_decode_with_report(extracted, self.config)
        if not fec_report.all_corrected:
            logger.warning("Data may contain uncorrectable errors")

        content_type = self.detector.detect(fec_report.payload)

        result = DecodeResult(
            payload=fec_report.payload,
            all_corrected=fec_report.all_corrected,
            content_type=content_type,
            warnings=list(fec_report.warnings),
            fec_report=fec_report,
        )
        metadata = {
            'width': width,
            'height': height,
            'channels': channels,
            'storable_symbols': len(symbols),
            'data_symbols': data_symbols,
            'extracted_bits': int(len(bits)),
            'extracted_bytes': len(extracted),
            'payload_bytes': len(fec_report.payload),
            'all_corrected': fec_report.all_corrected,
            'content_type': content_type,
            'decoding_time': time.time() - start_time,
        }
        return result, metadata

    @staticmethod
    def _normalize(
        pixels: np.ndarray,
        width: Optional[int],
        height: Optional[int],
        channels: Optional[int]
    ) -> Tuple[np.ndarray, int, int, int]:
        pixels = np.asarray(pixels, dtype=np.uint8)

        if pixels.ndim in (2, 3) and width is None and height is None:
            grid = ensure_rgb(pixels)
            height, width, channels = grid.shape
            return grid, width, height, channels

        if width is None or height is None or channels is None:
            raise ValueError(
                "width, height and channels are required for flat pixel buffers"
            )
        if channels < 3:
            grid = ensure_rgb(
                _reshape_padded(pixels, width, height, channels)
            )
            return grid, width, height, 3
        return pixels, width, height, channels


def _reshape_padded(pixels: np.ndarray, width: int, height: int, channels: int) -> np.ndarray:
    flat = pixels.reshape(-1)
    needed = width * height * channels
    if len(flat) < needed:
        flat = np.concatenate([flat, np.zeros(needed - len(flat), dtype=np.uint8)])
    return flat[:needed].reshape(height, width, channels)
