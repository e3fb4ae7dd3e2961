"""
QRAC Encoder

Orchestrates the encode pipeline:
    payload bytes
    → FEC encode
    → bytes to bits
    → bits to symbols
    → grid planning (adaptive / auto / explicit)
    → symbol layout
    → (H, W, 3) uint8 pixel grid for an external image writer
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..config import CodecConfig, SizingTiers
from ..exceptions import CapacityError
from ..module1_quantization import QuantizationScheme
from ..module2_bitpacking import BitPacker, bytes_to_bits
from ..module3_fec import fec_encode
from ..module4_image_mapping import SymbolImageMapper
from ..module5_dimension_planning import DimensionPlanner

logger = logging.getLogger(__name__)


class QRACEncoder:
    """
    Main encode engine: bytes in, pixel grid out.
    """

    def __init__(self, config: CodecConfig, tiers: Optional[SizingTiers] = None):
        """
        Args:
            config: Codec configuration
            tiers: Fixed grid sizes for auto mode (defaults to SizingTiers())
        """
        self.config = config

        self.scheme = QuantizationScheme(config)
        self.packer = BitPacker(self.scheme)
        self.mapper = SymbolImageMapper(self.scheme)
        self.planner = DimensionPlanner(config, tiers)

    def encode(
        self,
        payload: bytes,
        mode: str = "adaptive",
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Encode a payload into a pixel grid.

        Args:
            payload: Bytes to encode
            mode: 'adaptive' (minimal grid) or 'auto' (fixed tiers)
            width: Explicit grid width (requires height; overrides mode)
            height: Explicit grid height (requires width; overrides mode)

        Returns:
            pixels: (height, width, 3) uint8 array

        Raises:
            CapacityError: If the grid cannot hold the encoded symbols
            ValueError: If only one of width/height is given, or mode is unknown
        """
        pixels, _ = self._encode_internal(payload, mode, width, height)
        return pixels

    def encode_with_metadata(
        self,
        payload: bytes,
        mode: str = "adaptive",
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Encode and collect per-stage metadata.

        Returns:
            pixels: (height, width, 3) uint8 array
            metadata: Dictionary containing:
                - payload_bytes, fec_bytes, total_bits, symbol_count
                - interval_count, bits_per_symbol
                - width, height, required_pixels, mode
                - encoding_time: seconds
        """
        return self._encode_internal(payload, mode, width, height)

    def _encode_internal(
        self,
        payload: bytes,
        mode: str,
        width: Optional[int],
        height: Optional[int]
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        if not isinstance(payload, (bytes, bytearray)):
            raise TypeError(f"Payload must be bytes, got {type(payload).__name__}")
        if (width is None) != (height is None):
            raise ValueError("width and height must be given together")

        start_time = time.time()

        protected = fec_encode(bytes(payload), self.config)
        logger.info(f"Data with FEC: {len(protected)} bytes ({len(payload)} payload)")

        bits = bytes_to_bits(protected)
        bits_per_symbol = self.scheme.bits_per_symbol()
        symbols = self.packer.bits_to_symbols(bits, bits_per_symbol)
        logger.debug(
            f"Generated {len(bits)} bits -> {len(symbols)} symbols "
            f"({self.scheme.interval_count()} intervals, {bits_per_symbol} bits/symbol)"
        )

        if width is None:
            plan = self.planner.plan(len(protected), mode, original_file_size=len(payload))
            width, height = plan.width, plan.height
            mode_used = plan.mode
        else:
            mode_used = "explicit"

        needed, available = self.planner.check_capacity(len(symbols), width, height)
        if needed > available:
            logger.warning(
                f"Image dimensions ({width}x{height}) too small for {len(symbols)} symbols: "
                f"required pixels {needed}, available {available}"
            )
            raise CapacityError(required=needed, available=available)

        pixels = self.mapper.layout(symbols, width, height)

        metadata = {
            'payload_bytes': len(payload),
            'fec_bytes': len(protected) - len(payload),
            'total_bits': int(len(bits)),
            'symbol_count': len(symbols),
            'interval_count': self.scheme.interval_count(),
            'bits_per_symbol': bits_per_symbol,
            'width': width,
            'height': height,
            'required_pixels': needed,
            'mode': mode_used,
            'encoding_time': time.time() - start_time,
        }
        return pixels, metadata
