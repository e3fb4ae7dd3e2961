"""
Dimension Planner

Chooses grid dimensions for a payload.

Adaptive mode returns the smallest near-square grid that holds the payload
(never below min_dimension). Auto mode picks one of three fixed square sizes
by original file size and does NOT guarantee capacity; the caller checks.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import CodecConfig, SizingTiers, SYMBOLS_PER_PIXEL
from ..module1_quantization import QuantizationScheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridPlan:
    """Planned grid dimensions."""
    width: int
    height: int
    total_symbols: int
    pixels_needed: int
    mode: str

    @property
    def available_pixels(self) -> int:
        return self.width * self.height

    @property
    def fits(self) -> bool:
        return self.pixels_needed <= self.available_pixels

    @property
    def estimated_bytes(self) -> int:
        """Raw RGB size of the grid."""
        return self.available_pixels * SYMBOLS_PER_PIXEL


class DimensionPlanner:
    """
    Computes grid dimensions for a payload under one CodecConfig.
    """

    def __init__(self, config: CodecConfig, tiers: Optional[SizingTiers] = None):
        self.config = config
        self.tiers = tiers if tiers is not None else SizingTiers()
        self.scheme = QuantizationScheme(config)

    def symbols_needed(self, payload_byte_count: int) -> int:
        """ceil(payload_byte_count * 8 / bits_per_symbol)"""
        if payload_byte_count < 0:
            raise ValueError(f"payload_byte_count must be >= 0, got {payload_byte_count}")
        bits_per_symbol = self.scheme.bits_per_symbol()
        return (payload_byte_count * 8 + bits_per_symbol - 1) // bits_per_symbol

    def plan_adaptive(self, payload_byte_count: int) -> GridPlan:
        """
        Smallest near-square grid holding payload_byte_count bytes.

        Postcondition: width * height * 3 >= total_symbols and both
        dimensions >= min_dimension.
        """
        total_symbols = self.symbols_needed(payload_byte_count)
        pixels_needed = (total_symbols + SYMBOLS_PER_PIXEL - 1) // SYMBOLS_PER_PIXEL

        side = math.isqrt(pixels_needed)
        if side * side < pixels_needed:
            side += 1

        width = max(side, self.config.min_dimension)
        height = max((pixels_needed + width - 1) // width, self.config.min_dimension)

        logger.info(f"Precise dimensions: {width}x{height} (pixels needed: {pixels_needed})")
        return GridPlan(
            width=width,
            height=height,
            total_symbols=total_symbols,
            pixels_needed=pixels_needed,
            mode="adaptive",
        )

    def plan_auto(self, original_file_size: int, payload_byte_count: Optional[int] = None) -> GridPlan:
        """
        Fixed square tier chosen by the original (pre-FEC) file size.

        Args:
            original_file_size: size used for tier selection
            payload_byte_count: FEC-protected size used for the capacity
                figures (defaults to original_file_size)
        """
        if original_file_size < 0:
            raise ValueError(f"original_file_size must be >= 0, got {original_file_size}")

        if original_file_size <= self.tiers.small_threshold:
            side = self.tiers.small_size
        elif original_file_size <= self.tiers.medium_threshold:
            side = self.tiers.medium_size
        else:
            side = self.tiers.large_size

        if payload_byte_count is None:
            payload_byte_count = original_file_size
        total_symbols = self.symbols_needed(payload_byte_count)
        pixels_needed = (total_symbols + SYMBOLS_PER_PIXEL - 1) // SYMBOLS_PER_PIXEL

        plan = GridPlan(
            width=side,
            height=side,
            total_symbols=total_symbols,
            pixels_needed=pixels_needed,
            mode="auto",
        )
        logger.info(f"Auto-selected {side}x{side} grid for {original_file_size} byte file")
        if not plan.fits:
            logger.warning(
                f"Image dimensions ({side}x{side}) may be too small for {total_symbols} symbols: "
                f"required pixels {pixels_needed}, available {plan.available_pixels}. "
                f"Consider adaptive mode"
            )
        return plan

    def check_capacity(self, symbol_count: int, width: int, height: int) -> Tuple[int, int]:
        """
        Returns:
            (required_pixels, available_pixels) for laying symbol_count
            symbols onto a width x height grid
        """
        required = (symbol_count + SYMBOLS_PER_PIXEL - 1) // SYMBOLS_PER_PIXEL
        return required, width * height

    def plan(
        self,
        payload_byte_count: int,
        mode: str = "adaptive",
        original_file_size: Optional[int] = None
    ) -> GridPlan:
        """Dispatch to plan_adaptive or plan_auto."""
        if mode == "adaptive":
            return self.plan_adaptive(payload_byte_count)
        elif mode == "auto":
            size = original_file_size if original_file_size is not None else payload_byte_count
            return self.plan_auto(size, payload_byte_count)
        else:
            raise ValueError(f"Unknown sizing mode: {mode}. Use 'adaptive' or 'auto'")
