"""
Module 4: Symbol Image Mapping

Places symbols onto RGB pixel grids, extracts them back, and repairs
drifted grids by snapping channels onto anchors.

Public API:
    - SymbolImageMapper: layout / extract
    - AnchorCorrector, CorrectionReport: anchor repair
    - ensure_rgb, with_alpha: channel normalization
"""

from .mapper import SymbolImageMapper, PixelGrid, required_pixels, grid_pixels
from .anchor_correction import AnchorCorrector, CorrectionReport
from .channels import ensure_rgb, with_alpha

__all__ = [
    'SymbolImageMapper',
    'PixelGrid',
    'required_pixels',
    'grid_pixels',
    'AnchorCorrector',
    'CorrectionReport',
    'ensure_rgb',
    'with_alpha',
]

__version__ = '1.0.0'
