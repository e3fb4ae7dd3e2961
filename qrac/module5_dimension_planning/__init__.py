"""
Module 5: Dimension Planning

Computes grid dimensions for a payload size: adaptive (minimal near-square)
or auto (fixed small/medium/large tiers).

Public API:
    - DimensionPlanner: plan_adaptive / plan_auto / plan
    - GridPlan: planned dimensions and capacity figures
"""

from .planner import DimensionPlanner, GridPlan

__all__ = [
    'DimensionPlanner',
    'GridPlan',
]

__version__ = '1.0.0'
