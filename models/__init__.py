"""
Data models for the book print costing engine.

This module contains immutable dataclasses for:
- PrintJobRequest / SheetDemand / CostResult: one costing call
- CostingConstants: injected production-process parameters
- FitAnalysis: detailed imposition of a format on the press sheet
- PriceTable: prices supplied by the pricing configuration
- BookModule / PageCounts: page counting input and output
"""

from .costing import (
    CostingConstants,
    CostResult,
    CurveShape,
    FitAnalysis,
    OrientationFit,
    PageFormat,
    PolicyProfile,
    PriceRange,
    PrintJobRequest,
    ProductionPolicy,
    SheetDemand,
    SubstrateSheet,
)
from .price_table import PriceTable
from .book import BookModule, PageCounts

__all__ = [
    # Costing models
    "CostingConstants",
    "CostResult",
    "CurveShape",
    "FitAnalysis",
    "OrientationFit",
    "PageFormat",
    "PolicyProfile",
    "PriceRange",
    "PrintJobRequest",
    "ProductionPolicy",
    "SheetDemand",
    "SubstrateSheet",
    # Pricing
    "PriceTable",
    # Book models
    "BookModule",
    "PageCounts",
]
