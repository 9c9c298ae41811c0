"""
Services layer for the book print costing engine.

- CostingService: wires imposition, sheet demand, price curves and cost
  aggregation into one pure computation per call
"""

from .costing_service import CostingService

__all__ = [
    "CostingService",
]
