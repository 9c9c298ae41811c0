"""Costing calculators for the book print costing engine."""

__all__ = [
    "cost_aggregator",
    "imposition",
    "page_counter",
    "price_curve",
    "sheet_demand",
]
