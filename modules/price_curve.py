"""Volume-discount price curves."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from models.costing import CurveShape, PriceRange


class PriceCurve:
    """
    Maps an order quantity to a price between `max` (quantity 1) and `min`
    (saturation quantity and beyond).

    The gamma-exponential shape drops faster at low quantities and flattens
    towards saturation; the linear shape drops evenly.
    """

    def __init__(self, shape: CurveShape, saturation_quantity: int, gamma: float) -> None:
        self.shape = shape
        self.saturation_quantity = saturation_quantity
        self.gamma = gamma

    def progress(self, quantity: int) -> float:
        """Position of `quantity` between 1 and saturation, in [0, 1]."""
        clamped = min(max(quantity, 1), self.saturation_quantity)
        return (clamped - 1) / (self.saturation_quantity - 1)

    def interpolate(self, price_range: PriceRange, progress: float) -> float:
        if self.shape is CurveShape.LINEAR:
            return price_range.max * (1 - progress) + price_range.min * progress
        return price_range.max - (price_range.max - price_range.min) * progress ** self.gamma

    def price_at(self, price_range: PriceRange, quantity: int) -> float:
        return self.interpolate(price_range, self.progress(quantity))

    def prices_at(
        self, price_range_by_class: Mapping[str, PriceRange], quantity: int
    ) -> Dict[str, float]:
        """Effective price per paper class at `quantity`."""
        progress = self.progress(quantity)
        return {
            paper_class: self.interpolate(price_range, progress)
            for paper_class, price_range in price_range_by_class.items()
        }

    def markup_at(self, markup: Optional[object], quantity: int) -> float:
        """
        Effective markup percentage.

        A flat number is returned unchanged; a range is interpolated like a
        price; None means no markup.
        """
        if markup is None:
            return 0.0
        if isinstance(markup, PriceRange):
            return self.price_at(markup, quantity)
        return float(markup)
