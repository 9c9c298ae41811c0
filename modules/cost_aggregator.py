"""Combines sheet demand and interpolated prices into final costs."""

from __future__ import annotations

import math
from typing import Mapping

from models.costing import CostResult, SheetDemand


def sheet_cost(sheets_by_class: Mapping[str, int], prices: Mapping[str, float]) -> float:
    """Sum of sheets x price over paper classes; classes without sheets cost nothing."""
    return sum(
        sheets * prices[paper_class]
        for paper_class, sheets in sheets_by_class.items()
        if sheets
    )


def aggregate_batch_cost(demand: SheetDemand, prices: Mapping[str, float]) -> CostResult:
    """
    Cost of a block-production run.

    The whole run is charged: every block costs the same, and the per-unit
    figure is the run total spread over all copies produced (including the
    surplus of the last block). No fixed price, markup or floor applies.
    """
    cost_per_block = sheet_cost(demand.sheets_by_class, prices)
    total = cost_per_block * demand.number_of_blocks
    per_unit = total / demand.units_produced if demand.units_produced else 0.0

    return CostResult(
        per_unit_cost=math.floor(per_unit),
        total_cost=math.floor(total),
        units_produced=demand.units_produced,
        policy=demand.policy,
    )


def aggregate_continuous_cost(
    demand: SheetDemand,
    prices: Mapping[str, float],
    fixed_price: float,
    markup_percentage: float,
    price_floor: float,
) -> CostResult:
    """
    Cost of a per-copy run.

    single = (sheets x prices + fixed price) x (1 + markup / 100),
    raised to `price_floor`; total = single x requested quantity.
    """
    cost_per_copy = sheet_cost(demand.sheets_by_class, prices) + fixed_price
    single = max(cost_per_copy * (1 + markup_percentage / 100), price_floor)
    total = single * demand.requested_quantity

    return CostResult(
        per_unit_cost=math.floor(single),
        total_cost=math.floor(total),
        units_produced=demand.units_produced,
        policy=demand.policy,
    )
