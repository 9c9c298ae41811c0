"""
Unit tests for cost aggregation.
"""

from models.costing import ProductionPolicy, SheetDemand
from modules.cost_aggregator import (
    aggregate_batch_cost,
    aggregate_continuous_cost,
    sheet_cost,
)


def _continuous_demand(sheets, quantity):
    return SheetDemand(
        policy=ProductionPolicy.CONTINUOUS,
        imposition_count=4,
        sheets_by_class=sheets,
        requested_quantity=quantity,
        units_produced=quantity,
    )


class TestSheetCost:

    def test_sums_over_classes(self):
        assert sheet_cost({"B": 8, "C": 2}, {"B": 10.0, "C": 20.0}) == 120.0

    def test_zero_sheets_need_no_price(self):
        assert sheet_cost({"B": 8, "C": 0}, {"B": 10.0}) == 80.0


class TestBatchAggregation:

    def test_total_is_block_cost_times_blocks(self):
        demand = SheetDemand(
            policy=ProductionPolicy.BATCH,
            imposition_count=4,
            sheets_by_class={"B": 8, "C": 2},
            requested_quantity=5,
            units_produced=8,
            number_of_blocks=2,
        )
        result = aggregate_batch_cost(demand, {"B": 10.0, "C": 20.0})
        assert result.total_cost == 240
        assert result.per_unit_cost == 30
        assert result.units_produced == 8
        assert result.policy is ProductionPolicy.BATCH

    def test_no_blocks_costs_nothing(self):
        demand = SheetDemand(
            policy=ProductionPolicy.BATCH,
            imposition_count=4,
            sheets_by_class={"B": 8},
            requested_quantity=0,
            units_produced=0,
            number_of_blocks=0,
        )
        result = aggregate_batch_cost(demand, {"B": 10.0})
        assert (result.per_unit_cost, result.total_cost) == (0, 0)


class TestContinuousAggregation:

    def test_markup_multiplies_copy_cost(self):
        demand = _continuous_demand({"B": 100}, 3)
        result = aggregate_continuous_cost(
            demand, {"B": 10.0}, fixed_price=50.0, markup_percentage=50.0, price_floor=200.0
        )
        # (100 * 10 + 50) * 1.5
        assert result.per_unit_cost == 1575
        assert result.total_cost == 4725

    def test_floor_applies_before_multiplying_quantity(self):
        demand = _continuous_demand({"B": 8}, 10)
        result = aggregate_continuous_cost(
            demand, {"B": 10.0}, fixed_price=50.0, markup_percentage=0.0, price_floor=200.0
        )
        assert result.per_unit_cost == 200
        assert result.total_cost == 2000

    def test_fractional_cents_are_floored(self):
        demand = _continuous_demand({"B": 100}, 3)
        result = aggregate_continuous_cost(
            demand, {"B": 2.5555}, fixed_price=0.0, markup_percentage=0.0, price_floor=200.0
        )
        assert result.per_unit_cost == 255
        assert result.total_cost == 766
