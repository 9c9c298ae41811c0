"""
Unit tests for press-sheet demand under both production policies.
"""

import pytest

from models.costing import ProductionPolicy
from modules.sheet_demand import calculate_sheet_demand, sheets_for_pages


class TestSheetsForPages:

    def test_rounds_up_partial_sheets(self):
        assert sheets_for_pages(32, 4) == 8
        assert sheets_for_pages(33, 4) == 9

    def test_zero_pages_need_no_sheets(self):
        assert sheets_for_pages(0, 4) == 0


class TestBatchPolicy:
    """Whole imposition blocks only."""

    def test_partial_block_is_produced_in_full(self):
        demand = calculate_sheet_demand({"B": 32, "C": 0}, 8, 5, ProductionPolicy.BATCH)
        assert demand.number_of_blocks == 1
        assert demand.units_produced == 8
        assert demand.requested_quantity == 5
        assert demand.effective_quantity == 8

    def test_sheets_per_block_and_totals(self):
        demand = calculate_sheet_demand({"B": 30, "C": 5}, 4, 10, ProductionPolicy.BATCH)
        assert demand.number_of_blocks == 3
        assert demand.units_produced == 12
        assert dict(demand.sheets_by_class) == {"B": 8, "C": 2}
        assert demand.total_sheets_by_class == {"B": 24, "C": 6}

    def test_exact_multiple_needs_no_surplus(self):
        demand = calculate_sheet_demand({"B": 16}, 4, 12, ProductionPolicy.BATCH)
        assert demand.units_produced == 12

    def test_zero_quantity_produces_nothing(self):
        demand = calculate_sheet_demand({"B": 16}, 4, 0, ProductionPolicy.BATCH)
        assert demand.number_of_blocks == 0
        assert demand.units_produced == 0


class TestContinuousPolicy:
    """Exactly the requested copies."""

    def test_no_rounding_of_quantity(self):
        demand = calculate_sheet_demand({"B": 30, "C": 0}, 4, 10, ProductionPolicy.CONTINUOUS)
        assert demand.units_produced == 10
        assert demand.number_of_blocks == 0
        assert dict(demand.sheets_by_class) == {"B": 8, "C": 0}
        assert demand.total_sheets_by_class == {"B": 80, "C": 0}

    def test_sheet_counts_cannot_be_mutated(self):
        demand = calculate_sheet_demand({"B": 30}, 4, 1, ProductionPolicy.CONTINUOUS)
        with pytest.raises(TypeError):
            demand.sheets_by_class["B"] = 0
