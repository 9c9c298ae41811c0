"""Shared fixtures for the costing tests."""

import pytest
from pypdf import PdfWriter

from models.costing import CostingConstants, PrintJobRequest, PriceRange
from services.costing_service import CostingService


@pytest.fixture
def constants():
    """Production defaults: SRA3 sheet, 6mm bleed, gamma 0.675."""
    return CostingConstants()


@pytest.fixture
def costing_service(constants):
    return CostingService(constants)


@pytest.fixture
def sheet_prices():
    return {
        "B": PriceRange(min=2, max=10),
        "C": PriceRange(min=2, max=10),
    }


@pytest.fixture
def a5_request(sheet_prices):
    """32 b/w pages, A5, one copy, 50 cent binding, no markup."""
    return PrintJobRequest(
        requested_quantity=1,
        pages_by_class={"B": 32, "C": 0},
        format="DIN A5",
        price_range_by_class=sheet_prices,
        fixed_price=PriceRange(min=50, max=50),
        markup=0,
    )


@pytest.fixture
def make_pdf(tmp_path):
    """Write a blank PDF with the given number of pages and return its path."""

    def _make(name: str, pages: int):
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=420, height=595)
        path = tmp_path / name
        with open(path, "wb") as f:
            writer.write(f)
        return path

    return _make
