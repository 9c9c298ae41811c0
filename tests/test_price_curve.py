"""
Unit tests for the volume-discount price curves.
"""

import pytest

from models.costing import CurveShape, PriceRange
from modules.price_curve import PriceCurve


# Fixtures

@pytest.fixture
def linear_curve():
    return PriceCurve(CurveShape.LINEAR, saturation_quantity=1000, gamma=0.675)


@pytest.fixture
def gamma_curve():
    return PriceCurve(CurveShape.GAMMA_EXPONENTIAL, saturation_quantity=3000, gamma=0.675)


PRICES = PriceRange(min=2, max=10)


class TestProgress:

    def test_quantity_one_is_start(self, gamma_curve):
        assert gamma_curve.progress(1) == 0.0

    def test_saturation_is_end(self, gamma_curve):
        assert gamma_curve.progress(3000) == 1.0

    def test_clamped_on_both_sides(self, gamma_curve):
        assert gamma_curve.progress(0) == 0.0
        assert gamma_curve.progress(10000) == 1.0

    def test_midway(self, linear_curve):
        assert linear_curve.progress(500) == pytest.approx(499 / 999)


class TestLinearShape:

    def test_endpoints(self, linear_curve):
        assert linear_curve.price_at(PRICES, 1) == 10
        assert linear_curve.price_at(PRICES, 1000) == 2
        assert linear_curve.price_at(PRICES, 5000) == 2

    def test_halfway_is_average(self, linear_curve):
        assert linear_curve.interpolate(PRICES, 0.5) == pytest.approx(6.0)


class TestGammaShape:

    def test_endpoints(self, gamma_curve):
        assert gamma_curve.price_at(PRICES, 1) == 10
        assert gamma_curve.price_at(PRICES, 3000) == pytest.approx(2.0)

    def test_discount_is_front_loaded(self, gamma_curve):
        gamma_price = gamma_curve.interpolate(PRICES, 0.5)
        assert gamma_price == pytest.approx(10 - 8 * 0.5 ** 0.675)
        assert gamma_price < 6.0

    def test_non_increasing_in_quantity(self, gamma_curve):
        prices = [gamma_curve.price_at(PRICES, q) for q in (1, 2, 10, 100, 1000, 2999, 3000, 9000)]
        assert prices == sorted(prices, reverse=True)

    def test_equal_range_is_flat(self, gamma_curve):
        flat = PriceRange(min=50, max=50)
        assert gamma_curve.price_at(flat, 1) == gamma_curve.price_at(flat, 2500) == 50

    def test_inverted_range_rises(self, gamma_curve):
        inverted = PriceRange(min=10, max=2)
        assert gamma_curve.price_at(inverted, 3000) > gamma_curve.price_at(inverted, 1)


class TestPerClassAndMarkup:

    def test_prices_per_class(self, linear_curve):
        prices = linear_curve.prices_at(
            {"B": PRICES, "C": PriceRange(min=4, max=20)}, 1000
        )
        assert prices == {"B": 2, "C": 4}

    def test_flat_markup_bypasses_curve(self, gamma_curve):
        assert gamma_curve.markup_at(25, 1) == 25.0
        assert gamma_curve.markup_at(25, 3000) == 25.0

    def test_ranged_markup_is_interpolated(self, gamma_curve):
        markup = PriceRange(min=75, max=200)
        assert gamma_curve.markup_at(markup, 1) == 200
        assert gamma_curve.markup_at(markup, 3000) == pytest.approx(75)

    def test_no_markup(self, gamma_curve):
        assert gamma_curve.markup_at(None, 10) == 0.0
