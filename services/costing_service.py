"""
Costing Service - computes print costs for book orders.

Pipeline (one direction only):
    format -> imposition count -> sheet demand -> interpolated prices -> cost

The service holds nothing but its injected CostingConstants and the
calculators built from them. Every call is independent, so one instance
is shared by all Flask request threads without locking.

Usage:
    service = CostingService(CostingConstants.from_config(Config))
    result = service.compute_cost(request, ProductionPolicy.CONTINUOUS)
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from logging_config import get_logger
from models.book import BookModule, PageCounts
from models.costing import (
    CostingConstants,
    CostResult,
    FitAnalysis,
    Markup,
    PageFormat,
    PrintJobRequest,
    ProductionPolicy,
)
from models.price_table import PriceTable
from modules.cost_aggregator import aggregate_batch_cost, aggregate_continuous_cost
from modules.imposition import ImpositionCalculator
from modules.page_counter import BookPageCounter
from modules.price_curve import PriceCurve
from modules.sheet_demand import calculate_sheet_demand


logger = get_logger(__name__)


class CostingService:
    """
    Print-production costing for batch (offset) and continuous (digital) runs.

    Thread Safety:
        Stateless after construction; safe to call concurrently.
    """

    def __init__(
        self,
        constants: Optional[CostingConstants] = None,
        page_counter: Optional[BookPageCounter] = None,
    ) -> None:
        self.constants = constants or CostingConstants()
        self.imposition = ImpositionCalculator(self.constants.sheet)
        self.page_counter = page_counter or BookPageCounter()
        self._curves = {
            policy: PriceCurve(
                shape=self.constants.profile_for(policy).curve_shape,
                saturation_quantity=self.constants.profile_for(policy).saturation_quantity,
                gamma=self.constants.gamma,
            )
            for policy in ProductionPolicy
        }

    def curve_for(self, policy: ProductionPolicy) -> PriceCurve:
        return self._curves[policy]

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def analyze_imposition(self, page_format: Union[PageFormat, str]) -> FitAnalysis:
        """
        Detailed fit of a format on the press sheet.

        Raises:
            InvalidFormatError: If the format is not supported
        """
        return self.imposition.analyze(page_format)

    def compute_cost(
        self,
        request: PrintJobRequest,
        policy: Union[ProductionPolicy, str] = ProductionPolicy.CONTINUOUS,
    ) -> CostResult:
        """
        Compute the cost of a print run.

        Args:
            request: Quantity, page counts, format and prices
            policy: BATCH (whole blocks) or CONTINUOUS (per copy)

        Returns:
            CostResult in minor currency units

        Raises:
            InvalidFormatError: If the request's format is not supported
            ValueError: If `policy` is not a known production policy
        """
        policy = ProductionPolicy(policy)
        self._warn_inverted_ranges(request)

        imposition_count = self.imposition.pages_per_sheet(request.format)
        demand = calculate_sheet_demand(
            request.pages_by_class,
            imposition_count,
            request.requested_quantity,
            policy,
        )

        curve = self.curve_for(policy)
        prices = curve.prices_at(request.price_range_by_class, demand.effective_quantity)

        if policy is ProductionPolicy.BATCH:
            result = aggregate_batch_cost(demand, prices)
        else:
            fixed_price = (
                curve.price_at(request.fixed_price, demand.effective_quantity)
                if request.fixed_price is not None
                else 0.0
            )
            markup = (
                request.markup if request.markup is not None else self.constants.default_markup
            )
            result = aggregate_continuous_cost(
                demand,
                prices,
                fixed_price=fixed_price,
                markup_percentage=curve.markup_at(markup, demand.effective_quantity),
                price_floor=self.constants.price_floor,
            )

        logger.debug(
            f"Cost computed: policy={policy.value}, pages/sheet={imposition_count}, "
            f"sheets={dict(demand.sheets_by_class)}, units={demand.units_produced}, "
            f"single={result.per_unit_cost}, total={result.total_cost}"
        )
        return result

    def count_pages(self, cover: BookModule, modules: Iterable[BookModule]) -> PageCounts:
        return self.page_counter.count(cover, modules)

    def quote_book(
        self,
        cover: BookModule,
        modules: Iterable[BookModule],
        quantity: int,
        page_format: Union[PageFormat, str],
        price_table: PriceTable,
        policy: Union[ProductionPolicy, str] = ProductionPolicy.CONTINUOUS,
        markup: Optional[Markup] = None,
    ) -> CostResult:
        """
        Count a book's pages from its module PDFs and cost the order.

        Raises:
            PageCountError: If a module PDF cannot be read
            InvalidFormatError: If the format is not supported
        """
        counts = self.count_pages(cover, modules)
        logger.info(
            f"Book has {counts.full_page_count} pages "
            f"(B={counts.bw_pages}, C={counts.color_pages})"
        )
        request = PrintJobRequest(
            requested_quantity=quantity,
            pages_by_class=counts.pages_by_class,
            format=page_format,
            price_range_by_class=price_table.price_range_by_class,
            fixed_price=price_table.fixed_price,
            markup=markup,
        )
        return self.compute_cost(request, policy)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _warn_inverted_ranges(request: PrintJobRequest) -> None:
        ranges = dict(request.price_range_by_class)
        if request.fixed_price is not None:
            ranges["fixed"] = request.fixed_price
        for name, price_range in ranges.items():
            if price_range.is_inverted:
                logger.warning(
                    f"Price range for {name!r} is inverted (min={price_range.min} > "
                    f"max={price_range.max}); price will rise with quantity"
                )
