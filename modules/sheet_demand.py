"""Press-sheet demand under block or per-copy production."""

from __future__ import annotations

import math
from typing import Mapping

from models.costing import ProductionPolicy, SheetDemand


def sheets_for_pages(page_count: int, imposition_count: int) -> int:
    """Sheets needed to carry `page_count` pages; zero pages need zero sheets."""
    return math.ceil(page_count / imposition_count)


def calculate_sheet_demand(
    pages_by_class: Mapping[str, int],
    imposition_count: int,
    requested_quantity: int,
    policy: ProductionPolicy,
) -> SheetDemand:
    """
    Convert page counts into press sheets.

    BATCH: the press only runs whole blocks of `imposition_count` copies, so
    the quantity is rounded up to full blocks and every copy of the last
    block is charged for.

    CONTINUOUS: copies are produced one by one; no rounding of the quantity.

    Args:
        pages_by_class: Page count per paper class
        imposition_count: Pages per press sheet (>= 1)
        requested_quantity: Copies ordered
        policy: Production policy

    Returns:
        SheetDemand with sheets per block (BATCH) or per copy (CONTINUOUS)
    """
    sheets_by_class = {
        paper_class: sheets_for_pages(pages, imposition_count)
        for paper_class, pages in pages_by_class.items()
    }

    if policy is ProductionPolicy.BATCH:
        number_of_blocks = math.ceil(requested_quantity / imposition_count)
        return SheetDemand(
            policy=policy,
            imposition_count=imposition_count,
            sheets_by_class=sheets_by_class,
            requested_quantity=requested_quantity,
            units_produced=number_of_blocks * imposition_count,
            number_of_blocks=number_of_blocks,
        )

    return SheetDemand(
        policy=policy,
        imposition_count=imposition_count,
        sheets_by_class=sheets_by_class,
        requested_quantity=requested_quantity,
        units_produced=requested_quantity,
    )
