"""Imposition of finished pages on the press sheet."""

from __future__ import annotations

import math
from typing import Union

from core.exceptions import CostingConfigError
from models.costing import FitAnalysis, OrientationFit, PageFormat, SubstrateSheet


class ImpositionCalculator:
    """
    Fits finished pages (plus bleed) on one press sheet.

    Only two placements are tried: pages upright ("normal") and pages turned
    by 90 degrees ("rotated"). The grid is always regular, so the better of
    the two is the answer.
    """

    def __init__(self, sheet: SubstrateSheet) -> None:
        self.sheet = sheet

    def analyze(self, page_format: Union[PageFormat, str]) -> FitAnalysis:
        """
        Compute both orientation grids for a format.

        Raises:
            InvalidFormatError: If the format is not supported
            CostingConfigError: If not even one page fits the sheet
        """
        fmt = PageFormat.parse(page_format)
        width = fmt.trim_width_mm + self.sheet.bleed_mm
        height = fmt.trim_height_mm + self.sheet.bleed_mm

        normal = self._grid(width, height)
        rotated = self._grid(height, width)

        analysis = FitAnalysis(
            format=fmt,
            page_width_mm=width,
            page_height_mm=height,
            normal=normal,
            rotated=rotated,
            sheet_area_mm2=self.sheet.area_mm2,
        )
        if analysis.count < 1:
            raise CostingConfigError(
                f"{fmt.value} does not fit on a "
                f"{self.sheet.width_mm:g}x{self.sheet.height_mm:g}mm sheet",
                "sheet",
            )
        return analysis

    def pages_per_sheet(self, page_format: Union[PageFormat, str]) -> int:
        """Number of finished pages per press sheet (always >= 1)."""
        return self.analyze(page_format).count

    def _grid(self, page_width: float, page_height: float) -> OrientationFit:
        fits_x = math.floor(self.sheet.width_mm / page_width)
        fits_y = math.floor(self.sheet.height_mm / page_height)
        return OrientationFit(count=fits_x * fits_y, fits_x=fits_x, fits_y=fits_y)
