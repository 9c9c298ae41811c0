"""
Costing data models.

These models describe one costing call from request to result:
PrintJobRequest -> (imposition) -> SheetDemand -> CostResult.

Thread Safety:
    - Every model is a frozen dataclass
    - Mappings are wrapped in MappingProxyType so callers cannot mutate
      a request or a result after it has been built
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional, Union

from core.exceptions import (
    CostingConfigError,
    InvalidFormatError,
    InvalidRequestError,
)


# Paper classes used by the book page counter
PAPER_CLASS_BW = "B"
PAPER_CLASS_COLOR = "C"


class PageFormat(Enum):
    """Supported finished-page formats."""

    DIN_A4 = "DIN A4"
    DIN_A5 = "DIN A5"

    @property
    def trim_width_mm(self) -> float:
        return _TRIM_SIZES_MM[self][0]

    @property
    def trim_height_mm(self) -> float:
        return _TRIM_SIZES_MM[self][1]

    @classmethod
    def parse(cls, value: Union["PageFormat", str]) -> "PageFormat":
        """
        Resolve a format from an enum member, "DIN A5" or "A5".

        Raises:
            InvalidFormatError: If the value names no supported format
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = " ".join(value.split()).upper()
            for member in cls:
                if key in (member.value.upper(), member.value.upper()[4:]):
                    return member
        raise InvalidFormatError(value, [member.value for member in cls])


_TRIM_SIZES_MM = {
    PageFormat.DIN_A4: (210.0, 297.0),
    PageFormat.DIN_A5: (148.0, 210.0),
}


class ProductionPolicy(Enum):
    """
    How copies are produced.

    BATCH: whole press-imposition blocks only (offset on SRA3)
    CONTINUOUS: exactly the requested copies (digital, per copy)
    """

    BATCH = "batch"
    CONTINUOUS = "continuous"


class CurveShape(Enum):
    """Shape of the volume-discount curve."""

    LINEAR = "linear"
    GAMMA_EXPONENTIAL = "gamma_exponential"


@dataclass(frozen=True)
class SubstrateSheet:
    """
    Press sheet the finished pages are imposed on.
    """

    width_mm: float = 320.0
    """Sheet width (SRA3 short edge)."""

    height_mm: float = 450.0
    """Sheet height (SRA3 long edge)."""

    bleed_mm: float = 6.0
    """Added to both finished-page dimensions before fitting."""

    @property
    def area_mm2(self) -> float:
        return self.width_mm * self.height_mm


@dataclass(frozen=True)
class PriceRange:
    """
    Price at quantity 1 (`max`) and at/after saturation (`min`).

    An inverted range (min > max) is accepted; it yields a price that
    rises with quantity.
    """

    min: float
    max: float

    @property
    def is_inverted(self) -> bool:
        return self.min > self.max

    @classmethod
    def from_value(cls, value: Any, field_name: str = "price") -> "PriceRange":
        """Build from {"min": .., "max": ..}, another PriceRange, or a flat number."""
        if isinstance(value, PriceRange):
            return value
        if isinstance(value, bool):
            raise InvalidRequestError(f"{field_name} must be a number or a range", field_name)
        if isinstance(value, (int, float)):
            flat = _as_finite(value, field_name)
            return cls(min=flat, max=flat)
        if isinstance(value, Mapping):
            try:
                low, high = value["min"], value["max"]
            except KeyError:
                raise InvalidRequestError(
                    f"{field_name} needs numeric 'min' and 'max'", field_name
                ) from None
            return cls(
                min=_as_finite(low, f"{field_name}.min"),
                max=_as_finite(high, f"{field_name}.max"),
            )
        raise InvalidRequestError(f"{field_name} must be a number or a range", field_name)

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class PolicyProfile:
    """Discount-curve settings for one production policy."""

    saturation_quantity: int
    """Quantity at which the price reaches `min`."""

    curve_shape: CurveShape


@dataclass(frozen=True)
class CostingConstants:
    """
    Production-process parameters injected into the costing engine.

    Defaults match the SRA3 production line: 320x450mm sheet, 6mm bleed,
    gamma 0.675, 200 cent floor, saturation 1000 (batch) / 3000 (continuous).
    """

    sheet: SubstrateSheet = field(default_factory=SubstrateSheet)
    gamma: float = 0.675
    price_floor: float = 200.0
    batch: PolicyProfile = PolicyProfile(1000, CurveShape.LINEAR)
    continuous: PolicyProfile = PolicyProfile(3000, CurveShape.GAMMA_EXPONENTIAL)
    default_markup: PriceRange = PriceRange(min=75.0, max=200.0)

    def __post_init__(self) -> None:
        if self.sheet.width_mm <= 0 or self.sheet.height_mm <= 0:
            raise CostingConfigError("Sheet dimensions must be positive", "sheet")
        if self.sheet.bleed_mm < 0:
            raise CostingConfigError("Bleed must not be negative", "bleed_mm")
        if self.gamma <= 0:
            raise CostingConfigError("Gamma must be positive", "gamma")
        for name in ("batch", "continuous"):
            if getattr(self, name).saturation_quantity < 2:
                raise CostingConfigError(
                    "Saturation quantity must be at least 2", f"{name}.saturation_quantity"
                )

    def profile_for(self, policy: ProductionPolicy) -> PolicyProfile:
        if policy is ProductionPolicy.BATCH:
            return self.batch
        return self.continuous

    @classmethod
    def from_config(cls, config: Any) -> "CostingConstants":
        """Build from a Config class (or any object with COSTING_* attributes)."""
        return cls(
            sheet=SubstrateSheet(
                width_mm=config.COSTING_SHEET_WIDTH_MM,
                height_mm=config.COSTING_SHEET_HEIGHT_MM,
                bleed_mm=config.COSTING_BLEED_MM,
            ),
            gamma=config.COSTING_GAMMA,
            price_floor=config.COSTING_PRICE_FLOOR,
            batch=PolicyProfile(config.COSTING_BATCH_SATURATION, CurveShape.LINEAR),
            continuous=PolicyProfile(
                config.COSTING_CONTINUOUS_SATURATION, CurveShape.GAMMA_EXPONENTIAL
            ),
            default_markup=PriceRange(
                min=config.COSTING_MARKUP_MIN, max=config.COSTING_MARKUP_MAX
            ),
        )


Markup = Union[float, PriceRange]


@dataclass(frozen=True)
class PrintJobRequest:
    """
    Everything needed to cost one print run.

    `format` is kept as given and resolved during costing, so an unknown
    format surfaces as InvalidFormatError from the cost computation.
    """

    requested_quantity: int
    """Number of copies ordered (0 is valid and costs nothing in total)."""

    pages_by_class: Mapping[str, int]
    """Page count per paper class, e.g. {"B": 32, "C": 8}."""

    format: Union[PageFormat, str]
    """Finished-page format."""

    price_range_by_class: Mapping[str, PriceRange]
    """Price per press sheet for each paper class."""

    fixed_price: Optional[PriceRange] = None
    """Per-copy binding/cover price (continuous production only)."""

    markup: Optional[Markup] = None
    """Flat percentage, percentage range, or None for the configured default."""

    def __post_init__(self) -> None:
        if self.requested_quantity < 0:
            raise InvalidRequestError("Quantity must not be negative", "requested_quantity")

        pages = dict(self.pages_by_class)
        for paper_class, count in pages.items():
            if count < 0:
                raise InvalidRequestError(
                    f"Page count for class {paper_class!r} must not be negative",
                    "pages_by_class",
                )

        prices = {
            paper_class: PriceRange.from_value(value, f"prices.{paper_class}")
            for paper_class, value in self.price_range_by_class.items()
        }
        missing = sorted(c for c, count in pages.items() if count > 0 and c not in prices)
        if missing:
            raise InvalidRequestError(
                f"No price range for paper class(es): {', '.join(missing)}",
                "price_range_by_class",
            )

        object.__setattr__(self, "pages_by_class", MappingProxyType(pages))
        object.__setattr__(self, "price_range_by_class", MappingProxyType(prices))
        if self.fixed_price is not None:
            object.__setattr__(
                self, "fixed_price", PriceRange.from_value(self.fixed_price, "fixed_price")
            )
        if isinstance(self.markup, bool):
            raise InvalidRequestError("markup must be a number or a range", "markup")
        if isinstance(self.markup, (int, float)):
            object.__setattr__(self, "markup", _as_finite(self.markup, "markup"))
        elif self.markup is not None:
            object.__setattr__(self, "markup", PriceRange.from_value(self.markup, "markup"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrintJobRequest":
        """
        Create from a JSON payload.

        Expected keys: quantity, format, pages, prices; optional fixed_price,
        markup. Page counts and quantity must be integers.
        """
        try:
            quantity = _as_int(data.get("quantity", 1), "quantity")
            pages = {
                str(k): _as_int(v, f"pages.{k}")
                for k, v in dict(data.get("pages") or {}).items()
            }
            prices = dict(data.get("prices") or {})
        except (TypeError, ValueError):
            raise InvalidRequestError("pages and prices must be objects", "pages") from None

        fixed = data.get("fixed_price")

        return cls(
            requested_quantity=quantity,
            pages_by_class=pages,
            format=data.get("format", PageFormat.DIN_A5.value),
            price_range_by_class=prices,
            fixed_price=PriceRange.from_value(fixed, "fixed_price") if fixed is not None else None,
            markup=data.get("markup"),
        )


def _as_finite(value: Any, field_name: str) -> float:
    # JSON bodies may carry NaN/Infinity, which cannot be floored into cents
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRequestError(f"{field_name} must be a number", field_name)
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise InvalidRequestError(f"{field_name} must be a finite number", field_name)
    return number


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRequestError(f"{field_name} must be a whole number", field_name)
    if isinstance(value, float) and not value.is_integer():
        raise InvalidRequestError(f"{field_name} must be a whole number", field_name)
    return int(value)


@dataclass(frozen=True)
class OrientationFit:
    """Page grid for one orientation on the press sheet."""

    count: int
    fits_x: int
    fits_y: int

    def to_dict(self) -> Dict[str, int]:
        return {"count": self.count, "fits_x": self.fits_x, "fits_y": self.fits_y}


@dataclass(frozen=True)
class FitAnalysis:
    """
    Detailed imposition of one format on the press sheet.
    """

    format: PageFormat
    page_width_mm: float
    """Finished width plus bleed."""

    page_height_mm: float
    """Finished height plus bleed."""

    normal: OrientationFit
    rotated: OrientationFit

    sheet_area_mm2: float

    @property
    def count(self) -> int:
        """Pages per sheet in the better orientation."""
        return max(self.normal.count, self.rotated.count)

    @property
    def orientation(self) -> str:
        return "normal" if self.normal.count >= self.rotated.count else "rotated"

    def waste_area_mm2(self, count: Optional[int] = None) -> float:
        if count is None:
            count = self.count
        return self.sheet_area_mm2 - count * self.page_width_mm * self.page_height_mm

    @property
    def efficiency(self) -> float:
        """Share of the sheet covered by pages, in percent (2 decimals)."""
        used = self.sheet_area_mm2 - self.waste_area_mm2()
        return round(used / self.sheet_area_mm2 * 100, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format.value,
            "count": self.count,
            "orientation": self.orientation,
            "page_with_bleed_mm": {
                "width": self.page_width_mm,
                "height": self.page_height_mm,
            },
            "details": {
                "normal": self.normal.to_dict(),
                "rotated": self.rotated.to_dict(),
            },
            "waste_area_mm2": {
                "normal": self.waste_area_mm2(self.normal.count),
                "rotated": self.waste_area_mm2(self.rotated.count),
                "best": self.waste_area_mm2(),
            },
            "efficiency": self.efficiency,
        }


@dataclass(frozen=True)
class SheetDemand:
    """
    Press sheets needed for a request under one production policy.

    `sheets_by_class` holds sheets per block (BATCH) or per copy (CONTINUOUS).
    """

    policy: ProductionPolicy
    imposition_count: int
    sheets_by_class: Mapping[str, int]
    requested_quantity: int
    units_produced: int
    """Copies actually produced and charged for."""

    number_of_blocks: int = 0
    """Full imposition blocks (BATCH only)."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "sheets_by_class", MappingProxyType(dict(self.sheets_by_class)))

    @property
    def effective_quantity(self) -> int:
        """Quantity the discount curve is evaluated at."""
        return self.units_produced

    @property
    def total_sheets_by_class(self) -> Dict[str, int]:
        multiplier = (
            self.number_of_blocks
            if self.policy is ProductionPolicy.BATCH
            else self.requested_quantity
        )
        return {c: sheets * multiplier for c, sheets in self.sheets_by_class.items()}


@dataclass(frozen=True)
class CostResult:
    """
    Final costs in minor currency units (cents), floored.
    """

    per_unit_cost: int
    total_cost: int
    units_produced: int
    policy: ProductionPolicy

    def to_dict(self) -> Dict[str, Any]:
        return {
            "single": self.per_unit_cost,
            "total": self.total_cost,
            "units_produced": self.units_produced,
            "policy": self.policy.value,
        }
