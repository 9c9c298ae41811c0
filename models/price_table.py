"""
Price table model.

The price table is supplied by the pricing configuration (a JSON file in
this service) and passed into requests; the engine never holds one.

File format:
    {
        "fixed": {"min": 50, "max": 50},
        "classes": {
            "B": {"min": 2, "max": 10},
            "C": {"min": 2, "max": 10}
        }
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional, Union

from core.exceptions import CostingConfigError, InvalidRequestError
from models.costing import PriceRange


@dataclass(frozen=True)
class PriceTable:
    """Sheet prices per paper class plus the fixed per-copy price."""

    price_range_by_class: Mapping[str, PriceRange]
    fixed_price: Optional[PriceRange] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "price_range_by_class", MappingProxyType(dict(self.price_range_by_class))
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PriceTable":
        classes = data.get("classes") or {}
        if not isinstance(classes, Mapping):
            raise InvalidRequestError("'classes' must be an object", "classes")
        fixed = data.get("fixed")
        return cls(
            price_range_by_class={
                str(name): PriceRange.from_value(value, f"classes.{name}")
                for name, value in classes.items()
            },
            fixed_price=PriceRange.from_value(fixed, "fixed") if fixed is not None else None,
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PriceTable":
        """
        Read a price table from a JSON file.

        Raises:
            CostingConfigError: If the file is missing or malformed
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, json.JSONDecodeError, InvalidRequestError, AttributeError) as exc:
            raise CostingConfigError(
                f"Cannot load price table {path}: {exc}", "PRICE_TABLE_PATH"
            ) from exc

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "classes": {c: r.to_dict() for c, r in self.price_range_by_class.items()},
        }
        if self.fixed_price is not None:
            data["fixed"] = self.fixed_price.to_dict()
        return data
