"""
Core module for the book print costing engine.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
"""

from .exceptions import (
    BookCostingError,
    InvalidFormatError,
    InvalidRequestError,
    CostingConfigError,
    PageCountError,
)

__all__ = [
    "BookCostingError",
    "InvalidFormatError",
    "InvalidRequestError",
    "CostingConfigError",
    "PageCountError",
]
