"""
Custom exceptions for the book print costing engine.

Exception Hierarchy:
    BookCostingError (base)
    ├── InvalidFormatError   - Page format not in the supported set (computation)
    ├── InvalidRequestError  - Structurally broken print job request (construction)
    ├── CostingConfigError   - Invalid production constants (startup)
    └── PageCountError       - A module PDF could not be read

Usage:
    InvalidFormatError is the only error the costing engine raises while
    computing; it propagates to the caller untouched. The HTTP layer turns
    it (and InvalidRequestError) into a 400 response.
"""

from typing import Optional, Dict, Any, Iterable


class BookCostingError(Exception):
    """
    Base exception for all costing errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable error envelope."""
        return {"error": self.message, "details": dict(self.details)}


# =============================================================================
# COMPUTATION ERRORS
# =============================================================================

class InvalidFormatError(BookCostingError):
    """
    The requested page format is not one of the supported formats.

    Raised by the imposition calculator when a format string cannot be
    resolved. There is no fallback format; no partial result is returned.
    """

    def __init__(self, format_name: Any, supported: Iterable[str] = ()):
        supported = list(supported)
        message = f"Invalid format specified: {format_name!r}"
        details = {
            "format": str(format_name),
            "supported": supported,
            "resolution": "Choose one of the supported page formats",
        }
        super().__init__(message, details)
        self.format_name = format_name
        self.supported = supported


# =============================================================================
# INPUT / SETUP ERRORS
# =============================================================================

class InvalidRequestError(BookCostingError):
    """
    A print job request is structurally invalid.

    Raised while building the request, before any costing happens:
    - negative quantity or page count
    - a paper class with pages but no price range
    """

    def __init__(self, message: str, field: str):
        super().__init__(message, {"field": field})
        self.field = field


class CostingConfigError(BookCostingError):
    """
    Production constants are unusable.

    Typical causes:
    - saturation quantity below 2 (progress would divide by zero)
    - non-positive sheet or bleed-page dimensions
    - a malformed price table file
    """

    def __init__(self, message: str, setting: str):
        details = {
            "setting": setting,
            "resolution": "Check the COSTING_* values in .env",
        }
        super().__init__(message, details)
        self.setting = setting


class PageCountError(BookCostingError):
    """
    A module PDF could not be opened or parsed while counting pages.
    """

    def __init__(self, pdf_path: str, reason: str):
        message = f"Could not count pages of {pdf_path}: {reason}"
        super().__init__(message, {"pdf_path": pdf_path})
        self.pdf_path = pdf_path
