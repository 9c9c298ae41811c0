"""
Book composition models.

A book is a cover module followed by content modules, each backed by a
PDF. The page counter turns them into per-paper-class page counts that
feed PrintJobRequest.pages_by_class.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Union

from models.costing import PAPER_CLASS_BW, PAPER_CLASS_COLOR

# Book editor color code for full-color modules
COLOR_CODE = 4


@dataclass(frozen=True)
class BookModule:
    """
    One module (cover, calendar, notes, ...) of a book.
    """

    pdf_path: Union[str, Path]
    """Location of the module PDF."""

    grayscale: bool = False
    """Printed on black/white stock ("B") instead of color ("C")."""

    name: str = ""
    """Display name for logs."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookModule":
        """
        Create from a dictionary.

        Accepts either `grayscale` or the color code used by the book
        editor (`color_code`: 4 = color, anything else = grayscale).
        """
        if "grayscale" in data:
            grayscale = bool(data["grayscale"])
        else:
            grayscale = data.get("color_code") != COLOR_CODE
        return cls(
            pdf_path=data.get("pdf_path", ""),
            grayscale=grayscale,
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class PageCounts:
    """Page totals for a whole book."""

    full_page_count: int
    """All pages including cover and alignment blanks (multiple of 4)."""

    bw_pages: int
    """Pages on black/white stock."""

    color_pages: int
    """Pages on color stock."""

    @property
    def pages_by_class(self) -> Dict[str, int]:
        return {PAPER_CLASS_BW: self.bw_pages, PAPER_CLASS_COLOR: self.color_pages}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_page_count": self.full_page_count,
            "pages_by_class": self.pages_by_class,
        }
