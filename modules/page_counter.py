"""Per-paper-class page counts for a book assembled from module PDFs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from core.exceptions import PageCountError
from logging_config import get_logger
from models.book import BookModule, PageCounts


logger = get_logger(__name__)


class BookPageCounter:
    """
    Counts the pages a finished book will have, split by paper class.

    Rules:
        - the cover always contributes 4 pages
        - content modules contribute their PDF page count
        - grayscale modules go on "B" stock, everything else on "C"
        - the book is padded to a multiple of 4 pages with blank "B" pages
    """

    COVER_PAGES = 4
    SIGNATURE_PAGES = 4

    def count_pdf_pages(self, pdf_path: Union[str, Path]) -> int:
        path = Path(pdf_path)
        if not path.exists():
            raise PageCountError(str(path), "file not found")
        try:
            reader = PdfReader(str(path))
            return len(reader.pages)
        except (PyPdfError, OSError, ValueError) as exc:
            raise PageCountError(str(path), str(exc)) from exc

    def count(self, cover: BookModule, modules: Iterable[BookModule]) -> PageCounts:
        bw_pages = 0
        color_pages = 0

        if cover.grayscale:
            bw_pages += self.COVER_PAGES
        else:
            color_pages += self.COVER_PAGES

        for module in modules:
            module_pages = self.count_pdf_pages(module.pdf_path)
            logger.debug(
                f"Module {module.name or module.pdf_path}: {module_pages} pages "
                f"({'grayscale' if module.grayscale else 'color'})"
            )
            if module.grayscale:
                bw_pages += module_pages
            else:
                color_pages += module_pages

        total = bw_pages + color_pages
        remainder = total % self.SIGNATURE_PAGES
        if remainder:
            blanks = self.SIGNATURE_PAGES - remainder
            total += blanks
            bw_pages += blanks

        return PageCounts(full_page_count=total, bw_pages=bw_pages, color_pages=color_pages)
