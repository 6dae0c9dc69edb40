"""
PDF read-back utilities for checking rendered output.

Main class:
    RenderedPDF: Parsed PDF exposing positioned text lines per page.

Helper functions:
    page_count: Quick page count without full extraction.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

PDFSource = Union[str, Path, bytes]


def _as_stream(source: PDFSource):
    """Return something pdfplumber/PyPDF2 can open."""
    if isinstance(source, bytes):
        return io.BytesIO(source)
    return str(source)


def page_count(source: PDFSource) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(_as_stream(source))
        return len(reader.pages)
    except Exception:
        return None


def cluster_by_y_tolerance(chars: List[dict], tolerance: float = 3.0) -> List[List[dict]]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


@dataclass
class TextLine:
    """
    One visual line of text recovered from a PDF page.

    Attributes:
        text: Characters joined left to right
        x0: Leftmost glyph edge
        x1: Rightmost glyph edge
        y0: Lowest glyph bottom on the line (PDF space, origin bottom-left)
        y1: Highest glyph top on the line (PDF space)
        max_size: Largest font size on the line
    """

    text: str
    x0: float
    x1: float
    y0: float
    y1: float
    max_size: float


class RenderedPDF:
    """
    Parsed PDF with positioned text lines.

    Page data is lazily loaded and cached on first access.

    Args:
        source: Path to a PDF file or the PDF bytes themselves
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = RenderedPDF(pdf_bytes)
        >>> for line in pdf.get_lines(page=1):
        ...     print(line.text)
    """

    def __init__(self, source: PDFSource, y_tolerance: float = 2.0):
        if not isinstance(source, bytes):
            source = Path(source)
            if not source.exists():
                raise FileNotFoundError(f"PDF not found: {source}")

        self.source = source
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[TextLine]]] = None
        self._page_sizes: Dict[int, tuple] = {}
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.source) or 0
        return self._page_count

    def _extract_pages(self) -> Dict[int, List[TextLine]]:
        pages_data: Dict[int, List[TextLine]] = {}

        with pdfplumber.open(_as_stream(self.source)) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                self._page_sizes[page_num] = (float(page.width), float(page.height))
                pages_data[page_num] = self._chars_to_lines(page.chars, float(page.height))

        return pages_data

    def _chars_to_lines(self, chars: List[dict], page_height: float) -> List[TextLine]:
        lines = []
        for char_objs in cluster_by_y_tolerance(chars, tolerance=self.y_tolerance):
            char_objs.sort(key=lambda c: c["x0"])
            lines.append(
                TextLine(
                    text="".join(c["text"] for c in char_objs),
                    x0=min(float(c["x0"]) for c in char_objs),
                    x1=max(float(c["x1"]) for c in char_objs),
                    # pdfplumber "top"/"bottom" are measured from the page top
                    y0=min(page_height - c["bottom"] for c in char_objs),
                    y1=max(page_height - c["top"] for c in char_objs),
                    max_size=max(float(c.get("size", 0.0)) for c in char_objs),
                )
            )
        return lines

    def _ensure_loaded(self) -> None:
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    def get_lines(self, page: int) -> List[TextLine]:
        """Text lines for a page (1-indexed), top-to-bottom; empty if the page doesn't exist."""
        self._ensure_loaded()
        return self._pages_cache.get(page, [])

    def page_size(self, page: int) -> Optional[tuple]:
        """(width, height) of a page (1-indexed), or None."""
        self._ensure_loaded()
        return self._page_sizes.get(page)

    def full_text(self) -> str:
        """All line texts joined by newlines, page after page."""
        self._ensure_loaded()
        return "\n".join(
            line.text for page_num in sorted(self._pages_cache) for line in self._pages_cache[page_num]
        )
