"""
Drawing document: an ordered list of pages, each holding a display list.

Layout code draws into a PageDocument without touching reportlab directly. The
display lists are replayed onto a reportlab Canvas only when serialize() is called,
which keeps layout results inspectable (tests read text_instructions()) and lets
the page footer be stamped after the final page count is known.
"""

import io
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple, Union

from reportlab.pdfgen import canvas

from cvpress.contexts.rendering.exceptions import SerializationError
from cvpress.contexts.rendering.styles import Color, TextStyle, register_fonts


@dataclass(frozen=True)
class TextInstruction:
    """Draw text with its baseline starting at (x, y)."""

    text: str
    x: float
    y: float
    style: TextStyle


@dataclass(frozen=True)
class LineInstruction:
    """Stroke a straight line."""

    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float
    color: Color


Instruction = Union[TextInstruction, LineInstruction]


@dataclass
class Page:
    """One page handle; instructions are kept in drawing order."""

    index: int
    width: float
    height: float
    instructions: List[Instruction] = field(default_factory=list)

    @property
    def texts(self) -> List[TextInstruction]:
        return [item for item in self.instructions if isinstance(item, TextInstruction)]


class PageDocument:
    """
    In-memory paginated document.

    Args:
        fonts: Extra TrueType fonts (name -> .ttf path) registered at serialization
        title: PDF metadata title
        author: PDF metadata author

    Example:
        >>> document = PageDocument()
        >>> page = document.new_page(612, 792)
        >>> document.draw_text(page, "Hello", 50, 732, body_style)
        >>> pdf_bytes = document.serialize()
    """

    def __init__(self, fonts: Optional[Mapping[str, str]] = None, title: str = "", author: str = ""):
        self.fonts = dict(fonts or {})
        self.title = title
        self.author = author
        self.footer_stamped = False
        self._pages: List[Page] = []

    @property
    def pages(self) -> Tuple[Page, ...]:
        return tuple(self._pages)

    def new_page(self, width: float, height: float) -> Page:
        """
        Append a blank page.

        Raises:
            SerializationError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise SerializationError(
                f"Invalid page size {width}x{height}: both dimensions must be positive",
                page_index=len(self._pages),
            )
        page = Page(index=len(self._pages), width=float(width), height=float(height))
        self._pages.append(page)
        return page

    def page_count(self) -> int:
        return len(self._pages)

    def get_page(self, index: int) -> Page:
        """Page by zero-based index."""
        if not 0 <= index < len(self._pages):
            raise IndexError(f"Page index {index} out of range (document has {len(self._pages)} pages)")
        return self._pages[index]

    def draw_text(self, page: Page, text: str, x: float, y: float, style: TextStyle) -> None:
        page.instructions.append(TextInstruction(text=text, x=x, y=y, style=style))

    def draw_line(
        self,
        page: Page,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        thickness: float = 1.0,
        color: Color = (0.0, 0.0, 0.0),
    ) -> None:
        page.instructions.append(
            LineInstruction(x1=x1, y1=y1, x2=x2, y2=y2, thickness=thickness, color=color)
        )

    def text_instructions(self) -> List[Tuple[int, TextInstruction]]:
        """All text instructions as (page index, instruction), in drawing order."""
        return [(page.index, item) for page in self._pages for item in page.texts]

    def serialize(self) -> bytes:
        """
        Replay every page onto a reportlab canvas and return the PDF bytes.

        Raises:
            SerializationError: If the document is empty, a font cannot be
                registered, or reportlab fails while drawing or saving
        """
        if not self._pages:
            raise SerializationError("Cannot serialize a document with no pages")

        register_fonts(self.fonts)

        buffer = io.BytesIO()
        first = self._pages[0]
        pdf = canvas.Canvas(buffer, pagesize=(first.width, first.height))
        if self.title:
            pdf.setTitle(self.title)
        if self.author:
            pdf.setAuthor(self.author)

        for page in self._pages:
            try:
                pdf.setPageSize((page.width, page.height))
                for item in page.instructions:
                    _replay(pdf, item)
                pdf.showPage()
            except Exception as error:
                raise SerializationError(
                    "Failed to draw page", page_index=page.index, original_error=error
                ) from error

        try:
            pdf.save()
        except Exception as error:
            raise SerializationError("Failed to save PDF", original_error=error) from error

        return buffer.getvalue()


def _replay(pdf: canvas.Canvas, item: Instruction) -> None:
    if isinstance(item, TextInstruction):
        pdf.setFont(item.style.font, item.style.size)
        pdf.setFillColorRGB(*item.style.color)
        pdf.drawString(item.x, item.y, item.text)
    else:
        pdf.setLineWidth(item.thickness)
        pdf.setStrokeColorRGB(*item.color)
        pdf.line(item.x1, item.y1, item.x2, item.y2)
