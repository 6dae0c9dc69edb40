"""
Page number footer.

Runs after layout, once the final page count is known, and stamps
"Page i of N" near the bottom of every page.
"""

from cvpress.contexts.rendering.document import PageDocument
from cvpress.contexts.rendering.logger import _log_debug, _log_warning
from cvpress.contexts.rendering.styles import LayoutConfig


def stamp_page_numbers(document: PageDocument, config: LayoutConfig) -> int:
    """
    Draw the page footer on every page of a laid-out document.

    The footer is placed at x = page_width / 2 - footer.x_offset and
    y = margins.bottom / 2, using the "footer" style. A document is stamped at
    most once; a repeated call logs a warning and draws nothing.

    Args:
        document: Fully laid-out document
        config: Layout configuration used for the layout

    Returns:
        Total page count written into the footers
    """
    total = document.page_count()
    if document.footer_stamped:
        _log_warning("Page numbers already stamped; skipping")
        return total

    style = config.style("footer")
    y = config.margins.bottom / 2
    for page in document.pages:
        text = config.footer.text(page=page.index + 1, total=total)
        x = page.width / 2 - config.footer.x_offset
        document.draw_text(page, text, x, y, style)

    document.footer_stamped = True
    _log_debug(f"Stamped page numbers on {total} page(s)")
    return total
