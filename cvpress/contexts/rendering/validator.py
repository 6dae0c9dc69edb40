"""
Read-back validation of rendered resumes.

Re-opens PDF output with pdfplumber / PyPDF2 and checks what the layout promises:
- the PDF has pages (and the expected number of them, when given)
- every page carries exactly one "Page i of N" footer with the right numbers
- no body text sits outside the top or bottom margin

Text crossing the left or right margin is reported as a warning, since a single
word wider than the content area is placed unsplit by the wrapper.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from cvpress.contexts.rendering.logger import _log_debug
from cvpress.contexts.rendering.styles import LayoutConfig, load_layout_config
from cvpress.utils.pdf_processing import RenderedPDF, TextLine

# Helvetica family descent as a fraction of font size; pdfplumber glyph boxes
# start this far below the baseline.
DESCENT_RATIO = 0.207

# Allowed slack (points) for glyph box estimates
MARGIN_TOLERANCE = 2.0

FOOTER_PATTERN = re.compile(r"^Page\s+(\d+)\s+of\s+(\d+)$")


@dataclass
class ValidationResult:
    """
    Result of read-back validation.

    Attributes:
        page_count: Pages found in the PDF
        issues: Hard failures (missing/duplicate footers, margin violations)
        warnings: Soft findings (horizontal overflow)
        footers: Footer text found on each page, in page order
    """

    page_count: int
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    footers: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


def estimate_baseline(line: TextLine) -> float:
    """Baseline y (PDF space) of a line recovered from its lowest glyph box edge."""
    return line.y0 + DESCENT_RATIO * line.max_size


def _check_footers(page_number: int, total: int, lines: List[TextLine], result: ValidationResult) -> List[TextLine]:
    """Record footer findings for one page; return the non-footer lines."""
    footers = []
    body = []
    for line in lines:
        match = FOOTER_PATTERN.match(line.text.strip())
        if match:
            footers.append((line, match))
        else:
            body.append(line)

    if len(footers) != 1:
        result.issues.append(f"Page {page_number}: expected 1 footer, found {len(footers)}")
    for line, match in footers:
        result.footers.append(line.text.strip())
        shown_page, shown_total = int(match.group(1)), int(match.group(2))
        if (shown_page, shown_total) != (page_number, total):
            result.issues.append(
                f"Page {page_number}: footer reads {line.text.strip()!r}, "
                f"expected 'Page {page_number} of {total}'"
            )
    return body


def _check_margins(
    page_number: int,
    page_size: tuple,
    lines: List[TextLine],
    config: LayoutConfig,
    result: ValidationResult,
) -> None:
    width, height = page_size
    lowest = config.margins.bottom - MARGIN_TOLERANCE
    highest = height - config.margins.top + MARGIN_TOLERANCE

    for line in lines:
        baseline = estimate_baseline(line)
        preview = line.text.strip()[:40]
        if baseline < lowest:
            result.issues.append(
                f"Page {page_number}: text below bottom margin at y={baseline:.1f}: {preview!r}"
            )
        elif baseline > highest:
            result.issues.append(
                f"Page {page_number}: text above top margin at y={baseline:.1f}: {preview!r}"
            )

        if line.x0 < config.margins.left - MARGIN_TOLERANCE:
            result.warnings.append(f"Page {page_number}: text left of margin: {preview!r}")
        if line.x1 > width - config.margins.right + MARGIN_TOLERANCE:
            result.warnings.append(f"Page {page_number}: text right of margin: {preview!r}")


def validate_pdf(
    source: Union[str, Path, bytes],
    config: Optional[LayoutConfig] = None,
    expected_pages: Optional[int] = None,
) -> ValidationResult:
    """
    Validate a rendered resume PDF.

    Args:
        source: PDF path or bytes
        config: Layout configuration the PDF was rendered with (default: packaged defaults)
        expected_pages: Optional exact page count to require

    Returns:
        ValidationResult; is_valid is False if any issue was found

    Example:
        >>> result = validate_pdf(render_resume(text))
        >>> result.is_valid
        True
    """
    if config is None:
        config = load_layout_config()

    pdf = RenderedPDF(source)
    result = ValidationResult(page_count=pdf.page_count)

    if result.page_count == 0:
        result.issues.append("PDF has no readable pages")
        return result
    if expected_pages is not None and result.page_count != expected_pages:
        result.issues.append(f"Expected {expected_pages} pages, found {result.page_count}")

    for page_number in range(1, result.page_count + 1):
        lines = pdf.get_lines(page_number)
        body = _check_footers(page_number, result.page_count, lines, result)
        _check_margins(page_number, pdf.page_size(page_number), body, config, result)

    _log_debug(
        f"Validated {result.page_count} page(s): {len(result.issues)} issues, "
        f"{len(result.warnings)} warnings"
    )
    return result
