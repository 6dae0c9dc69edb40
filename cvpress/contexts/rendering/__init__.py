"""
Rendering Context

Responsibilities:
- Measures and wraps text against font metrics
- Lays out a parsed resume onto fixed-size pages with automatic page breaks
- Stamps "Page i of N" footers once the page count is known
- Serializes pages to PDF and writes files
- Validates rendered PDFs by reading them back

Owns: Layout configuration, page layout, pagination, PDF output
Never: Modifies resume content or calls a language model
"""

from cvpress.contexts.rendering.document import PageDocument
from cvpress.contexts.rendering.exceptions import SerializationError
from cvpress.contexts.rendering.layout_engine import layout_resume
from cvpress.contexts.rendering.pagination import stamp_page_numbers
from cvpress.contexts.rendering.renderer import (
    default_filename,
    render_model,
    render_resume,
    save_pdf,
)
from cvpress.contexts.rendering.styles import LayoutConfig, load_layout_config
from cvpress.contexts.rendering.validator import ValidationResult, validate_pdf

__all__ = [
    "LayoutConfig",
    "PageDocument",
    "SerializationError",
    "ValidationResult",
    "default_filename",
    "layout_resume",
    "load_layout_config",
    "render_model",
    "render_resume",
    "save_pdf",
    "stamp_page_numbers",
    "validate_pdf",
]
