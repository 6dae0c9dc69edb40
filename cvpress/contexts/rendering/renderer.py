"""
Resume Rendering Module

Turns raw resume text into PDF bytes and writes PDFs to disk:
strip markup -> parse -> lay out -> stamp page numbers -> serialize.
"""

import os
import re
import time
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from cvpress.contexts.parsing.logger import log_parse_summary
from cvpress.contexts.parsing.resume_model import ResumeModel
from cvpress.contexts.parsing.resume_parser import parse_resume
from cvpress.contexts.rendering.layout_engine import layout_resume
from cvpress.contexts.rendering.logger import _log_error, _log_info, log_render_result
from cvpress.contexts.rendering.pagination import stamp_page_numbers
from cvpress.contexts.rendering.styles import LayoutConfig, load_layout_config
from cvpress.utils.markdown import strip_markup

load_dotenv()

RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

DEFAULT_FILENAME = "Resume_CV.pdf"


def default_filename(model: ResumeModel) -> str:
    """
    File name for a rendered resume: "<Name>_CV.pdf".

    Whitespace runs become "_" and characters unsafe in file names are dropped.

    Examples:
        "Jane Doe"         -> "Jane_Doe_CV.pdf"
        "José O'Neil, PhD" -> "José_ONeil_PhD_CV.pdf"
        ""                 -> "Resume_CV.pdf"
    """
    name = re.sub(r"[^\w\s-]", "", model.header.name).strip()
    name = re.sub(r"\s+", "_", name)
    if not name:
        return DEFAULT_FILENAME
    return f"{name}_CV.pdf"


def render_model(model: ResumeModel, config: Optional[LayoutConfig] = None) -> bytes:
    """
    Lay out, paginate and serialize an already parsed resume.

    Raises:
        SerializationError: If reportlab cannot build the PDF
    """
    if config is None:
        config = load_layout_config()

    start = time.time()
    document = layout_resume(model, config)
    stamp_page_numbers(document, config)
    data = document.serialize()

    log_render_result(
        model.header.name or "resume", document.page_count(), len(data), time.time() - start
    )
    return data


def render_resume(raw_text: str, config: Optional[LayoutConfig] = None, strip: bool = True) -> bytes:
    """
    Render resume text to PDF bytes.

    Args:
        raw_text: Resume text (Markdown is fine when strip=True)
        config: Layout configuration (default: packaged defaults)
        strip: Strip Markdown markup before parsing

    Returns:
        PDF bytes

    Raises:
        SerializationError: If reportlab cannot build the PDF

    Example:
        >>> pdf_bytes = render_resume(open("resume.md").read())
        >>> save_pdf(pdf_bytes, "Jane_Doe_CV.pdf")
    """
    text = strip_markup(raw_text) if strip else raw_text
    model = parse_resume(text)
    log_parse_summary(model)
    return render_model(model, config)


def save_pdf(
    data: bytes, filename: Optional[str] = None, output_dir: Optional[Path] = None
) -> Optional[Path]:
    """
    Write PDF bytes to disk.

    Failures are logged, not raised: saving is the last step and the caller
    still holds the bytes.

    Args:
        data: PDF bytes
        filename: File name (default: Resume_CV.pdf)
        output_dir: Target directory, created if missing (default: RESULTS_PATH)

    Returns:
        Path written, or None if writing failed
    """
    output_dir = Path(output_dir) if output_dir is not None else RESULTS_PATH
    output_path = output_dir / (filename or DEFAULT_FILENAME)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as error:
        _log_error(f"Failed to save PDF to {output_path}: {error}")
        return None

    _log_info(f"Saved PDF: {output_path} ({len(data):,} bytes)")
    return output_path
