"""
End-to-end tailoring pipeline: generate -> parse -> lay out -> paginate -> serialize.

The text generator is passed in by the caller, so the pipeline has no process-wide
state and runs unchanged against a fake writer in tests.
"""

from dataclasses import dataclass
from typing import Optional

from cvpress.contexts.generation.writer import ResumeWriter
from cvpress.contexts.parsing.logger import log_parse_summary
from cvpress.contexts.parsing.resume_model import ResumeModel
from cvpress.contexts.parsing.resume_parser import parse_resume
from cvpress.contexts.rendering.renderer import default_filename, render_model
from cvpress.contexts.rendering.styles import LayoutConfig


@dataclass
class TailoredResume:
    """
    Result of tailoring a resume to a job description.

    Attributes:
        text: Plain resume text returned by the writer
        model: Parsed resume
        pdf_bytes: Rendered PDF
        filename: Suggested file name ("<Name>_CV.pdf")
    """

    text: str
    model: ResumeModel
    pdf_bytes: bytes
    filename: str


def tailor_resume(
    current_resume: str,
    job_description: str,
    writer: ResumeWriter,
    config: Optional[LayoutConfig] = None,
) -> TailoredResume:
    """
    Generate a tailored resume and render it to PDF.

    Args:
        current_resume: The candidate's existing resume text
        job_description: Target job description
        writer: Anything with generate(current_resume, job_description) -> str
        config: Layout configuration (default: packaged defaults)

    Returns:
        TailoredResume with text, model, PDF bytes and file name

    Raises:
        GenerationError: If the writer fails (propagated unchanged)
        SerializationError: If the PDF cannot be built
    """
    text = writer.generate(current_resume, job_description)
    model = parse_resume(text)
    log_parse_summary(model)
    pdf_bytes = render_model(model, config)
    return TailoredResume(
        text=text, model=model, pdf_bytes=pdf_bytes, filename=default_filename(model)
    )
