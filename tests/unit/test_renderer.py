"""Unit tests for rendering entry points and PDF file output."""

import pytest

from cvpress.contexts.parsing.resume_model import Header, ResumeModel
from cvpress.contexts.rendering import default_filename, render_resume, save_pdf


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [
        ("Jane Doe", "Jane_Doe_CV.pdf"),
        ("  Jane   Q.  Doe ", "Jane_Q_Doe_CV.pdf"),
        ("José O'Neil, PhD", "José_ONeil_PhD_CV.pdf"),
        ("Mary-Kate Smith", "Mary-Kate_Smith_CV.pdf"),
        ("", "Resume_CV.pdf"),
        ("!!!", "Resume_CV.pdf"),
    ],
)
def test_default_filename(name, expected):
    """Test file names derived from the header name."""
    assert default_filename(ResumeModel(header=Header(name=name))) == expected


@pytest.mark.unit
def test_render_resume_returns_pdf():
    """Test that rendering Markdown input yields PDF bytes."""
    data = render_resume("# Jane Doe\n## Experience\n- Built things")

    assert data.startswith(b"%PDF")


@pytest.mark.unit
def test_render_empty_text_still_produces_pdf():
    """Test that empty input renders a one-page PDF instead of failing."""
    assert render_resume("").startswith(b"%PDF")


@pytest.mark.unit
def test_save_pdf_creates_directory(tmp_path):
    """Test that save_pdf creates the output directory and writes the bytes."""
    output_dir = tmp_path / "nested" / "results"

    path = save_pdf(b"%PDF-1.4 test", "Jane_Doe_CV.pdf", output_dir)

    assert path == output_dir / "Jane_Doe_CV.pdf"
    assert path.read_bytes() == b"%PDF-1.4 test"


@pytest.mark.unit
def test_save_pdf_default_filename(tmp_path):
    """Test the fallback file name."""
    assert save_pdf(b"%PDF", output_dir=tmp_path) == tmp_path / "Resume_CV.pdf"


@pytest.mark.unit
def test_save_pdf_failure_returns_none(tmp_path):
    """Test that write failures are reported by returning None."""
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("occupied", encoding="utf-8")

    assert save_pdf(b"%PDF", "x.pdf", blocker) is None
