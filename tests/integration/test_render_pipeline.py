"""
Integration tests for the full rendering pipeline.
Tests: resume text -> parse -> layout -> PDF bytes -> read back with pdfplumber.
"""

from pathlib import Path

import pytest

from cvpress.contexts.generation import ResumeWriter
from cvpress.contexts.parsing import parse_resume
from cvpress.contexts.rendering import (
    layout_resume,
    load_layout_config,
    render_resume,
    validate_pdf,
)
from cvpress.pipeline import tailor_resume
from cvpress.utils.llm import LLMProvider, LLMResponse
from cvpress.utils.pdf_processing import RenderedPDF

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


def squash(text: str) -> str:
    """Drop whitespace so word spacing differences in extraction don't matter."""
    return "".join(text.split())


def long_resume(bullet_count: int = 150) -> str:
    bullets = "\n".join(f"- Task {i:03d} done for the platform team" for i in range(bullet_count))
    return (
        "# Jane Doe\nStaff Engineer\njane@x.com | 555-0100\n"
        "## Experience\nStaff Engineer - Acme | 2018 - Present\n"
        f"{bullets}\n"
        "## Skills\nLanguages: Go, Python"
    )


class CannedProvider(LLMProvider):
    _provider_prefix = "canned"
    _retryable_exception = TimeoutError
    _retry_message = "Canned timeout"

    def __init__(self, reply: str):
        self.reply = reply
        self.update_model("fixture")

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        return LLMResponse(content=self.reply, model=self.model, input_tokens=0, output_tokens=0)


@pytest.mark.integration
def test_single_page_resume():
    """Test rendering the fixture resume to one valid page."""
    markdown = (FIXTURES_PATH / "jane_doe.md").read_text(encoding="utf-8")

    data = render_resume(markdown)
    result = validate_pdf(data, expected_pages=1)

    assert result.is_valid, result.issues
    assert result.page_count == 1
    assert result.footers == ["Page 1 of 1"]

    text = squash(RenderedPDF(data).full_text())
    for expected in [
        "JANEDOE",
        "SeniorSoftwareEngineer",
        "jane@x.com",
        "https://www.janedoe.dev",
        "EXPERIENCE",
        "SeniorSoftwareEngineer-AcmeCorp",
        "Jan2020-Present",
        "Cutp99latencyofthecheckoutAPIby40%",
        "Languages:",
        "Go,Python,SQL",
        "CERTIFICATIONS",
        "CertifiedKubernetesAdministrator,2021",
    ]:
        assert expected in text


@pytest.mark.integration
def test_long_resume_spans_pages_without_loss():
    """Test that a long entry continues across pages with every bullet exactly once."""
    count = 150
    data = render_resume(long_resume(count))
    result = validate_pdf(data)

    assert result.is_valid, result.issues
    assert result.page_count >= 2
    total = result.page_count
    assert result.footers == [f"Page {page} of {total}" for page in range(1, total + 1)]

    text = squash(RenderedPDF(data).full_text())
    for i in range(count):
        assert text.count(f"Task{i:03d}donefortheplatformteam") == 1
    assert text.index("Task000") < text.index(f"Task{count - 1:03d}")
    assert "Go,Python" in text


@pytest.mark.integration
def test_unstamped_document_fails_validation():
    """Test that the validator notices missing footers."""
    document = layout_resume(parse_resume("Jane Doe\nEngineer\nSUMMARY\nShips things."))
    result = validate_pdf(document.serialize())

    assert not result.is_valid
    assert result.footers == []
    assert any("expected 1 footer, found 0" in issue for issue in result.issues)


@pytest.mark.integration
def test_validation_page_count_mismatch():
    """Test the expected page count check."""
    result = validate_pdf(render_resume("Jane Doe\nEngineer"), expected_pages=2)

    assert not result.is_valid
    assert "Expected 2 pages, found 1" in result.issues


@pytest.mark.integration
def test_validate_pdf_from_file(tmp_path):
    """Test validation of a PDF on disk."""
    pdf_path = tmp_path / "resume.pdf"
    pdf_path.write_bytes(render_resume("Jane Doe\nEngineer\nSKILLS\nGo, Python"))

    assert validate_pdf(pdf_path).is_valid


@pytest.mark.integration
def test_a4_preset_page_size():
    """Test that the a4 preset changes the rendered page size and stays valid."""
    config = load_layout_config(presets=["a4"])
    data = render_resume(long_resume(40), config=config)

    pdf = RenderedPDF(data)
    width, height = pdf.page_size(1)
    assert width == pytest.approx(595.28, abs=0.01)
    assert height == pytest.approx(841.89, abs=0.01)
    assert validate_pdf(data, config=config).is_valid


@pytest.mark.integration
def test_tailor_resume_end_to_end():
    """Test generation through rendering with a canned provider reply."""
    reply = (FIXTURES_PATH / "jane_doe.md").read_text(encoding="utf-8")
    writer = ResumeWriter(CannedProvider(reply))

    result = tailor_resume("Jane Doe\nEngineer", "Senior backend role", writer)

    assert result.filename == "Jane_Doe_CV.pdf"
    assert result.model.header.name == "Jane Doe"
    assert "EXPERIENCE" in result.model.sections
    assert result.text.startswith("Jane Doe\nSenior Software Engineer")
    assert validate_pdf(result.pdf_bytes).is_valid
