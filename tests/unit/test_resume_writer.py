"""Unit tests for resume generation with a fake LLM provider."""

import pytest

from cvpress.contexts.generation import GenerationError, ResumeWriter, extract_resume_blocks
from cvpress.contexts.generation.prompts import SYSTEM_PROMPT
from cvpress.utils.llm import LLMProvider, LLMResponse, _retry_with_backoff, get_provider


class FakeProvider(LLMProvider):
    """Provider that returns a canned reply and records the prompts it was given."""

    _provider_prefix = "fake"
    _retryable_exception = TimeoutError
    _retry_message = "Fake timeout"

    def __init__(self, reply: str = "", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []
        self.update_model("test-model")

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=self.model, input_tokens=10, output_tokens=20)


@pytest.mark.unit
def test_prompts_include_inputs():
    """Test that the system prompt and both inputs reach the provider."""
    provider = FakeProvider(reply="Jane Doe\nEXPERIENCE")
    ResumeWriter(provider).generate("my resume", "the job")

    system_prompt, user_prompt = provider.calls[0]
    assert system_prompt == SYSTEM_PROMPT
    assert "Here is my current resume:\nmy resume" in user_prompt
    assert "Here is the job description:\nthe job" in user_prompt


@pytest.mark.unit
def test_reply_is_extracted_and_stripped():
    """Test fence extraction followed by Markdown stripping."""
    reply = "# Jane Doe\n---\n## Experience\n- **Built** things\n---\nLet me know if you need changes!"
    provider = FakeProvider(reply=reply)

    text = ResumeWriter(provider).generate("my resume", "the job")

    assert text == "Jane Doe\n\nEXPERIENCE\n• Built things"


@pytest.mark.unit
def test_strip_disabled_keeps_markdown():
    """Test that strip=False returns the reply as written."""
    provider = FakeProvider(reply="# Jane Doe\n- **Built** things")

    assert ResumeWriter(provider, strip=False).generate("r", "j") == "# Jane Doe\n- **Built** things"


@pytest.mark.unit
def test_extract_without_fences_is_identity():
    """Test that replies without fenced blocks pass through."""
    assert extract_resume_blocks("Jane Doe\nEXPERIENCE") == "Jane Doe\nEXPERIENCE"


@pytest.mark.unit
def test_extract_joins_multiple_blocks():
    """Test that several fenced blocks are kept in order."""
    message = "Jane Doe\n---\nEXPERIENCE\n---\n---\nSKILLS\n---"

    assert extract_resume_blocks(message) == "Jane Doe\n\nEXPERIENCE\n\nSKILLS"


@pytest.mark.unit
@pytest.mark.parametrize("current, job", [("", "job"), ("resume", "  "), ("\n", "")])
def test_empty_inputs_rejected(current, job):
    """Test that empty inputs fail before any provider call."""
    provider = FakeProvider(reply="unused")

    with pytest.raises(GenerationError):
        ResumeWriter(provider).generate(current, job)
    assert provider.calls == []


@pytest.mark.unit
def test_provider_failure_is_chained():
    """Test that provider exceptions surface as GenerationError with the cause attached."""
    cause = RuntimeError("quota exceeded")
    provider = FakeProvider(error=cause)

    with pytest.raises(GenerationError) as excinfo:
        ResumeWriter(provider).generate("resume", "job")

    assert excinfo.value.__cause__ is cause
    assert excinfo.value.original_error is cause
    assert excinfo.value.provider == "fake/test-model"
    assert "quota exceeded" in str(excinfo.value)


@pytest.mark.unit
@pytest.mark.parametrize("reply", ["", "   \n  ", "---\n\n---"])
def test_empty_reply_rejected(reply):
    """Test that replies without resume text raise GenerationError."""
    with pytest.raises(GenerationError):
        ResumeWriter(FakeProvider(reply=reply)).generate("resume", "job")


@pytest.mark.unit
def test_retry_with_backoff_recovers():
    """Test that retryable errors are retried until the operation succeeds."""
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise TimeoutError("busy")
        return "ok"

    assert _retry_with_backoff(flaky, TimeoutError, "Busy", base_delay=0) == "ok"
    assert len(attempts) == 3


@pytest.mark.unit
def test_retry_with_backoff_gives_up():
    """Test that the last retryable error is re-raised."""

    def always_busy():
        raise TimeoutError("busy")

    with pytest.raises(TimeoutError):
        _retry_with_backoff(always_busy, TimeoutError, "Busy", max_retries=2, base_delay=0)


@pytest.mark.unit
def test_unknown_provider():
    """Test that get_provider rejects unknown provider names."""
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("mystery")
