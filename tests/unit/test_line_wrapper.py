"""Unit tests for greedy line wrapping."""

import pytest

from cvpress.contexts.rendering.styles import TextStyle, measure_text_width
from cvpress.contexts.rendering.wrapper import wrap_text, wrap_with_first_width

BODY = TextStyle(font="Helvetica", size=7, leading=12)


def char_count(text, style):
    """One unit per character, so widths are easy to reason about."""
    return len(text)


@pytest.mark.unit
def test_wrap_packs_words_greedily():
    """Test that words fill a line until the next one would overflow."""
    assert wrap_text("one two three", BODY, 7, char_count) == ["one two", "three"]


@pytest.mark.unit
def test_wrap_allows_exact_fit():
    """Test that a line exactly max_width wide is accepted."""
    assert wrap_text("ab cd", BODY, 5, char_count) == ["ab cd"]


@pytest.mark.unit
def test_wrap_oversized_word_gets_own_line():
    """Test that a word wider than max_width is placed alone and not split."""
    lines = wrap_text("a supercalifragilistic b", BODY, 5, char_count)
    assert lines == ["a", "supercalifragilistic", "b"]


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_wrap_empty_text(text):
    """Test that empty or whitespace-only text yields a single empty line."""
    assert wrap_text(text, BODY, 100, char_count) == [""]


@pytest.mark.unit
def test_wrap_normalizes_whitespace():
    """Test that runs of whitespace collapse to single spaces."""
    assert wrap_text("a   b\n  c", BODY, 100, char_count) == ["a b c"]


@pytest.mark.unit
def test_wrap_lines_fit_and_rejoin_to_input():
    """Test width bound and lossless rejoin with real font metrics."""
    text = (
        "Designed and operated a multi-region event streaming platform handling "
        "billions of messages per day with strict latency budgets and zero data loss"
    )
    max_width = 120

    lines = wrap_text(text, BODY, max_width)

    assert len(lines) > 1
    for line in lines:
        assert measure_text_width(line, BODY) <= max_width or " " not in line
    assert " ".join(lines) == " ".join(text.split())


@pytest.mark.unit
def test_wrap_with_first_width_rewraps_remainder():
    """Test that only the first line uses the narrower width."""
    lines = wrap_with_first_width("aa bb cc dd", BODY, 2, 8, char_count)
    assert lines == ["aa", "bb cc dd"]


@pytest.mark.unit
def test_wrap_with_first_width_single_line():
    """Test that text fitting the first width stays on one line."""
    assert wrap_with_first_width("aa bb", BODY, 10, 3, char_count) == ["aa bb"]


@pytest.mark.unit
def test_measure_text_width_depends_on_style():
    """Test that measurement uses the style's font and size."""
    bold = TextStyle(font="Helvetica-Bold", size=7, leading=12)
    large = TextStyle(font="Helvetica", size=14, leading=18)

    assert measure_text_width("", BODY) == 0
    assert measure_text_width("Python", bold) > measure_text_width("Python", BODY)
    assert measure_text_width("Python", large) == pytest.approx(2 * measure_text_width("Python", BODY))
