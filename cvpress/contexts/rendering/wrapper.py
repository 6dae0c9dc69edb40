"""
Greedy word wrapping against measured text width.

Words are split on whitespace (so runs of spaces collapse) and packed onto a line
while the measured width stays within max_width. A single word wider than
max_width is placed alone on its own line, never split.
"""

from typing import Callable, List

from cvpress.contexts.rendering.styles import TextStyle, measure_text_width

Measure = Callable[[str, TextStyle], float]


def wrap_text(
    text: str,
    style: TextStyle,
    max_width: float,
    measure: Measure = measure_text_width,
) -> List[str]:
    """
    Wrap text into lines that fit max_width.

    Args:
        text: Text to wrap
        style: Style used for measurement
        max_width: Available width in points
        measure: Width function (defaults to reportlab font metrics)

    Returns:
        Wrapped lines; [""] for empty or whitespace-only text

    Example:
        >>> wrap_text("one two three", body_style, max_width=30)
        ['one two', 'three']
    """
    words = text.split()
    if not words:
        return [""]

    lines = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if measure(candidate, style) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def wrap_with_first_width(
    text: str,
    style: TextStyle,
    first_width: float,
    rest_width: float,
    measure: Measure = measure_text_width,
) -> List[str]:
    """
    Wrap text whose first line has a different width from the rest.

    Used where a label shares the first line (skill categories): the first line is
    fitted into first_width, then the remaining words are re-wrapped at rest_width.
    """
    first_lines = wrap_text(text, style, first_width, measure)
    if len(first_lines) == 1:
        return first_lines

    remainder = " ".join(first_lines[1:])
    return [first_lines[0]] + wrap_text(remainder, style, rest_width, measure)
