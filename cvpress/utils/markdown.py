"""
Markdown Utilities

Utilities for converting Markdown (as returned by language models) to the plain
line-oriented text the resume parser expects.
"""

import re
from typing import Optional

HEADING = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)\s*#*\s*$")
HORIZONTAL_RULE = re.compile(r"^\s*([-*_])(?:\s*\1){2,}\s*$")
CODE_FENCE = re.compile(r"^\s*(```|~~~)")
BLOCKQUOTE = re.compile(r"^\s*>\s?")
LIST_LEADER = re.compile(r"^\s*(?:[-*+]|\d{1,2}[.)])\s+")

IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
LINK = re.compile(r"\[([^\]]+)\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")
AUTOLINK = re.compile(r"<((?:https?://|mailto:)[^>\s]+|[^@\s<>]+@[^@\s<>]+)>")
HTML_TAG = re.compile(r"</?[A-Za-z][^>]*>")
BOLD = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
ITALIC_STAR = re.compile(r"(?<![*\w])\*(?=\S)(.+?)(?<=\S)\*(?![*\w])")
ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_(?=\S)(.+?)(?<=\S)_(?!\w)")
STRIKETHROUGH = re.compile(r"~~(.+?)~~")
INLINE_CODE = re.compile(r"`([^`]+)`")
ESCAPED = re.compile(r"\\([\\`*_{}\[\]()#+\-.!|>~])")


def _bare_url(url: str) -> str:
    """URL without scheme, "www." or mailto: prefix, for comparing against link labels."""
    bare = re.sub(r"^(?:https?://|mailto:|tel:)", "", url, flags=re.IGNORECASE)
    bare = re.sub(r"^www\.", "", bare, flags=re.IGNORECASE)
    return bare.rstrip("/").lower()


def format_link(label: str, url: str, keep_link_urls: bool = True) -> str:
    """
    Render a Markdown link as plain text.

    Examples:
        >>> format_link("LinkedIn", "https://linkedin.com/in/jane")
        'LinkedIn (https://linkedin.com/in/jane)'
        >>> format_link("jane@x.com", "mailto:jane@x.com")
        'jane@x.com'
        >>> format_link("GitHub", "https://github.com/jane", keep_link_urls=False)
        'GitHub'
    """
    label = label.strip()
    if not keep_link_urls or _bare_url(label) == _bare_url(url):
        return label
    if url.lower().startswith("mailto:"):
        url = url[len("mailto:") :]
    return f"{label} ({url})"


def _strip_inline(line: str, keep_link_urls: bool) -> str:
    line = IMAGE.sub(lambda m: m.group(1), line)
    line = LINK.sub(lambda m: format_link(m.group(1), m.group(2), keep_link_urls), line)
    line = AUTOLINK.sub(lambda m: re.sub(r"^mailto:", "", m.group(1)), line)
    line = HTML_TAG.sub("", line)
    line = INLINE_CODE.sub(r"\1", line)
    line = BOLD.sub(r"\2", line)
    line = ITALIC_STAR.sub(r"\1", line)
    line = ITALIC_UNDERSCORE.sub(r"\1", line)
    line = STRIKETHROUGH.sub(r"\1", line)
    return ESCAPED.sub(r"\1", line)


def strip_markup(
    text: str,
    list_marker: Optional[str] = "•",
    uppercase_headings: bool = True,
    keep_link_urls: bool = True,
) -> str:
    """
    Convert Markdown to plain resume text, one logical item per line.

    - Headings lose their '#' markers; level 2+ headings are upper-cased (when
      uppercase_headings) so they read as section headers
    - Horizontal rules, code fences and blockquote markers are removed
    - List leaders (-, *, +, 1.) become list_marker (None keeps the original leader)
    - Emphasis, inline code and HTML tags are stripped to their text
    - [label](url) becomes "label (url)", or just the url when label and url match

    Args:
        text: Markdown text
        list_marker: Bullet glyph to use for list items
        uppercase_headings: Upper-case level 2+ headings
        keep_link_urls: Keep link targets next to their labels

    Returns:
        Plain text with the original line structure

    Example:
        >>> strip_markup("# Jane Doe\\n## Experience\\n- **Built** things")
        'Jane Doe\\nEXPERIENCE\\n• Built things'
    """
    output = []
    in_code_block = False

    for line in text.splitlines():
        if CODE_FENCE.match(line):
            in_code_block = not in_code_block
            continue
        if in_code_block:
            output.append(line)
            continue
        if HORIZONTAL_RULE.match(line):
            output.append("")
            continue

        line = BLOCKQUOTE.sub("", line)

        heading = HEADING.match(line)
        if heading:
            level, content = len(heading.group(1)), _strip_inline(heading.group(2), keep_link_urls)
            output.append(content.upper() if uppercase_headings and level >= 2 else content)
            continue

        leader = LIST_LEADER.match(line)
        if leader and list_marker is not None:
            content = _strip_inline(line[leader.end() :], keep_link_urls)
            output.append(f"{list_marker} {content}")
            continue

        output.append(_strip_inline(line, keep_link_urls))

    return "\n".join(output)
