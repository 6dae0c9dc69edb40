"""
Pattern matching for resume line classification.

This module provides regex patterns and predicates used by the parser to decide
what a single line of resume text is: a section header, a bullet, a date, a
location, a technologies line, a contact line, and so on.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Tuple

# =============================================================================
# HEADER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class HeaderPatterns:
    """
    Markers for the header block (name, title, contact lines).

    The header is at most MAX_HEADER_LINES lines long: name, optional title,
    then contact lines.
    """

    # A line containing either of these cannot be the title
    TITLE_EXCLUDED: Tuple[str, ...] = ("@", "|")

    # A line containing any of these continues the contact block
    CONTACT_MARKERS: Tuple[str, ...] = ("@", "|", "-", "(", "http")

    # Contact lines are joined with this before splitting into tokens
    CONTACT_SEPARATOR: str = "|"

    MAX_HEADER_LINES: int = 5


# =============================================================================
# BODY LINE PATTERNS
# =============================================================================

_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
    r"|Spring|Summer|Fall|Autumn|Winter)\.?"
)
_DATE_POINT = rf"(?:{_MONTH},?\s+\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
_DATE_END = rf"(?:{_DATE_POINT}|Present|Current|Now|Ongoing|Today)"
_RANGE_SEPARATOR = r"(?:\s*[-–—]\s*|\s+to\s+)"
_WORK_MODE = r"(?:Remote|Hybrid|On-?site|In-?person)"

# US states and DC, Canadian provinces, and country codes common in resumes.
# Two capitals after a comma only mark a location when they are one of these,
# so titles such as "Software Engineer, ML" stay titles.
_REGION_CODES = (
    "AL|AK|AZ|AR|CA|CO|CT|DE|DC|FL|GA|HI|ID|IL|IN|IA|KS|KY|LA|ME|MD|MA|MI|MN|MS|MO|MT"
    "|NE|NV|NH|NJ|NM|NY|NC|ND|OH|OK|OR|PA|RI|SC|SD|TN|TX|UT|VT|VA|WA|WV|WI|WY"
    "|AB|BC|MB|NB|NL|NS|ON|PE|QC|SK"
    "|UK|GB|US|USA|FR|NL|ES|PT|CH|AT|BE|IE|SE|NO|DK|FI|PL|CZ|SG|JP|AU|NZ|BR|MX"
)


@dataclass(frozen=True)
class LinePatterns:
    """
    Regex patterns for body line classification.

    DATE_LINE and LOCATION lines must match the whole line so that entry title
    lines like "Engineer - Acme Corp | Jan 2020 - Present" are never mistaken
    for a bare date.
    """

    BULLET_MARKERS: Tuple[str, ...] = ("•", "-", "*", "▪", "‣", "◦", "–")

    # "Jan 2020", "January 2020 - Present", "01/2019 – 03/2021", "2018 to 2022"
    DATE_LINE: str = rf"^\(?{_DATE_POINT}(?:{_RANGE_SEPARATOR}{_DATE_END})?\)?$"

    # Any date point or open-ended range word anywhere in a fragment
    DATE_FRAGMENT: str = rf"(?:\b{_DATE_POINT}\b|\b(?:Present|Current)\b)"

    # "Remote", "(Remote)", "Hybrid, Berlin", "On-site (NYC)"; the mode must stand
    # alone or be followed by punctuation, so "Remote Sensing Intern" is no match
    WORK_MODE_LINE: str = rf"^\(?{_WORK_MODE}\)?(?:\s*[,(/–—:]\s*[^|]{{0,40}})?$"

    # "San Francisco, CA" or "Berlin, DE", optionally followed by a work mode
    CITY_STATE_LINE: str = (
        rf"^[A-Z][A-Za-z.' ]+,\s*(?:{_REGION_CODES})"
        rf"(?:\s*[(\-–]?\s*(?i:{_WORK_MODE})\)?)?$"
    )

    TECHNOLOGIES_PREFIXES: Tuple[str, ...] = ("built with", "technologies", "tech stack")

    # Footer text left over when a rendered resume is fed back in
    STALE_FOOTER: str = r"^Page\s+\d+\s+of\s+\d+$"

    ENTRY_SEPARATOR: str = " - "
    ORGANIZATION_SEPARATOR: str = "|"
    SENTENCE_ENDINGS: Tuple[str, ...] = (".", "!", "?")


_DATE_LINE_RE = re.compile(LinePatterns.DATE_LINE, re.IGNORECASE)
_DATE_FRAGMENT_RE = re.compile(LinePatterns.DATE_FRAGMENT, re.IGNORECASE)
_WORK_MODE_RE = re.compile(LinePatterns.WORK_MODE_LINE, re.IGNORECASE)
_CITY_STATE_RE = re.compile(LinePatterns.CITY_STATE_LINE)
_STALE_FOOTER_RE = re.compile(LinePatterns.STALE_FOOTER, re.IGNORECASE)


# =============================================================================
# PREDICATES
# =============================================================================


def is_title_candidate(line: str) -> bool:
    """Second header line is a title unless it looks like contact info."""
    return not any(marker in line for marker in HeaderPatterns.TITLE_EXCLUDED)


def is_contact_line(line: str) -> bool:
    return any(marker in line for marker in HeaderPatterns.CONTACT_MARKERS)


def split_contact_tokens(contact_lines) -> Tuple[str, ...]:
    """Join contact lines with " | " and split back into trimmed, non-empty tokens."""
    joined = " | ".join(contact_lines)
    return tuple(
        token.strip() for token in joined.split(HeaderPatterns.CONTACT_SEPARATOR) if token.strip()
    )


def is_bullet(line: str) -> bool:
    return line.startswith(LinePatterns.BULLET_MARKERS)


def strip_bullet(line: str) -> str:
    """Remove one leading bullet marker and surrounding whitespace."""
    if is_bullet(line):
        return line[1:].strip()
    return line.strip()


def is_section_header(line: str) -> bool:
    """
    Section headers are fully upper-case (and longer than two characters) or end with ':'.

    str.isupper() requires at least one cased character, so "2020 - 2022" is not a header.

    Examples:
        >>> is_section_header("EXPERIENCE")
        True
        >>> is_section_header("Work History:")
        True
        >>> is_section_header("Languages: Go, Python")
        False
    """
    return (line.isupper() and len(line) > 2) or line.endswith(":")


def section_name_from_header(line: str) -> str:
    """Header text with trailing colon(s) removed, original casing kept."""
    return line.rstrip(":").strip()


def is_date_line(line: str) -> bool:
    return bool(_DATE_LINE_RE.match(line))


def looks_like_date(fragment: str) -> bool:
    """Whether a fragment (e.g., one "|"-separated part) carries a date."""
    return bool(_DATE_FRAGMENT_RE.search(fragment))


def is_location_line(line: str) -> bool:
    """A bare place or work mode line; lines with " - " are entry titles instead."""
    if LinePatterns.ENTRY_SEPARATOR in line:
        return False
    return bool(_WORK_MODE_RE.match(line) or _CITY_STATE_RE.match(line))


def is_technologies_line(line: str) -> bool:
    return line.lower().startswith(LinePatterns.TECHNOLOGIES_PREFIXES)


def is_sentence(line: str) -> bool:
    return line[:1].isalpha() and line.endswith(LinePatterns.SENTENCE_ENDINGS)


def starts_with_letter(line: str) -> bool:
    return line[:1].isalpha()


def is_stale_footer(line: str) -> bool:
    return bool(_STALE_FOOTER_RE.match(line))
