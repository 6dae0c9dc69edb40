"""
Resume text parser.

Turns loosely structured resume text (as returned by a language model after
markup stripping) into an immutable ResumeModel.

Parsing is a single pass over trimmed, non-blank lines:
1. The first lines form the header (name, optional title, contact lines).
2. Every body line is classified into a LineShape.
3. A transition table keyed by (section kind, line shape) picks a handler.
   Each handler records the line into mutable drafts and returns the next state.
4. Drafts are frozen into the model at the end.

The parser never raises for str input. Lines that no rule claims are kept
(entry-section notes, general-section lines, preamble) and logged at debug level.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Tuple

from cvpress.contexts.parsing.line_patterns import (
    HeaderPatterns,
    LinePatterns,
    is_bullet,
    is_contact_line,
    is_date_line,
    is_location_line,
    is_section_header,
    is_sentence,
    is_stale_footer,
    is_technologies_line,
    is_title_candidate,
    looks_like_date,
    section_name_from_header,
    split_contact_tokens,
    starts_with_letter,
    strip_bullet,
)
from cvpress.contexts.parsing.logger import _log_debug, log_ambiguity
from cvpress.contexts.parsing.resume_model import (
    EntriesSection,
    Entry,
    GeneralSection,
    Header,
    NarrativeSection,
    ResumeModel,
    SectionContent,
    SectionKind,
    SkillsSection,
    infer_section_kind,
)


class LineShape(Enum):
    """Classification of one body line, in priority order."""

    BULLET = "bullet"
    DATE = "date"
    LOCATION = "location"
    SECTION_HEADER = "section_header"
    TECHNOLOGIES = "technologies"
    DASHED = "dashed"
    SENTENCE = "sentence"
    WORDED = "worded"
    OTHER = "other"


def classify_line(line: str) -> LineShape:
    """
    Classify a trimmed, non-empty body line.

    Examples:
        >>> classify_line("• Built things")
        <LineShape.BULLET: 'bullet'>
        >>> classify_line("Jan 2020 - Present")
        <LineShape.DATE: 'date'>
        >>> classify_line("EXPERIENCE")
        <LineShape.SECTION_HEADER: 'section_header'>
        >>> classify_line("Engineer - Acme Corp | Jan 2020 - Present")
        <LineShape.DASHED: 'dashed'>
    """
    if is_bullet(line):
        return LineShape.BULLET
    if is_date_line(line):
        return LineShape.DATE
    if is_location_line(line):
        return LineShape.LOCATION
    if is_section_header(line) and section_name_from_header(line):
        return LineShape.SECTION_HEADER
    if is_technologies_line(line):
        return LineShape.TECHNOLOGIES
    if LinePatterns.ENTRY_SEPARATOR in line:
        return LineShape.DASHED
    if is_sentence(line):
        return LineShape.SENTENCE
    if starts_with_letter(line):
        return LineShape.WORDED
    return LineShape.OTHER


# =============================================================================
# DRAFTS (mutable while parsing, frozen at the end)
# =============================================================================


@dataclass
class _EntryDraft:
    title: str
    organization: str = ""
    date: str = ""
    location: str = ""
    description: List[str] = field(default_factory=list)
    bullets: List[str] = field(default_factory=list)
    technologies: str = ""

    def freeze(self) -> Entry:
        return Entry(
            title=self.title,
            organization=self.organization,
            date=self.date,
            location=self.location,
            description=tuple(self.description),
            bullets=tuple(self.bullets),
            technologies=self.technologies,
        )


@dataclass
class _SectionDraft:
    name: str
    kind: SectionKind
    entries: List[_EntryDraft] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    categories: Dict[str, List[str]] = field(default_factory=dict)
    items: List[str] = field(default_factory=list)
    text_parts: List[str] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)

    def freeze(self) -> SectionContent:
        if self.kind is SectionKind.ENTRIES:
            return EntriesSection(
                entries=tuple(entry.freeze() for entry in self.entries),
                notes=tuple(self.notes),
            )
        if self.kind is SectionKind.SKILLS:
            return SkillsSection(
                categories=MappingProxyType(
                    {label: tuple(skills) for label, skills in self.categories.items()}
                ),
                items=tuple(self.items),
            )
        if self.kind is SectionKind.NARRATIVE:
            return NarrativeSection(text=" ".join(self.text_parts))
        return GeneralSection(lines=tuple(self.lines))


@dataclass
class _ParseBuffer:
    """Everything accumulated so far; sections keep first-seen order."""

    sections: Dict[str, _SectionDraft] = field(default_factory=dict)
    preamble: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParserState:
    """Open section and open entry; both None before the first section header."""

    section: Optional[_SectionDraft] = None
    entry: Optional[_EntryDraft] = None

    @property
    def kind(self) -> Optional[SectionKind]:
        return self.section.kind if self.section else None


Handler = Callable[[_ParseBuffer, ParserState, str, int], ParserState]


# =============================================================================
# HANDLERS
# =============================================================================


def _flush_entry(state: ParserState) -> None:
    if state.section is not None and state.entry is not None:
        state.section.entries.append(state.entry)


def _open_section(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    _flush_entry(state)
    name = section_name_from_header(line)
    section = buffer.sections.get(name)
    if section is None:
        section = _SectionDraft(name=name, kind=infer_section_kind(name))
        buffer.sections[name] = section
        _log_debug(f"Line {line_number}: opened section {name!r} ({section.kind.value})")
    else:
        _log_debug(f"Line {line_number}: re-opened section {name!r}, merging content")
    return ParserState(section=section)


def _to_preamble(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    buffer.preamble.append(line)
    log_ambiguity(line_number, line, "preamble")
    return state


def _to_notes(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    state.section.notes.append(line)
    log_ambiguity(line_number, line, f"{state.section.name} notes")
    return state


def parse_entry_heading(line: str) -> _EntryDraft:
    """
    Split an entry title line into title, organization, date and location.

    The line splits on the first " - " only, so a date range in the remainder
    stays intact. The remainder splits on "|": organization first, then date.
    Any further parts go to date when date-like, otherwise to location.

    Examples:
        "Engineer - Acme Corp | Jan 2020 - Present"
            -> title="Engineer", organization="Acme Corp", date="Jan 2020 - Present"
        "BSc Computer Science"
            -> title="BSc Computer Science"
    """
    title, separator, remainder = line.partition(LinePatterns.ENTRY_SEPARATOR)
    if not separator:
        return _EntryDraft(title=line)

    draft = _EntryDraft(title=title.strip())
    parts = [part.strip() for part in remainder.split(LinePatterns.ORGANIZATION_SEPARATOR)]
    parts = [part for part in parts if part]
    if parts:
        draft.organization = parts[0]
    if len(parts) > 1:
        draft.date = parts[1]
    for extra in parts[2:]:
        if looks_like_date(extra) and not draft.date:
            draft.date = extra
        elif looks_like_date(extra):
            draft.date = f"{draft.date} | {extra}"
        elif draft.location:
            draft.location = f"{draft.location} | {extra}"
        else:
            draft.location = extra
    return draft


def _start_entry(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    _flush_entry(state)
    return ParserState(section=state.section, entry=parse_entry_heading(line))


def _describe(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    if state.entry is None:
        return _to_notes(buffer, state, line, line_number)
    state.entry.description.append(line)
    return state


def _start_or_describe(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    if state.entry is None:
        return _start_entry(buffer, state, line, line_number)
    return _describe(buffer, state, line, line_number)


def _set_date(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    if state.entry is None or state.entry.date:
        return _describe(buffer, state, line, line_number)
    state.entry.date = line
    return state


def _set_location(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    # A place-like line with no entry to attach to is read as the next entry's title
    if state.entry is None or state.entry.location:
        return _start_entry(buffer, state, line, line_number)
    state.entry.location = line
    return state


def _add_bullet(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    if state.entry is None:
        return _to_notes(buffer, state, line, line_number)
    bullet = strip_bullet(line)
    if bullet:
        state.entry.bullets.append(bullet)
    return state


def _set_technologies(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    if state.entry is None or state.entry.technologies:
        return _describe(buffer, state, line, line_number)
    state.entry.technologies = line
    return state


def _add_skills_line(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    stripped = strip_bullet(line)
    category, separator, remainder = stripped.partition(":")
    category = category.strip()
    skills = [skill.strip() for skill in remainder.split(",") if skill.strip()]
    if separator and category and skills:
        state.section.categories.setdefault(category, []).extend(skills)
    elif stripped:
        state.section.items.append(stripped)
    return state


def _extend_narrative(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    state.section.text_parts.append(line)
    return state


def _add_general_line(buffer: _ParseBuffer, state: ParserState, line: str, line_number: int) -> ParserState:
    state.section.lines.append(line)
    return state


_ENTRIES_HANDLERS: Dict[LineShape, Handler] = {
    LineShape.BULLET: _add_bullet,
    LineShape.DATE: _set_date,
    LineShape.LOCATION: _set_location,
    LineShape.TECHNOLOGIES: _set_technologies,
    LineShape.DASHED: _start_entry,
    LineShape.SENTENCE: _start_or_describe,
    LineShape.WORDED: _start_entry,
    LineShape.OTHER: _describe,
}

_UNIFORM_HANDLERS: Dict[Optional[SectionKind], Handler] = {
    None: _to_preamble,
    SectionKind.SKILLS: _add_skills_line,
    SectionKind.NARRATIVE: _extend_narrative,
    SectionKind.GENERAL: _add_general_line,
}


def _build_transitions() -> Dict[Tuple[Optional[SectionKind], LineShape], Handler]:
    table: Dict[Tuple[Optional[SectionKind], LineShape], Handler] = {}
    for shape in LineShape:
        table[(SectionKind.ENTRIES, shape)] = _ENTRIES_HANDLERS.get(shape, _open_section)
        for kind, handler in _UNIFORM_HANDLERS.items():
            table[(kind, shape)] = handler
    for kind in [None, *SectionKind]:
        table[(kind, LineShape.SECTION_HEADER)] = _open_section
    return table


TRANSITIONS = _build_transitions()


# =============================================================================
# HEADER
# =============================================================================


def parse_header(lines: List[str]) -> Tuple[Header, int]:
    """
    Read the header block from the top of the line list.

    Args:
        lines: Trimmed, non-blank lines

    Returns:
        (header, number of lines consumed)
    """
    if not lines:
        return Header(), 0

    name = lines[0]
    title = ""
    index = 1
    if index < len(lines) and is_title_candidate(lines[index]):
        title = lines[index]
        index += 1

    contact_lines = []
    while index < len(lines) and index < HeaderPatterns.MAX_HEADER_LINES:
        line = lines[index]
        if is_section_header(line) or not is_contact_line(line):
            break
        contact_lines.append(line)
        index += 1

    return Header(name=name, title=title, contact=split_contact_tokens(contact_lines)), index


# =============================================================================
# PUBLIC API
# =============================================================================


def clean_lines(text: str) -> List[str]:
    """Trimmed, non-blank lines with stale "Page x of y" footers removed."""
    lines = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line and not is_stale_footer(line):
            lines.append(line)
    return lines


def parse_resume(text: str) -> ResumeModel:
    """
    Parse resume text into a ResumeModel.

    Args:
        text: Plain resume text, one logical item per line

    Returns:
        Immutable ResumeModel. Empty input gives an empty model.

    Example:
        >>> model = parse_resume("Jane Doe\\nEXPERIENCE\\nEngineer - Acme Corp | 2020")
        >>> model.sections["EXPERIENCE"].entries[0].organization
        'Acme Corp'
    """
    lines = clean_lines(text)
    header, consumed = parse_header(lines)

    buffer = _ParseBuffer()
    state = ParserState()
    for line_number, line in enumerate(lines[consumed:], start=consumed + 1):
        shape = classify_line(line)
        handler = TRANSITIONS[(state.kind, shape)]
        state = handler(buffer, state, line, line_number)
    _flush_entry(state)

    return ResumeModel(
        header=header,
        sections=MappingProxyType(
            {name: draft.freeze() for name, draft in buffer.sections.items()}
        ),
        preamble=tuple(buffer.preamble),
    )
