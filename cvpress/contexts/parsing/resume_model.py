"""
Resume Model Data Structures

Defines the immutable structured form of a parsed resume: header, sections and
entries. Section content is a tagged union; the variant is decided once, when the
section opens, from the section name.

These structures are produced by the parser and only read by the layout engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union

# Contact tokens per rendered contact line
DEFAULT_CONTACT_GROUP_SIZE = 6


class SectionKind(str, Enum):
    """Inferred shape of a section's content."""

    ENTRIES = "entries"
    SKILLS = "skills"
    NARRATIVE = "narrative"
    GENERAL = "general"


# Section-name substrings (lower-case) that select each kind, checked in this order
SECTION_KIND_KEYWORDS: Tuple[Tuple[SectionKind, Tuple[str, ...]], ...] = (
    (SectionKind.ENTRIES, ("experience", "education", "project")),
    (SectionKind.SKILLS, ("skill",)),
    (SectionKind.NARRATIVE, ("summary", "profile", "objective", "about")),
)


def infer_section_kind(section_name: str) -> SectionKind:
    """
    Pick the content variant for a section from its name.

    Examples:
        >>> infer_section_kind("PROFESSIONAL EXPERIENCE")
        <SectionKind.ENTRIES: 'entries'>
        >>> infer_section_kind("Technical Skills")
        <SectionKind.SKILLS: 'skills'>
        >>> infer_section_kind("CERTIFICATIONS")
        <SectionKind.GENERAL: 'general'>
    """
    lowered = section_name.lower()
    for kind, keywords in SECTION_KIND_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return kind
    return SectionKind.GENERAL


@dataclass(frozen=True)
class Header:
    """
    Resume header block.

    Attributes:
        name: First non-empty input line ("" only for empty input)
        title: Professional title from the second line, if it is not contact-like
        contact: Ordered contact tokens (email, phone, links, location)
    """

    name: str = ""
    title: str = ""
    contact: Tuple[str, ...] = ()

    def contact_groups(self, group_size: int = DEFAULT_CONTACT_GROUP_SIZE) -> List[Tuple[str, ...]]:
        """Split contact tokens into display lines of at most group_size tokens."""
        if group_size < 1:
            raise ValueError(f"group_size must be positive, got {group_size}")
        return [
            self.contact[i : i + group_size] for i in range(0, len(self.contact), group_size)
        ]


@dataclass(frozen=True)
class Entry:
    """
    One dated item within a section (a job, a degree, a project).

    Optional string fields are "" when absent.
    """

    title: str
    organization: str = ""
    date: str = ""
    location: str = ""
    description: Tuple[str, ...] = ()
    bullets: Tuple[str, ...] = ()
    technologies: str = ""

    @property
    def heading(self) -> str:
        """Title line as rendered: "title - organization" when an organization exists."""
        if self.organization:
            return f"{self.title} - {self.organization}" if self.title else self.organization
        return self.title


@dataclass(frozen=True)
class EntriesSection:
    """Experience / education / projects: a sequence of entries."""

    entries: Tuple[Entry, ...] = ()
    notes: Tuple[str, ...] = ()
    kind: SectionKind = field(default=SectionKind.ENTRIES, init=False)


@dataclass(frozen=True)
class SkillsSection:
    """Skills: categorized lists and/or a flat list."""

    categories: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    items: Tuple[str, ...] = ()
    kind: SectionKind = field(default=SectionKind.SKILLS, init=False)


@dataclass(frozen=True)
class NarrativeSection:
    """Free-text paragraph (summary, profile, objective)."""

    text: str = ""
    kind: SectionKind = field(default=SectionKind.NARRATIVE, init=False)


@dataclass(frozen=True)
class GeneralSection:
    """Any other section; raw lines kept in order, bullet markers included."""

    lines: Tuple[str, ...] = ()
    kind: SectionKind = field(default=SectionKind.GENERAL, init=False)


SectionContent = Union[EntriesSection, SkillsSection, NarrativeSection, GeneralSection]


@dataclass(frozen=True)
class ResumeModel:
    """
    Structured resume parsed from one text blob.

    Attributes:
        header: Name, title and contact tokens
        sections: Ordered read-only mapping of section name to content
        preamble: Body lines seen before the first section header
    """

    header: Header = field(default_factory=Header)
    sections: Mapping[str, SectionContent] = field(
        default_factory=lambda: MappingProxyType({})
    )
    preamble: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.header.name and not self.sections and not self.preamble

    def to_dict(self) -> Dict[str, Any]:
        """Plain-container form (dicts/lists/strings) for YAML or JSON dumps."""
        sections: Dict[str, Any] = {}
        for name, content in self.sections.items():
            sections[name] = _section_to_dict(content)

        return {
            "header": {
                "name": self.header.name,
                "title": self.header.title,
                "contact": list(self.header.contact),
            },
            "preamble": list(self.preamble),
            "sections": sections,
        }


def _section_to_dict(content: SectionContent) -> Dict[str, Any]:
    if isinstance(content, EntriesSection):
        return {
            "kind": content.kind.value,
            "notes": list(content.notes),
            "entries": [
                {
                    "title": entry.title,
                    "organization": entry.organization,
                    "date": entry.date,
                    "location": entry.location,
                    "description": list(entry.description),
                    "bullets": list(entry.bullets),
                    "technologies": entry.technologies,
                }
                for entry in content.entries
            ],
        }
    if isinstance(content, SkillsSection):
        return {
            "kind": content.kind.value,
            "categories": {label: list(skills) for label, skills in content.categories.items()},
            "list": list(content.items),
        }
    if isinstance(content, NarrativeSection):
        return {"kind": content.kind.value, "text": content.text}
    return {"kind": content.kind.value, "lines": list(content.lines)}
