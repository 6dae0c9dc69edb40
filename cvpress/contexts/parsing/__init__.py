"""
Parsing Context

Responsibilities:
- Classifies lines of loosely structured resume text (headers, entries, bullets, dates)
- Builds the immutable resume model (header, sections, entries, skills)
- Keeps every line somewhere; ambiguous lines are logged, never rejected

Owns: Resume model, line classification, header and section parsing
Never: Measures text, draws pages, or calls a language model
"""

from cvpress.contexts.parsing.resume_model import (
    EntriesSection,
    Entry,
    GeneralSection,
    Header,
    NarrativeSection,
    ResumeModel,
    SectionKind,
    SkillsSection,
)
from cvpress.contexts.parsing.resume_parser import LineShape, classify_line, parse_resume

__all__ = [
    "EntriesSection",
    "Entry",
    "GeneralSection",
    "Header",
    "LineShape",
    "NarrativeSection",
    "ResumeModel",
    "SectionKind",
    "SkillsSection",
    "classify_line",
    "parse_resume",
]
