"""
Flow layout of a ResumeModel onto fixed-size pages.

Layout walks the model top to bottom with a LayoutCursor (page handle + baseline y).
Every drawing helper takes a cursor and returns the advanced cursor; nothing here
keeps mutable position state. Before each line is drawn, ensure_space() checks the
cursor against the bottom margin and starts a new page when the line would not fit,
so any block (a long entry, a skills list) can continue across pages.

Rendering order:
1. Header: name, title, contact lines, separator rule
2. Preamble lines (body text seen before the first section)
3. Each section: title, rule, kind-specific body, section gap
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from cvpress.contexts.parsing.line_patterns import is_bullet, strip_bullet
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
)
from cvpress.contexts.rendering.document import Page, PageDocument
from cvpress.contexts.rendering.logger import _log_debug, log_page_break
from cvpress.contexts.rendering.styles import (
    LayoutConfig,
    TextStyle,
    load_layout_config,
    measure_text_width,
    register_fonts,
)
from cvpress.contexts.rendering.wrapper import Measure, wrap_text, wrap_with_first_width

# Contact tokens containing any of these are drawn in the link style
LINK_MARKERS = ("@", "http", "www.", "github", "linkedin")

CONTACT_SEPARATOR = " | "


@dataclass(frozen=True)
class LayoutCursor:
    """Current page and the baseline y of the next line to draw."""

    page: Page
    y: float

    def advance(self, amount: float) -> "LayoutCursor":
        return LayoutCursor(page=self.page, y=self.y - amount)


@dataclass(frozen=True)
class LayoutContext:
    """Everything a drawing helper needs besides the cursor."""

    config: LayoutConfig
    document: PageDocument
    measure: Measure = measure_text_width

    def style(self, role: str) -> TextStyle:
        return self.config.style(role)


# =============================================================================
# PRIMITIVES
# =============================================================================


def start_page(ctx: LayoutContext) -> LayoutCursor:
    page = ctx.document.new_page(ctx.config.page_width, ctx.config.page_height)
    return LayoutCursor(page=page, y=ctx.config.top_y)


def ensure_space(cursor: LayoutCursor, ctx: LayoutContext, reserve: float) -> LayoutCursor:
    """
    Page-break check: start a new page if the cursor is below bottom margin + reserve.

    Args:
        cursor: Position of the line about to be drawn
        ctx: Layout context
        reserve: Extra space required above the bottom margin (section titles
            need room for their rule; ordinary lines need none)

    Returns:
        The same cursor, or a cursor at the top of a fresh page
    """
    if cursor.y >= ctx.config.margins.bottom + reserve:
        return cursor
    fresh = start_page(ctx)
    log_page_break(fresh.page.index + 1, cursor.y, reserve)
    return fresh


def draw_text_line(
    cursor: LayoutCursor,
    ctx: LayoutContext,
    text: str,
    style: TextStyle,
    x: Optional[float] = None,
) -> LayoutCursor:
    """Draw one line after a page-break check and move down by the style's leading."""
    cursor = ensure_space(cursor, ctx, ctx.config.reserve.body)
    if text:
        ctx.document.draw_text(
            cursor.page, text, ctx.config.margins.left if x is None else x, cursor.y, style
        )
    return cursor.advance(style.leading)


def draw_paragraph(
    cursor: LayoutCursor,
    ctx: LayoutContext,
    text: str,
    style: TextStyle,
    x: Optional[float] = None,
    width: Optional[float] = None,
) -> LayoutCursor:
    """Wrap text to width (default: full content width) and draw each line."""
    if width is None:
        width = ctx.config.content_width
    for line in wrap_text(text, style, width, ctx.measure):
        cursor = draw_text_line(cursor, ctx, line, style, x=x)
    return cursor


def draw_bullet(cursor: LayoutCursor, ctx: LayoutContext, text: str) -> LayoutCursor:
    """Bullet glyph at the margin; text and its continuations indented by bullet_indent."""
    config = ctx.config
    body = ctx.style("body")
    text_x = config.margins.left + config.bullet_indent
    lines = wrap_text(text, body, config.content_width - config.bullet_indent, ctx.measure)

    cursor = ensure_space(cursor, ctx, config.reserve.body)
    ctx.document.draw_text(cursor.page, config.bullet, config.margins.left, cursor.y, body)
    cursor = draw_text_line(cursor, ctx, lines[0], body, x=text_x)
    for line in lines[1:]:
        cursor = draw_text_line(cursor, ctx, line, body, x=text_x)
    return cursor


def draw_rule(cursor: LayoutCursor, ctx: LayoutContext, y: float, thickness: float) -> None:
    config = ctx.config
    ctx.document.draw_line(
        cursor.page, config.margins.left, y, config.right_x, y, thickness, config.rules.color
    )


# =============================================================================
# HEADER
# =============================================================================


def is_link_token(token: str) -> bool:
    lowered = token.lower()
    return any(marker in lowered for marker in LINK_MARKERS)


def display_contact_token(token: str) -> str:
    """Bare "www." links get an https:// prefix."""
    if token.lower().startswith("www."):
        return f"https://{token}"
    return token


def draw_contact_line(cursor: LayoutCursor, ctx: LayoutContext, tokens: Sequence[str]) -> LayoutCursor:
    """
    Draw contact tokens left to right with " | " separators.

    Link-like tokens use the contact_link style. A token that would cross the right
    margin moves to a new line instead of being preceded by a separator.
    """
    config = ctx.config
    plain = ctx.style("contact")
    link = ctx.style("contact_link")
    separator_width = ctx.measure(CONTACT_SEPARATOR, plain)
    leading = max(plain.leading, link.leading)

    cursor = ensure_space(cursor, ctx, config.reserve.body)
    x = config.margins.left
    for position, token in enumerate(tokens):
        text = display_contact_token(token)
        style = link if is_link_token(token) else plain
        width = ctx.measure(text, style)

        if position > 0:
            if x + separator_width + width > config.right_x:
                cursor = ensure_space(cursor.advance(leading), ctx, config.reserve.body)
                x = config.margins.left
            else:
                ctx.document.draw_text(cursor.page, CONTACT_SEPARATOR, x, cursor.y, plain)
                x += separator_width

        ctx.document.draw_text(cursor.page, text, x, cursor.y, style)
        x += width

    return cursor.advance(leading)


def layout_header(cursor: LayoutCursor, ctx: LayoutContext, header: Header) -> LayoutCursor:
    """Name (upper-cased), optional title, grouped contact lines, then the header rule."""
    if not header.name:
        return cursor

    config = ctx.config
    cursor = draw_paragraph(cursor, ctx, header.name.upper(), ctx.style("name"))
    if header.title:
        cursor = draw_paragraph(cursor, ctx, header.title, ctx.style("title"))

    for tokens in header.contact_groups(config.contact_group_size):
        cursor = draw_contact_line(cursor, ctx, tokens)
    if header.contact:
        cursor = cursor.advance(config.spacing.header_gap / 2)

    cursor = ensure_space(cursor, ctx, config.reserve.section)
    draw_rule(cursor, ctx, cursor.y, config.rules.header_thickness)
    return cursor.advance(config.spacing.header_gap)


# =============================================================================
# SECTION BODIES
# =============================================================================


def layout_narrative(cursor: LayoutCursor, ctx: LayoutContext, content: NarrativeSection) -> LayoutCursor:
    if not content.text:
        return cursor
    return draw_paragraph(cursor, ctx, content.text, ctx.style("body"))


def layout_skills(cursor: LayoutCursor, ctx: LayoutContext, content: SkillsSection) -> LayoutCursor:
    """
    Categories: bold "Label: " then the comma-joined skills on the same line.

    The first skills line is fitted into the width left of the label; continuation
    lines start flush at the left margin. Flat items follow as one paragraph.
    """
    config = ctx.config
    label_style = ctx.style("skill_label")
    body = ctx.style("body")

    for label, skills in content.categories.items():
        label_text = f"{label}: "
        label_width = ctx.measure(label_text, label_style)
        skills_text = ", ".join(skills)
        first_width = config.content_width - label_width
        words = skills_text.split()

        if words and ctx.measure(words[0], body) > first_width:
            # No room beside the label; skills start on the next line
            lines = [""] + wrap_text(skills_text, body, config.content_width, ctx.measure)
        else:
            lines = wrap_with_first_width(
                skills_text, body, first_width, config.content_width, ctx.measure
            )

        cursor = ensure_space(cursor, ctx, config.reserve.body)
        ctx.document.draw_text(cursor.page, label_text, config.margins.left, cursor.y, label_style)
        if lines[0]:
            ctx.document.draw_text(
                cursor.page, lines[0], config.margins.left + label_width, cursor.y, body
            )
        cursor = cursor.advance(max(label_style.leading, body.leading))

        for line in lines[1:]:
            cursor = draw_text_line(cursor, ctx, line, body)
        cursor = cursor.advance(config.spacing.entry_gap / 2)

    if content.items:
        cursor = draw_paragraph(cursor, ctx, ", ".join(content.items), body)
    return cursor


def layout_entry(cursor: LayoutCursor, ctx: LayoutContext, entry: Entry) -> LayoutCursor:
    """
    One entry: heading with right-aligned date, location, description, bullets,
    technologies, then the entry gap.

    The heading is wrapped into the width left of the date so the two never collide.
    """
    config = ctx.config
    title_style = ctx.style("entry_title")
    date_style = ctx.style("date")

    title_width = config.content_width
    date_width = 0.0
    if entry.date:
        date_width = ctx.measure(entry.date, date_style)
        title_width = max(config.content_width - date_width - config.spacing.date_gap, 1.0)
    title_lines = wrap_text(entry.heading, title_style, title_width, ctx.measure)

    cursor = ensure_space(cursor, ctx, config.reserve.body)
    if entry.date:
        ctx.document.draw_text(
            cursor.page, entry.date, config.right_x - date_width, cursor.y, date_style
        )
    cursor = draw_text_line(cursor, ctx, title_lines[0], title_style)
    for line in title_lines[1:]:
        cursor = draw_text_line(cursor, ctx, line, title_style)

    if entry.location:
        cursor = draw_paragraph(cursor, ctx, entry.location, ctx.style("location"))

    body = ctx.style("body")
    for paragraph in entry.description:
        cursor = draw_paragraph(cursor, ctx, paragraph, body)
        cursor = cursor.advance(config.spacing.paragraph_gap)

    for bullet in entry.bullets:
        cursor = draw_bullet(cursor, ctx, bullet)

    if entry.technologies:
        cursor = draw_paragraph(cursor, ctx, entry.technologies, ctx.style("technologies"))

    return cursor.advance(config.spacing.entry_gap)


def layout_entries(cursor: LayoutCursor, ctx: LayoutContext, content: EntriesSection) -> LayoutCursor:
    body = ctx.style("body")
    for note in content.notes:
        cursor = draw_paragraph(cursor, ctx, note, body)
    for entry in content.entries:
        cursor = layout_entry(cursor, ctx, entry)
    return cursor


def layout_general(cursor: LayoutCursor, ctx: LayoutContext, content: GeneralSection) -> LayoutCursor:
    body = ctx.style("body")
    for line in content.lines:
        if is_bullet(line):
            cursor = draw_bullet(cursor, ctx, strip_bullet(line))
        else:
            cursor = draw_paragraph(cursor, ctx, line, body)
    return cursor


SectionLayout = Callable[[LayoutCursor, LayoutContext, SectionContent], LayoutCursor]

SECTION_LAYOUTS: Dict[SectionKind, SectionLayout] = {
    SectionKind.ENTRIES: layout_entries,
    SectionKind.SKILLS: layout_skills,
    SectionKind.NARRATIVE: layout_narrative,
    SectionKind.GENERAL: layout_general,
}


def section_title_reserve(config: LayoutConfig) -> float:
    """
    Space a section title needs above the bottom margin.

    At least reserve.section, and enough that the first body line lands on the
    same page as the title.
    """
    title_block = config.style("section").leading + config.spacing.after_section_title
    return max(config.reserve.section, title_block + config.reserve.body)


def layout_section(
    cursor: LayoutCursor, ctx: LayoutContext, name: str, content: SectionContent
) -> LayoutCursor:
    """Section title (upper-cased) with a rule beneath, the body, then the section gap."""
    config = ctx.config
    section_style = ctx.style("section")

    cursor = ensure_space(cursor, ctx, section_title_reserve(config))
    ctx.document.draw_text(cursor.page, name.upper(), config.margins.left, cursor.y, section_style)
    cursor = cursor.advance(section_style.leading)
    draw_rule(cursor, ctx, cursor.y + config.rules.section_offset, config.rules.section_thickness)
    cursor = cursor.advance(config.spacing.after_section_title)

    cursor = SECTION_LAYOUTS[content.kind](cursor, ctx, content)
    return cursor.advance(config.spacing.section_gap)


# =============================================================================
# PUBLIC API
# =============================================================================


def layout_resume(
    model: ResumeModel,
    config: Optional[LayoutConfig] = None,
    document: Optional[PageDocument] = None,
) -> PageDocument:
    """
    Lay out a parsed resume onto pages.

    Args:
        model: Parsed resume
        config: Layout configuration (default: packaged defaults)
        document: Document to draw into (default: a new PageDocument)

    Returns:
        The document, with at least one page. Page footers are not drawn here;
        see pagination.stamp_page_numbers().

    Raises:
        SerializationError: If the page size is invalid or an extra font fails to register
    """
    if config is None:
        config = load_layout_config()
    if document is None:
        title = f"{model.header.name} CV" if model.header.name else ""
        document = PageDocument(fonts=config.fonts, title=title, author=model.header.name)

    register_fonts(config.fonts)
    ctx = LayoutContext(config=config, document=document)

    cursor = start_page(ctx)
    cursor = layout_header(cursor, ctx, model.header)
    body = ctx.style("body")
    for line in model.preamble:
        cursor = draw_paragraph(cursor, ctx, line, body)
    for name, content in model.sections.items():
        cursor = layout_section(cursor, ctx, name, content)

    _log_debug(
        f"Laid out {len(model.sections)} sections on {document.page_count()} page(s), "
        f"final y={cursor.y:.1f}"
    )
    return document
