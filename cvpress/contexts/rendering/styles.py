"""
Layout configuration and text measurement.

The layout is described by a YAML file (packaged layout_defaults.yaml) loaded with
OmegaConf. Named presets and user overrides are merged on top, then the result is
frozen into a LayoutConfig that the layout engine reads.

Examples:
    # Packaged defaults
    >>> config = load_layout_config()

    # A4 paper with tighter spacing (later presets override earlier ones)
    >>> config = load_layout_config(presets=["a4", "compact"])

    # Dotlist override
    >>> config = load_layout_config(overrides=["margins.left=72", "margins.right=72"])
"""

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from cvpress.contexts.rendering.exceptions import SerializationError

load_dotenv()

DEFAULT_LAYOUT_PATH = Path(__file__).parent / "layout_defaults.yaml"

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class TextStyle:
    """A (font, size, color) triple plus the vertical advance after a line in this style."""

    font: str
    size: float
    leading: float
    color: Color = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float


@dataclass(frozen=True)
class Spacing:
    section_gap: float
    entry_gap: float
    after_section_title: float
    paragraph_gap: float
    header_gap: float
    date_gap: float


@dataclass(frozen=True)
class Reserve:
    """Space needed above the bottom margin: section titles and rules vs. any other line."""

    section: float
    body: float


@dataclass(frozen=True)
class RuleStyle:
    color: Color
    header_thickness: float
    section_thickness: float
    section_offset: float


@dataclass(frozen=True)
class FooterStyle:
    template: str
    x_offset: float

    def text(self, page: int, total: int) -> str:
        return self.template.format(page=page, total=total)


@dataclass(frozen=True)
class LayoutConfig:
    """
    Frozen page geometry, style table and spacing constants.

    Attributes:
        page_width, page_height: Page size in points
        margins: Page margins
        styles: Style table keyed by role ("name", "section", "body", ...)
        spacing: Vertical gaps between blocks
        reserve: Page-break thresholds
        rules: Separator rule geometry
        footer: Page number footer template and placement
        contact_group_size: Contact tokens per header line
        bullet: Glyph drawn in front of bullet text
        bullet_indent: Horizontal offset of bullet text from the left margin
        fonts: Extra TrueType fonts (name -> .ttf path) to register before drawing
    """

    page_width: float
    page_height: float
    margins: Margins
    styles: Mapping[str, TextStyle]
    spacing: Spacing
    reserve: Reserve
    rules: RuleStyle
    footer: FooterStyle
    contact_group_size: int
    bullet: str
    bullet_indent: float
    fonts: Mapping[str, str]

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def top_y(self) -> float:
        """Baseline of the first line on a fresh page."""
        return self.page_height - self.margins.top

    @property
    def right_x(self) -> float:
        return self.page_width - self.margins.right

    def style(self, role: str) -> TextStyle:
        """Look up a style by role, naming the known roles on failure."""
        try:
            return self.styles[role]
        except KeyError:
            raise KeyError(f"Unknown style '{role}'. Available: {', '.join(sorted(self.styles))}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        """Build from the plain-container form of a merged layout YAML."""
        if data["contact_group_size"] < 1:
            raise ValueError(f"contact_group_size must be positive, got {data['contact_group_size']}")

        styles = {
            role: TextStyle(
                font=spec["font"],
                size=float(spec["size"]),
                leading=float(spec["leading"]),
                color=_color(spec.get("color", (0.0, 0.0, 0.0))),
            )
            for role, spec in data["styles"].items()
        }
        rules = dict(data["rules"])
        rules["color"] = _color(rules["color"])

        return cls(
            page_width=float(data["page"]["width"]),
            page_height=float(data["page"]["height"]),
            margins=Margins(**{k: float(v) for k, v in data["margins"].items()}),
            styles=MappingProxyType(styles),
            spacing=Spacing(**{k: float(v) for k, v in data["spacing"].items()}),
            reserve=Reserve(**{k: float(v) for k, v in data["reserve"].items()}),
            rules=RuleStyle(**rules),
            footer=FooterStyle(
                template=data["footer"]["template"], x_offset=float(data["footer"]["x_offset"])
            ),
            contact_group_size=int(data["contact_group_size"]),
            bullet=data["bullet"],
            bullet_indent=float(data["bullet_indent"]),
            fonts=MappingProxyType(dict(data.get("fonts") or {})),
        )


def _color(value: Sequence[float]) -> Color:
    red, green, blue = (float(channel) for channel in value)
    return (red, green, blue)


def _merge_overrides(config: DictConfig, overrides: Union[Mapping[str, Any], Sequence[str]]) -> DictConfig:
    if isinstance(overrides, Mapping):
        return OmegaConf.merge(config, OmegaConf.create(dict(overrides)))
    return OmegaConf.merge(config, OmegaConf.from_dotlist(list(overrides)))


def load_layout_config(
    config_path: Optional[Path] = None,
    presets: Sequence[str] = (),
    overrides: Optional[Union[Mapping[str, Any], Sequence[str]]] = None,
) -> LayoutConfig:
    """
    Load the layout configuration.

    Merge order (later wins): packaged defaults, config_path (or the
    CVPRESS_LAYOUT_CONFIG env variable), each preset in order, overrides.

    Args:
        config_path: Optional YAML file with partial layout settings
        presets: Preset names from the merged config's "presets" table
        overrides: Dict of nested settings or dotlist strings ("margins.top=72")

    Returns:
        Frozen LayoutConfig

    Raises:
        ValueError: If a preset name is unknown or contact_group_size < 1
    """
    config = OmegaConf.load(DEFAULT_LAYOUT_PATH)

    if config_path is None and os.getenv("CVPRESS_LAYOUT_CONFIG"):
        config_path = Path(os.getenv("CVPRESS_LAYOUT_CONFIG"))
    if config_path is not None:
        config = OmegaConf.merge(config, OmegaConf.load(config_path))

    available = config.get("presets") or {}
    for preset_name in presets:
        if preset_name not in available:
            raise ValueError(
                f"Unknown layout preset '{preset_name}'. "
                f"Available presets: {', '.join(sorted(available))}"
            )
        config = OmegaConf.merge(config, available[preset_name])

    if overrides:
        config = _merge_overrides(config, overrides)

    data = OmegaConf.to_container(config, resolve=True)
    data.pop("presets", None)
    return LayoutConfig.from_dict(data)


def register_fonts(fonts: Mapping[str, str]) -> None:
    """
    Register extra TrueType fonts with reportlab so they can be measured and drawn.

    Raises:
        SerializationError: If a font file is missing or unreadable
    """
    registered = set(pdfmetrics.getRegisteredFontNames())
    for font_name, font_path in fonts.items():
        if font_name in registered:
            continue
        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        except Exception as error:
            raise SerializationError(
                f"Failed to register font '{font_name}' from {font_path}", original_error=error
            ) from error


def measure_text_width(text: str, style: TextStyle) -> float:
    """
    Width of text in points when set in the given style.

    Example:
        >>> body = TextStyle(font="Helvetica", size=7, leading=12)
        >>> round(measure_text_width("Python", body), 2)
        21.79
    """
    return pdfmetrics.stringWidth(text, style.font, style.size)
