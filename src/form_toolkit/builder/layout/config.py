"""
Module: builder.layout.config

Purpose:
    Configuration for the document layout engine.
    Defines page dimensions, margins, typography and pagination
    thresholds. All lengths are millimetres, font sizes are points.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.composer: Row composition
    - builder.layout.paginator: Page arrangement
    - builder.output.renderer: Page geometry
"""

from __future__ import annotations

from dataclasses import dataclass


# A4 portrait
DEFAULT_PAGE_WIDTH_MM = 210.0
DEFAULT_PAGE_HEIGHT_MM = 297.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        page_width: Page width (mm)
        page_height: Page height (mm)
        margin_top: Top margin; the header block starts here (mm)
        margin_bottom: Bottom margin; the footer baseline sits here (mm)
        margin_left: Left margin (mm)
        margin_right: Right margin (mm)
        header_height: Height of the header block including its rule (mm)
        header_gap: Space between the header rule and content (mm)
        continuation_top_margin: Content top on pages without a header (mm)
        footer_height: Space reserved above the bottom margin for the footer (mm)
        section_break_threshold: Minimum space left above the content
            bottom for a section row to start on the current page (mm)
        base_font_size: Field row font size (pt)
        section_font_size: Level-1 section row font size (pt)
        section_font_step: Font size decrease per nesting level (pt)
        leading: Line height as a multiple of font size
        cell_padding: Padding inside field cells (mm)
        section_padding: Padding inside section rows (mm)
        section_spacing: Gap before a section row that is not first on a page (mm)
        row_spacing: Gap between consecutive field rows (mm)
        date_format: strftime pattern for parseable date answers

    Example:
        >>> config = LayoutConfig()
        >>> config.available_width
        180.0
    """

    # Page dimensions
    page_width: float = DEFAULT_PAGE_WIDTH_MM
    page_height: float = DEFAULT_PAGE_HEIGHT_MM

    # Margins
    margin_top: float = 15.0
    margin_bottom: float = 15.0
    margin_left: float = 15.0
    margin_right: float = 15.0

    # Header / footer chrome
    header_height: float = 30.0
    header_gap: float = 5.0
    continuation_top_margin: float = 15.0
    footer_height: float = 8.0
    logo_max_width: float = 40.0
    logo_max_height: float = 20.0

    # Pagination
    section_break_threshold: float = 20.0

    # Typography
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"
    italic_font_name: str = "Helvetica-Oblique"
    base_font_size: float = 10.0
    section_font_size: float = 13.0
    section_font_step: float = 1.5
    description_font_size: float = 9.0
    header_font_size: float = 12.0
    header_meta_font_size: float = 8.0
    footer_font_size: float = 8.0
    leading: float = 1.3

    # Spacing
    cell_padding: float = 2.0
    section_padding: float = 2.5
    section_spacing: float = 4.0
    row_spacing: float = 0.0

    # Column sizing: clamp(min, max, base + per_char * longest_label)
    label_fraction_min: float = 0.35
    label_fraction_max: float = 0.60
    label_fraction_base: float = 0.25
    label_fraction_per_char: float = 0.005

    date_format: str = "%d %b %Y"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.content_bottom - self.content_top(with_header=True) <= 0:
            raise ValueError("Header, footer and margins exceed page height")
        if self.section_break_threshold < 0:
            raise ValueError(
                f"section_break_threshold must be non-negative: {self.section_break_threshold}"
            )
        if not (0 < self.label_fraction_min <= self.label_fraction_max < 1):
            raise ValueError(
                f"label fraction bounds must satisfy 0 < min <= max < 1: "
                f"{self.label_fraction_min}, {self.label_fraction_max}"
            )
        if self.base_font_size <= 0 or self.leading <= 0:
            raise ValueError("Font size and leading must be positive")

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height between the margins (excluding header and footer chrome)."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_bottom(self) -> float:
        """Lowest y (from page top) content may reach."""
        return self.page_height - self.margin_bottom - self.footer_height

    def content_top(self, with_header: bool) -> float:
        """First y (from page top) available for content."""
        if with_header:
            return self.margin_top + self.header_height + self.header_gap
        return self.continuation_top_margin

    def section_font_size_for(self, level: int) -> float:
        """Section row font size, one step smaller per nesting level."""
        return max(self.base_font_size, self.section_font_size - (level - 1) * self.section_font_step)
