"""
Module: builder.layout.models

Purpose:
    Data models for the abstract paginated document.
    Immutable dataclasses representing rows, placements, page chrome and
    pages. The renderer turns these into PDF; nothing here depends on
    a drawing library.

Key Classes:
    - LayoutRow: Section, description or field row with measured height
    - RowPlacement: Row positioned on a page
    - PageHeader / PageFooter: Per-page chrome
    - PagePlan: Complete page layout
    - ColumnSizing: Document-wide label/value column widths
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.composer: Creates LayoutRows and the PageHeader
    - builder.layout.paginator: Creates PagePlans
    - builder.output.renderer: Draws PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class RowKind(str, Enum):
    SECTION = "section"
    DESCRIPTION = "description"
    FIELD = "field"


@dataclass(frozen=True)
class TextSpan:
    """Run of text drawn in one tone; muted spans use the secondary colour."""

    text: str
    muted: bool = False


@dataclass(frozen=True)
class LayoutRow:
    """
    One measured row of document content (immutable).

    Section rows carry `spans` (muted number, then title) for their first
    line plus any wrapped title lines in `text_lines`. Description rows
    carry `text_lines`. Field rows carry wrapped `label_lines` and
    `value_lines`; `continued` marks the tail of a row split across pages.

    Attributes:
        kind: Row type
        block_id: Section or field the row belongs to
        level: Nesting level of that block
        number: Dotted block number ("2.1")
        height: Total row height (mm)
        font_size: Font size of the row text (pt)
        line_height: Height of one text line (mm)
        padding: Vertical padding above and below the text (mm)
    """

    kind: RowKind
    block_id: str
    level: int
    number: str
    height: float
    font_size: float
    line_height: float
    padding: float = 0.0
    spans: Tuple[TextSpan, ...] = ()
    text_lines: Tuple[str, ...] = ()
    label_lines: Tuple[str, ...] = ()
    value_lines: Tuple[str, ...] = ()
    required: bool = False
    continued: bool = False

    @property
    def is_header(self) -> bool:
        """Section and description rows must not end a page."""
        return self.kind != RowKind.FIELD

    @property
    def line_count(self) -> int:
        if self.kind == RowKind.FIELD:
            return max(len(self.label_lines), len(self.value_lines), 1)
        if self.kind == RowKind.SECTION:
            return 1 + len(self.text_lines)
        return max(len(self.text_lines), 1)

    @property
    def first_line_height(self) -> float:
        """Smallest slice of this row that can be placed on its own."""
        if self.kind == RowKind.FIELD:
            return self.line_height + 2 * self.padding
        return self.height


@dataclass(frozen=True)
class RowPlacement:
    """
    A row positioned on a page.

    Attributes:
        row: The LayoutRow to draw
        top: Y offset from page top (mm)
    """

    row: LayoutRow
    top: float

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (top + height)."""
        return self.top + self.row.height


@dataclass(frozen=True)
class PageHeader:
    """
    Header block content, identical on every page that carries it.

    Attributes:
        company_name: Left-aligned company name (placeholder when unset)
        title_line: "Title (Rev. X.Y)", centred
        meta_line: Department / date / submitter, centred
        detail_line: Address | contact | registration, below the title
        logo: Decoded logo image bytes, drawn right-aligned
    """

    company_name: str
    title_line: str
    meta_line: str = ""
    detail_line: str = ""
    logo: Optional[bytes] = None


@dataclass(frozen=True)
class PageFooter:
    """Footer stamped once the page count is known."""

    page_number: int
    page_count: int
    legal_text: str = ""

    @property
    def label(self) -> str:
        return f"Page {self.page_number} of {self.page_count}"


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        placements: Rows on this page, top to bottom
        header: Header block, or None on pages without one
        content_top: Y where content starts (mm)
        height_used: Vertical space used below content_top (mm)
        footer: Page footer (set by finalize_footers)
    """

    index: int
    placements: Tuple[RowPlacement, ...]
    header: Optional[PageHeader]
    content_top: float
    height_used: float
    footer: Optional[PageFooter] = None

    @property
    def placement_count(self) -> int:
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0

    @property
    def has_header(self) -> bool:
        return self.header is not None


@dataclass(frozen=True)
class ColumnSizing:
    """
    Field row column widths, computed once per document.

    Attributes:
        label_fraction: Share of content width given to labels
        label_width: Label column width (mm)
        value_width: Value column width (mm)
        longest_field_label: Characters in the longest field label
        longest_section_label: Characters in the longest section label
    """

    label_fraction: float
    label_width: float
    value_width: float
    longest_field_label: int = 0
    longest_section_label: int = 0


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans
        column_sizing: Shared field column widths
        warnings: Degraded-asset messages (missing settings, logo, overflow)
        block_page_map: Block id -> page indices it appears on

    Example:
        >>> result.page_count
        2
    """

    pages: Tuple[PagePlan, ...]
    column_sizing: ColumnSizing
    warnings: Tuple[str, ...] = ()
    block_page_map: Mapping[str, Tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Callers may pass the lists they built; freeze them here
        object.__setattr__(self, "pages", tuple(self.pages))
        object.__setattr__(self, "warnings", tuple(self.warnings))
        object.__setattr__(
            self,
            "block_page_map",
            MappingProxyType({k: tuple(v) for k, v in self.block_page_map.items()}),
        )

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        return sum(p.placement_count for p in self.pages)

    def pages_for(self, block_id: str) -> Tuple[int, ...]:
        """Page indices a block appears on (empty if not placed)."""
        return self.block_page_map.get(block_id, ())
