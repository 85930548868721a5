"""
Module: builder.layout.paginator

Purpose:
    Arrange composed rows onto pages and stamp page footers.

Key Functions:
    - paginate(): Place rows on pages, applying the header policy
    - finalize_footers(): "Page N of M" and legal text once M is known

Algorithm:
    1. Page 1 always carries the header block; later pages carry it only
       when header_on_all_pages is set, otherwise content starts at the
       reduced continuation top margin.
    2. A section row starts a new page when less than
       section_break_threshold remains above the content bottom.
    3. Header rows (section + description, and any directly nested
       section rows) form an atomic chain with the first line of the
       row that follows them. If the chain does not fit, it moves to
       the next page, so a header never ends a page.
    4. Field rows split line by line across a page boundary.

Dependencies:
    - builder.layout.models: LayoutRow, PagePlan, LayoutResult
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: Main render controller
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from .config import LayoutConfig
from .models import (
    ColumnSizing,
    LayoutResult,
    LayoutRow,
    PageFooter,
    PageHeader,
    PagePlan,
    RowKind,
    RowPlacement,
)

logger = logging.getLogger(__name__)

# Float tolerance for "fits exactly"
EPSILON = 1e-6


def _spacing(prev: Optional[LayoutRow], row: LayoutRow, config: LayoutConfig) -> float:
    """Gap above `row` given the row placed before it on the same page."""
    if prev is None:
        return 0.0
    if row.kind == RowKind.SECTION:
        return config.section_spacing
    if row.kind == RowKind.DESCRIPTION or prev.is_header:
        return 0.0
    return config.row_spacing


class _PageBuilder:
    """Mutable cursor over the page being filled."""

    def __init__(self, config: LayoutConfig, header: PageHeader, header_on_all_pages: bool):
        self.config = config
        self.header = header
        self.header_on_all_pages = header_on_all_pages
        self.pages: List[PagePlan] = []
        self.block_page_map: Dict[str, List[int]] = {}
        self._open(0)

    def _open(self, index: int) -> None:
        self.index = index
        self.page_header = self.header if index == 0 or self.header_on_all_pages else None
        self.top = self.config.content_top(self.page_header is not None)
        self.y = self.top
        self.placements: List[RowPlacement] = []

    @property
    def is_empty(self) -> bool:
        return not self.placements

    @property
    def last_row(self) -> Optional[LayoutRow]:
        return self.placements[-1].row if self.placements else None

    @property
    def remaining(self) -> float:
        """Space left above the content bottom."""
        return self.config.content_bottom - self.y

    def spacing_before(self, row: LayoutRow) -> float:
        return _spacing(self.last_row, row, self.config)

    def place(self, row: LayoutRow) -> None:
        self.y += self.spacing_before(row)
        self.placements.append(RowPlacement(row=row, top=self.y))
        self.y += row.height
        _track_block(self.block_page_map, row.block_id, self.index)

    def new_page(self) -> None:
        self.pages.append(self._plan())
        self._open(self.index + 1)

    def finish(self) -> Tuple[PagePlan, ...]:
        if self.placements or not self.pages:
            self.pages.append(self._plan())
        return tuple(self.pages)

    def _plan(self) -> PagePlan:
        return PagePlan(
            index=self.index,
            placements=tuple(self.placements),
            header=self.page_header,
            content_top=self.top,
            height_used=self.y - self.top,
        )


def paginate(
    rows: Sequence[LayoutRow],
    config: LayoutConfig,
    *,
    header: PageHeader,
    header_on_all_pages: bool,
    column_sizing: ColumnSizing,
    warnings: Optional[List[str]] = None,
) -> LayoutResult:
    """
    Arrange rows onto pages.

    Args:
        rows: Composed rows in display order
        config: Layout configuration
        header: Header block for pages that carry one
        header_on_all_pages: Repeat the header after page 1
        column_sizing: Shared column widths (passed through to the result)
        warnings: Warnings collected so far (extended, not replaced)

    Returns:
        LayoutResult with page plans (footers not yet stamped)
    """
    warnings = list(warnings or [])
    builder = _PageBuilder(config, header, header_on_all_pages)
    pending = list(rows)

    i = 0
    while i < len(pending):
        row = pending[i]

        if row.is_header:
            chain = _get_header_chain(i, pending)
            headers = [r for r in chain if r.is_header]
            needed = _chain_height(builder.last_row, chain, config)

            below_threshold = (
                row.kind == RowKind.SECTION
                and builder.remaining < config.section_break_threshold - EPSILON
            )
            if not builder.is_empty and (below_threshold or needed > builder.remaining + EPSILON):
                builder.new_page()
                needed = _chain_height(None, chain, config)

            if needed > builder.remaining + EPSILON:
                _warn_overflow(warnings, row, builder, needed)

            for header_row in headers:
                builder.place(header_row)
            i += len(headers)
            continue

        spacing = builder.spacing_before(row)
        available = builder.remaining - spacing
        if row.height <= available + EPSILON:
            builder.place(row)
            i += 1
            continue

        split = _split_field_row(row, available)
        if split is not None:
            head, tail = split
            builder.place(head)
            builder.new_page()
            pending[i] = tail
        elif builder.is_empty:
            _warn_overflow(warnings, row, builder, row.height)
            builder.place(row)
            i += 1
        else:
            builder.new_page()

    pages = builder.finish()
    logger.info(f"Paginated {len(rows)} rows onto {len(pages)} pages")

    return LayoutResult(
        pages=pages,
        column_sizing=column_sizing,
        warnings=warnings,
        block_page_map=builder.block_page_map,
    )


def _get_header_chain(start_idx: int, rows: Sequence[LayoutRow]) -> List[LayoutRow]:
    """
    Header rows from start_idx plus the content row that follows them.

    E.g. [Section 2, Description, Section 2.1, Field 2.1.1] -> one chain.
    At the end of the document the chain holds only header rows.
    """
    chain = []
    idx = start_idx
    while idx < len(rows):
        chain.append(rows[idx])
        if not rows[idx].is_header:
            break
        idx += 1
    return chain


def _chain_height(prev: Optional[LayoutRow], chain: Sequence[LayoutRow], config: LayoutConfig) -> float:
    """Height the chain needs: full header rows plus the first line of the trailing row."""
    total = 0.0
    for row in chain:
        total += _spacing(prev, row, config)
        total += row.height if row.is_header else row.first_line_height
        prev = row
    return total


def _split_field_row(row: LayoutRow, available: float) -> Optional[Tuple[LayoutRow, LayoutRow]]:
    """
    Split a field row so the head fits in `available`.

    Returns:
        (head, tail), or None when not even one line fits or the row
        has a single line
    """
    if row.kind != RowKind.FIELD:
        return None
    fit = math.floor((available - 2 * row.padding + EPSILON) / row.line_height)
    if fit < 1 or fit >= row.line_count:
        return None

    def part(label: Tuple[str, ...], value: Tuple[str, ...], continued: bool) -> LayoutRow:
        lines = max(len(label), len(value), 1)
        return replace(
            row,
            label_lines=label,
            value_lines=value,
            height=lines * row.line_height + 2 * row.padding,
            continued=continued,
        )

    head = part(row.label_lines[:fit], row.value_lines[:fit], row.continued)
    tail = part(row.label_lines[fit:], row.value_lines[fit:], True)
    return head, tail


def _warn_overflow(warnings: List[str], row: LayoutRow, builder: _PageBuilder, needed: float) -> None:
    message = (
        f"Content for block {row.block_id!r} ({row.number}) overflows page "
        f"{builder.index + 1}: {needed:.1f}mm needed, {builder.remaining:.1f}mm available"
    )
    logger.warning(message)
    warnings.append(message)


def _track_block(block_page_map: Dict[str, List[int]], block_id: str, page_index: int) -> None:
    """Track which pages a block appears on."""
    if block_id not in block_page_map:
        block_page_map[block_id] = []
    if page_index not in block_page_map[block_id]:
        block_page_map[block_id].append(page_index)


def finalize_footers(layout: LayoutResult, legal_text: str = "") -> LayoutResult:
    """
    Stamp every page with "Page N of M" and the legal footer text.

    Runs after pagination, once the total page count is known.
    """
    total = layout.page_count
    pages = tuple(
        replace(page, footer=PageFooter(page_number=page.index + 1, page_count=total, legal_text=legal_text))
        for page in layout.pages
    )
    return replace(layout, pages=pages)
