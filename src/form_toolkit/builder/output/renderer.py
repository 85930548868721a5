"""
Module: builder.output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page: header block, shaded section
    rows, italic descriptions, bordered two-column field rows, footer.

Key Functions:
    - render_to_pdf(): Main rendering function (file path or binary stream)

Dependencies:
    - reportlab: PDF generation
    - PIL: Logo image handling
    - builder.layout.models: LayoutResult, PagePlan

Used By:
    - builder.controller: Pipeline orchestration

Coordinates:
    Layout models measure y in millimetres down from the page top;
    ReportLab measures points up from the page bottom. _y() converts.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from form_toolkit.builder.layout.config import LayoutConfig
from form_toolkit.builder.layout.metrics import pt_to_mm
from form_toolkit.builder.layout.models import (
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

# Colours (RGB 0-1)
SECTION_FILL = (0.89, 0.93, 0.97)
SECTION_TEXT = (0.0, 0.24, 0.43)
MUTED_TEXT = (0.45, 0.50, 0.56)
LABEL_FILL = (0.96, 0.96, 0.96)
BORDER = (0.70, 0.70, 0.70)
FOOTER_TEXT = (0.4, 0.4, 0.4)
RULE_WIDTH_PT = 0.5

Output = Union[Path, BinaryIO]


class RenderError(Exception):
    """PDF could not be written."""
    pass


def render_to_pdf(
    layout: LayoutResult,
    output: Output,
    config: LayoutConfig,
    *,
    show_footer: bool = True,
    title: str = "",
    author: str = "",
) -> None:
    """
    Render layout result to a PDF file or binary stream.

    Args:
        layout: Paginated layout (footers stamped by finalize_footers)
        output: Destination path, or a writable binary stream
        config: Layout configuration used to produce `layout`
        show_footer: Draw page footers
        title: PDF document title metadata
        author: PDF author metadata

    Raises:
        RenderError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(layout, Path("output/inspection.pdf"), LayoutConfig())
    """
    if layout.page_count == 0:
        logger.warning("Empty layout, creating empty PDF")

    if isinstance(output, Path):
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RenderError(f"Cannot create output directory {output.parent}: {e}") from e
        target = str(output)
    else:
        target = output

    page_size = (config.page_width * mm, config.page_height * mm)
    c = canvas.Canvas(target, pagesize=page_size)
    if title:
        c.setTitle(title)
    if author:
        c.setAuthor(author)

    for page in layout.pages:
        _render_page(c, page, layout.column_sizing, config, show_footer)
        c.showPage()

    try:
        c.save()
    except OSError as e:
        raise RenderError(f"Failed to write PDF: {e}") from e

    logger.info(f"Rendered {layout.page_count} pages")


def _render_page(
    c: canvas.Canvas,
    page: PagePlan,
    sizing: ColumnSizing,
    config: LayoutConfig,
    show_footer: bool,
) -> None:
    """Draw header, rows and footer of one page."""
    if page.header is not None:
        _draw_header(c, page.header, config)

    for placement in page.placements:
        row = placement.row
        if row.kind == RowKind.SECTION:
            _draw_section_row(c, placement, config)
        elif row.kind == RowKind.DESCRIPTION:
            _draw_description_row(c, placement, config)
        else:
            _draw_field_row(c, placement, sizing, config)

    if show_footer and page.footer is not None:
        _draw_footer(c, page.footer, config)


# ─────────────────────────────────────────────────────────────────────────────
# Chrome
# ─────────────────────────────────────────────────────────────────────────────

def _draw_header(c: canvas.Canvas, header: PageHeader, config: LayoutConfig) -> None:
    """
    Draw the header block.

    Company name left, title and metadata centred, logo right, detail
    line at the bottom of the block, then a rule across the content width.
    """
    left = config.margin_left
    right = config.page_width - config.margin_right
    centre = (left + right) / 2
    title_baseline = config.margin_top + pt_to_mm(config.header_font_size)

    c.saveState()
    c.setFillColorRGB(0, 0, 0)
    c.setFont(config.bold_font_name, config.header_font_size)
    c.drawString(left * mm, _y(config, title_baseline), header.company_name)
    c.drawCentredString(centre * mm, _y(config, title_baseline), header.title_line)

    c.setFont(config.font_name, config.header_meta_font_size)
    meta_baseline = title_baseline + pt_to_mm(config.header_meta_font_size * config.leading) + 1
    if header.meta_line:
        c.drawCentredString(centre * mm, _y(config, meta_baseline), header.meta_line)

    rule_y = config.margin_top + config.header_height
    if header.detail_line:
        c.setFillColorRGB(*MUTED_TEXT)
        c.drawString(left * mm, _y(config, rule_y - 2), header.detail_line)

    if header.logo:
        _draw_logo(c, header.logo, config)

    c.setStrokeColorRGB(0, 0, 0)
    c.setLineWidth(RULE_WIDTH_PT)
    c.line(left * mm, _y(config, rule_y), right * mm, _y(config, rule_y))
    c.restoreState()


def _draw_logo(c: canvas.Canvas, data: bytes, config: LayoutConfig) -> None:
    """Draw the logo scaled into the top-right logo box."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            width_px, height_px = img.size
            reader = _pil_to_reader(img)
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Skipping unreadable logo: {e}")
        return

    scale = min(config.logo_max_width / width_px, config.logo_max_height / height_px)
    width = width_px * scale
    height = height_px * scale
    x = config.page_width - config.margin_right - width
    top = config.margin_top
    c.drawImage(
        reader,
        x * mm,
        _y(config, top + height),
        width=width * mm,
        height=height * mm,
        mask="auto",
    )


def _draw_footer(c: canvas.Canvas, footer: PageFooter, config: LayoutConfig) -> None:
    """
    Draw "Page N of M" bottom-right and legal text bottom-left.

    Both sit on the bottom margin line.
    """
    baseline = config.page_height - config.margin_bottom
    c.saveState()
    c.setFont(config.font_name, config.footer_font_size)
    c.setFillColorRGB(*FOOTER_TEXT)
    c.drawRightString(
        (config.page_width - config.margin_right) * mm,
        _y(config, baseline),
        footer.label,
    )
    if footer.legal_text:
        c.drawString(config.margin_left * mm, _y(config, baseline), footer.legal_text)
    c.restoreState()


# ─────────────────────────────────────────────────────────────────────────────
# Rows
# ─────────────────────────────────────────────────────────────────────────────

def _draw_section_row(c: canvas.Canvas, placement: RowPlacement, config: LayoutConfig) -> None:
    """Shaded full-width band with a centred muted number and title."""
    row = placement.row
    left = config.margin_left
    width = config.available_width
    centre = left + width / 2

    c.saveState()
    c.setFillColorRGB(*SECTION_FILL)
    c.rect(
        left * mm,
        _y(config, placement.bottom),
        width * mm,
        row.height * mm,
        stroke=0,
        fill=1,
    )

    font = config.bold_font_name
    c.setFont(font, row.font_size)
    baseline = _baseline(placement.top, row, 0)

    # Two spans on one baseline, centred as a unit
    number, title = row.spans[0].text, row.spans[1].text
    gap = " " if number and title else ""
    number_w = pt_to_mm(c.stringWidth(number + gap, font, row.font_size))
    title_w = pt_to_mm(c.stringWidth(title, font, row.font_size))
    x = centre - (number_w + title_w) / 2

    c.setFillColorRGB(*MUTED_TEXT)
    c.drawString(x * mm, _y(config, baseline), number + gap)
    c.setFillColorRGB(*SECTION_TEXT)
    c.drawString((x + number_w) * mm, _y(config, baseline), title)

    for k, line in enumerate(row.text_lines, 1):
        c.drawCentredString(centre * mm, _y(config, _baseline(placement.top, row, k)), line)
    c.restoreState()


def _draw_description_row(c: canvas.Canvas, placement: RowPlacement, config: LayoutConfig) -> None:
    row = placement.row
    c.saveState()
    c.setFillColorRGB(*MUTED_TEXT)
    c.setFont(config.italic_font_name, row.font_size)
    x = (config.margin_left + row.padding) * mm
    for k, line in enumerate(row.text_lines):
        c.drawString(x, _y(config, _baseline(placement.top, row, k)), line)
    c.restoreState()


def _draw_field_row(
    c: canvas.Canvas,
    placement: RowPlacement,
    sizing: ColumnSizing,
    config: LayoutConfig,
) -> None:
    """Bordered label cell (bold, lightly shaded) and value cell."""
    row = placement.row
    left = config.margin_left
    bottom_pt = _y(config, placement.bottom)
    height_pt = row.height * mm

    c.saveState()
    c.setLineWidth(RULE_WIDTH_PT)
    c.setStrokeColorRGB(*BORDER)
    c.setFillColorRGB(*LABEL_FILL)
    c.rect(left * mm, bottom_pt, sizing.label_width * mm, height_pt, stroke=1, fill=1)
    c.rect((left + sizing.label_width) * mm, bottom_pt, sizing.value_width * mm, height_pt, stroke=1, fill=0)

    c.setFillColorRGB(0, 0, 0)
    c.setFont(config.bold_font_name, row.font_size)
    for k, line in enumerate(row.label_lines):
        c.drawString((left + row.padding) * mm, _y(config, _baseline(placement.top, row, k)), line)

    c.setFont(config.font_name, row.font_size)
    value_x = left + sizing.label_width + row.padding
    for k, line in enumerate(row.value_lines):
        c.drawString(value_x * mm, _y(config, _baseline(placement.top, row, k)), line)
    c.restoreState()


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _baseline(top: float, row: LayoutRow, line_index: int) -> float:
    """Baseline (mm from page top) of a row's text line."""
    font_mm = pt_to_mm(row.font_size)
    return top + row.padding + line_index * row.line_height + (row.line_height + font_mm) / 2 - font_mm * 0.15


def _y(config: LayoutConfig, y_mm_from_top: float) -> float:
    """Convert a top-down millimetre offset to ReportLab's bottom-up points."""
    return (config.page_height - y_mm_from_top) * mm


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    if img.mode not in ("RGB", "RGBA", "L", "LA"):
        img = img.convert("RGBA")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
