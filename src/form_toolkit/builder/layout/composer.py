"""
Module: builder.layout.composer

Purpose:
    Walk a form's block tree and produce measured LayoutRows in display
    order, plus the header block shared by every page that carries one.
    Column widths are sized once per document from the longest labels.

Key Functions:
    - compute_column_sizing(): Label/value column split for the document
    - compose_rows(): Section, description and field rows in order
    - compose_header(): PageHeader from form metadata and company settings
    - compose_form(): All of the above in one call

Algorithm:
    1. Pre-pass over the whole tree for the longest field and section
       labels; label fraction = clamp(0.35, 0.60, 0.25 + 0.005 * longest)
    2. Depth-first walk: section row, optional description row, then
       children in order (nested section fonts step down per level)
    3. Field rows wrap label and value text into the fixed columns

Dependencies:
    - PIL: Logo verification
    - builder.layout.metrics: Text measurement
    - builder.layout.formatting: Answer and label text
    - tree.paths: Block numbering

Used By:
    - builder.controller: Main render controller
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Mapping, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.blocks import Block, Field, Section
from form_toolkit.core.models.company import CompanySettings, decode_logo
from form_toolkit.core.models.forms import FormDocument
from form_toolkit.tree.paths import BlockPath

from .config import LayoutConfig
from .formatting import field_label, format_answer, section_label
from .metrics import line_height, wrap_text
from .models import ColumnSizing, LayoutRow, PageHeader, RowKind, TextSpan

logger = logging.getLogger(__name__)

PLACEHOLDER_COMPANY_NAME = "Company name not set"


class LayoutError(Exception):
    """Block tree cannot be laid out (structurally invalid)."""
    pass


@dataclass(frozen=True)
class ComposedForm:
    """Rows and chrome ready for pagination."""

    rows: Tuple[LayoutRow, ...]
    header: PageHeader
    column_sizing: ColumnSizing
    warnings: List[str] = field(default_factory=list)


# ─────────────────────────────────────────────────────────────────────────────
# Tree Walk
# ─────────────────────────────────────────────────────────────────────────────

def _walk(
    blocks: Sequence[Block],
    prefix: BlockPath = BlockPath(),
    parent_level: int = 0,
):
    """
    Yield (number, block) in display order, checking structure.

    Raises:
        LayoutError: On a non-block node or a level that does not
            follow its parent
    """
    for i, block in enumerate(blocks, 1):
        path = prefix.child(i)
        if not isinstance(block, (Section, Field)):
            raise LayoutError(f"Node at {path} is not a section or field: {block!r}")
        if block.level != parent_level + 1:
            raise LayoutError(
                f"Block {block.id!r} at {path} has level {block.level}, expected {parent_level + 1}"
            )
        yield str(path), block
        if isinstance(block, Section):
            yield from _walk(block.children, path, block.level)


def _clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def compute_column_sizing(blocks: Sequence[Block], config: LayoutConfig) -> ColumnSizing:
    """
    Size the label column from the longest labels in the whole tree.

    Args:
        blocks: Root blocks
        config: Layout configuration

    Returns:
        ColumnSizing shared by every field row of the document
    """
    longest_field = 0
    longest_section = 0
    for number, block in _walk(blocks):
        if isinstance(block, Field):
            longest_field = max(longest_field, len(field_label(number, block)))
        else:
            longest_section = max(longest_section, len(section_label(number, block)))

    fraction = _clamp(
        config.label_fraction_min,
        config.label_fraction_max,
        config.label_fraction_base + config.label_fraction_per_char * longest_field,
    )
    label_width = config.available_width * fraction
    return ColumnSizing(
        label_fraction=fraction,
        label_width=label_width,
        value_width=config.available_width - label_width,
        longest_field_label=longest_field,
        longest_section_label=longest_section,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Rows
# ─────────────────────────────────────────────────────────────────────────────

def _section_row(number: str, section: Section, config: LayoutConfig) -> LayoutRow:
    font_size = config.section_font_size_for(section.level)
    lh = line_height(font_size, config.leading)
    # Number and title share the first line; long titles wrap below it
    title_lines = wrap_text(
        section_label(number, section),
        config.bold_font_name,
        font_size,
        config.available_width - 2 * config.cell_padding,
    )
    first_title = title_lines[0][len(number):].lstrip()
    spans = (TextSpan(number, muted=True), TextSpan(first_title))
    return LayoutRow(
        kind=RowKind.SECTION,
        block_id=section.id,
        level=section.level,
        number=number,
        height=len(title_lines) * lh + 2 * config.section_padding,
        font_size=font_size,
        line_height=lh,
        padding=config.section_padding,
        spans=spans,
        text_lines=title_lines[1:],
    )


def _description_row(number: str, section: Section, config: LayoutConfig) -> LayoutRow:
    font_size = config.description_font_size
    lh = line_height(font_size, config.leading)
    lines = wrap_text(
        section.description,
        config.italic_font_name,
        font_size,
        config.available_width - 2 * config.cell_padding,
    )
    return LayoutRow(
        kind=RowKind.DESCRIPTION,
        block_id=section.id,
        level=section.level,
        number=number,
        height=len(lines) * lh + 2 * config.cell_padding,
        font_size=font_size,
        line_height=lh,
        padding=config.cell_padding,
        text_lines=lines,
    )


def _field_row(
    number: str,
    field_block: Field,
    value: AnswerValue,
    sizing: ColumnSizing,
    config: LayoutConfig,
) -> LayoutRow:
    font_size = config.base_font_size
    lh = line_height(font_size, config.leading)
    inner = 2 * config.cell_padding
    label_lines = wrap_text(
        field_label(number, field_block), config.bold_font_name, font_size, sizing.label_width - inner
    )
    value_lines = wrap_text(
        format_answer(field_block, value, config.date_format),
        config.font_name,
        font_size,
        sizing.value_width - inner,
    )
    lines = max(len(label_lines), len(value_lines))
    return LayoutRow(
        kind=RowKind.FIELD,
        block_id=field_block.id,
        level=field_block.level,
        number=number,
        height=lines * lh + inner,
        font_size=font_size,
        line_height=lh,
        padding=config.cell_padding,
        label_lines=label_lines,
        value_lines=value_lines,
        required=field_block.required,
    )


def compose_rows(
    blocks: Sequence[Block],
    answers: Mapping[str, AnswerValue],
    config: LayoutConfig,
    sizing: Optional[ColumnSizing] = None,
) -> List[LayoutRow]:
    """
    Compose rows for every block in display order.

    Args:
        blocks: Root blocks
        answers: Field id -> answer (missing ids print blank)
        config: Layout configuration
        sizing: Column sizing (computed from `blocks` when omitted)

    Returns:
        Rows ready for pagination

    Raises:
        LayoutError: If the tree is structurally invalid
    """
    if sizing is None:
        sizing = compute_column_sizing(blocks, config)

    rows: List[LayoutRow] = []
    for number, block in _walk(blocks):
        if isinstance(block, Section):
            rows.append(_section_row(number, block, config))
            if block.description:
                rows.append(_description_row(number, block, config))
        else:
            rows.append(_field_row(number, block, answers.get(block.id), sizing, config))

    logger.info(f"Composed {len(rows)} rows")
    return rows


# ─────────────────────────────────────────────────────────────────────────────
# Header
# ─────────────────────────────────────────────────────────────────────────────

def _load_logo(settings: CompanySettings, warnings: List[str]) -> Optional[bytes]:
    """Decode and verify the logo; missing or broken logos add a warning."""
    if not settings.logo:
        _warn(warnings, "No company logo set; header drawn without logo")
        return None
    data = decode_logo(settings.logo)
    if data is None:
        _warn(warnings, "Company logo could not be decoded; header drawn without logo")
        return None
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        _warn(warnings, f"Company logo is not a readable image ({e}); header drawn without logo")
        return None
    return data


def _warn(warnings: List[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)


def compose_header(
    form: FormDocument,
    settings: Optional[CompanySettings],
    *,
    generated_on: Optional[date] = None,
    submitted_by: str = "",
    date_format: str = "%d %b %Y",
) -> Tuple[PageHeader, List[str]]:
    """
    Build the page header block.

    Missing company settings or logo never fail the document: the header
    uses placeholder text and the returned warnings say what was missing.

    Returns:
        (PageHeader, warnings)
    """
    warnings: List[str] = []
    has_settings = settings is not None
    if settings is None:
        _warn(warnings, "Company settings missing; header uses placeholder text")
        settings = CompanySettings()
    elif not settings.name:
        _warn(warnings, "Company name not set; header uses placeholder text")

    logo = _load_logo(settings, warnings) if has_settings else None

    meta = [f"Rev. {form.revision}"]
    if form.department:
        meta.append(f"Department: {form.department}")
    meta.append(f"Date: {(generated_on or date.today()).strftime(date_format)}")
    if submitted_by:
        meta.append(f"Submitted by: {submitted_by}")

    header = PageHeader(
        company_name=settings.name or PLACEHOLDER_COMPANY_NAME,
        title_line=f"{form.title} (Rev. {form.revision})",
        meta_line=" | ".join(meta),
        detail_line=settings.registration_line,
        logo=logo,
    )
    return header, warnings


def compose_form(
    form: FormDocument,
    answers: Mapping[str, AnswerValue],
    settings: Optional[CompanySettings],
    config: LayoutConfig,
    *,
    generated_on: Optional[date] = None,
    submitted_by: str = "",
) -> ComposedForm:
    """
    Compose rows and header for a form.

    Raises:
        LayoutError: If the tree is structurally invalid
    """
    sizing = compute_column_sizing(form.blocks, config)
    rows = compose_rows(form.blocks, answers, config, sizing)
    header, warnings = compose_header(
        form,
        settings,
        generated_on=generated_on,
        submitted_by=submitted_by,
        date_format=config.date_format,
    )
    return ComposedForm(rows=tuple(rows), header=header, column_sizing=sizing, warnings=warnings)
