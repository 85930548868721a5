"""
Module: builder.controller

Purpose:
    Orchestrate the complete form rendering pipeline.
    Answers → Compose → Paginate → Finalize footers → Render

Key Functions:
    - build_form_layout(): Abstract paginated document for a form
    - render_form_pdf(): Write the PDF into the output directory
    - render_form_bytes(): PDF bytes for in-memory consumers
    - pdf_file_name(): "<slug>_<YYYY-MM-DD>.pdf"

Key Classes:
    - RenderResult: Complete render result

Dependencies:
    - builder.layout: Composition and pagination
    - builder.output: PDF rendering
    - builder.sample_data: Preview answers

Used By:
    - scripts/render_sample_form.py
"""

from __future__ import annotations

import io
import json
import logging
import re
import time
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Mapping, Optional

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.company import CompanySettings
from form_toolkit.core.models.forms import FormDocument
from form_toolkit.validation import is_empty

from .config import BuilderConfig
from .layout import LayoutError, LayoutResult, compose_form, finalize_footers, paginate
from .output.renderer import RenderError, render_to_pdf
from .sample_data import generate_sample_answers

logger = logging.getLogger(__name__)

__all__ = [
    "LayoutError",
    "RenderError",
    "RenderResult",
    "build_form_layout",
    "pdf_file_name",
    "render_form_bytes",
    "render_form_pdf",
    "slugify",
]


@dataclass(frozen=True)
class RenderResult:
    """
    Complete render result (immutable).

    Attributes:
        pdf_path: Path to the generated PDF
        file_name: PDF file name
        page_count: Number of pages generated
        warnings: Degraded-asset warnings collected during layout
        metadata: Render metadata dictionary

    Example:
        >>> result = render_form_pdf(form, answers, settings, config)
        >>> print(f"Generated {result.page_count} pages at {result.pdf_path}")
    """
    pdf_path: Path
    file_name: str
    page_count: int
    warnings: tuple[str, ...]
    metadata: dict


def slugify(title: str) -> str:
    """
    File-name safe form of a title.

    Example:
        >>> slugify("Daily Inspection (Rev. 2)")
        'daily_inspection_rev_2'
    """
    slug = re.sub(r"[^a-z0-9]+", "_", title.lower()).strip("_")
    return slug or "form"


def pdf_file_name(form: FormDocument, on: Optional[date] = None) -> str:
    """File name for a rendered form: "<slug>_<YYYY-MM-DD>.pdf"."""
    return f"{slugify(form.title)}_{(on or date.today()).isoformat()}.pdf"


def _resolve_answers(
    form: FormDocument,
    answers: Optional[Mapping[str, AnswerValue]],
    config: BuilderConfig,
) -> Mapping[str, AnswerValue]:
    if not config.use_sample_data:
        return answers if answers is not None else {}

    logger.info(f"Filling unanswered fields with sample data (seed={config.sample_seed})")
    merged: Dict[str, AnswerValue] = generate_sample_answers(form.blocks, seed=config.sample_seed)
    for field_id, value in (answers or {}).items():
        if not is_empty(value) or field_id not in merged:
            merged[field_id] = value
    return merged


def build_form_layout(
    form: FormDocument,
    answers: Optional[Mapping[str, AnswerValue]] = None,
    settings: Optional[CompanySettings] = None,
    config: Optional[BuilderConfig] = None,
) -> LayoutResult:
    """
    Lay out a form into pages.

    Pipeline:
    1. Resolve answers (given answers, with sample data filling the gaps in preview mode)
    2. Size columns and compose rows
    3. Paginate with the header policy
    4. Stamp "Page N of M" footers

    Args:
        form: Form to lay out
        answers: Field id -> answer; None for an empty (or sample) document
        settings: Company branding; None renders placeholder chrome
        config: Render configuration

    Returns:
        LayoutResult with footers stamped

    Raises:
        LayoutError: If the block tree is structurally invalid
    """
    config = config or BuilderConfig()
    resolved = _resolve_answers(form, answers, config)

    composed = compose_form(
        form,
        resolved,
        settings,
        config.layout,
        generated_on=config.render_date,
        submitted_by=config.submitted_by,
    )
    layout = paginate(
        composed.rows,
        config.layout,
        header=composed.header,
        header_on_all_pages=form.header_on_all_pages,
        column_sizing=composed.column_sizing,
        warnings=composed.warnings,
    )
    return finalize_footers(layout, legal_text=settings.legal_text if settings else "")


def render_form_pdf(
    form: FormDocument,
    answers: Optional[Mapping[str, AnswerValue]] = None,
    settings: Optional[CompanySettings] = None,
    config: Optional[BuilderConfig] = None,
) -> RenderResult:
    """
    Render a form to a PDF in config.output_dir.

    Raises:
        LayoutError: If the block tree is structurally invalid
        RenderError: If the PDF cannot be written

    Example:
        >>> config = BuilderConfig(output_dir=Path("output"))
        >>> result = render_form_pdf(form, answers, settings, config)
        >>> result.file_name
        'daily_inspection_2024-03-01.pdf'
    """
    config = config or BuilderConfig()
    start_time = time.perf_counter()

    logger.info(f"Rendering form {form.title!r} rev {form.revision}")
    layout = build_form_layout(form, answers, settings, config)

    file_name = pdf_file_name(form, config.render_date)
    pdf_path = config.output_dir / file_name
    render_to_pdf(
        layout,
        pdf_path,
        config.layout,
        show_footer=config.show_footer,
        title=form.title,
        author=settings.name if settings else "",
    )

    metadata = _build_metadata(form, answers, layout, config, time.perf_counter() - start_time)
    if config.write_metadata:
        _write_metadata(pdf_path.with_suffix(".json"), metadata)

    logger.info(f"Wrote {layout.page_count} pages to {pdf_path}")
    return RenderResult(
        pdf_path=pdf_path,
        file_name=file_name,
        page_count=layout.page_count,
        warnings=tuple(layout.warnings),
        metadata=metadata,
    )


def render_form_bytes(
    form: FormDocument,
    answers: Optional[Mapping[str, AnswerValue]] = None,
    settings: Optional[CompanySettings] = None,
    config: Optional[BuilderConfig] = None,
) -> bytes:
    """Render a form to PDF bytes without touching the file system."""
    config = config or BuilderConfig()
    layout = build_form_layout(form, answers, settings, config)
    buf = io.BytesIO()
    render_to_pdf(
        layout,
        buf,
        config.layout,
        show_footer=config.show_footer,
        title=form.title,
        author=settings.name if settings else "",
    )
    return buf.getvalue()


def _build_metadata(
    form: FormDocument,
    answers: Optional[Mapping[str, AnswerValue]],
    layout: LayoutResult,
    config: BuilderConfig,
    duration: float,
) -> Dict:
    """
    Metadata dictionary for a rendered form.

    Example:
        >>> metadata['page_count']
        2
    """
    fields = list(form.iter_fields())
    answered = sum(1 for f in fields if answers and not is_empty(answers.get(f.id)))
    return {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "form_id": form.id,
        "title": form.title,
        "revision": str(form.revision),
        "department": form.department,
        "page_count": layout.page_count,
        "field_count": len(fields),
        "answered_count": answered,
        "sample_data": answers is None and config.use_sample_data,
        "header_on_all_pages": form.header_on_all_pages,
        "label_fraction": round(layout.column_sizing.label_fraction, 4),
        "warnings": list(layout.warnings),
        "duration_seconds": round(duration, 3),
    }


def _write_metadata(path: Path, metadata: dict) -> None:
    """
    Write metadata JSON file.

    Raises:
        RenderError: If writing fails
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2)
        logger.debug(f"Wrote metadata to {path}")
    except OSError as e:
        raise RenderError(f"Failed to write metadata: {e}") from e
