"""
Builder Package

Lays out forms and renders them to PDF.

Usage:
    >>> from form_toolkit.builder import BuilderConfig, render_form_pdf
    >>> result = render_form_pdf(form, answers, settings, BuilderConfig(output_dir=out))
"""

from .config import BuilderConfig
from .controller import (
    LayoutError,
    RenderError,
    RenderResult,
    build_form_layout,
    pdf_file_name,
    render_form_bytes,
    render_form_pdf,
)
from .sample_data import generate_sample_answers

__all__ = [
    "BuilderConfig",
    "LayoutError",
    "RenderError",
    "RenderResult",
    "build_form_layout",
    "pdf_file_name",
    "render_form_bytes",
    "render_form_pdf",
    "generate_sample_answers",
]
