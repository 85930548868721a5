"""
Module: builder.layout.metrics

Purpose:
    Text measurement in millimetres using ReportLab's font metrics, so
    row heights computed by the composer match what the renderer draws.

Key Functions:
    - text_width(): Width of a string
    - wrap_text(): Break text into lines fitting a width
    - line_height(): Height of one line for a font size

Dependencies:
    - reportlab: Standard font metrics and line splitting
"""

from __future__ import annotations

from typing import Tuple

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth


def pt_to_mm(value: float) -> float:
    return value / mm


def mm_to_pt(value: float) -> float:
    return value * mm


def text_width(text: str, font_name: str, font_size: float) -> float:
    """Rendered width of `text` in millimetres."""
    return pt_to_mm(stringWidth(text, font_name, font_size))


def line_height(font_size: float, leading: float) -> float:
    """Height of one text line in millimetres."""
    return pt_to_mm(font_size * leading)


def wrap_text(text: str, font_name: str, font_size: float, width: float) -> Tuple[str, ...]:
    """
    Wrap text to `width` millimetres, honouring explicit newlines.

    Returns:
        At least one line ("" for empty text)
    """
    if not text:
        return ("",)
    lines = simpleSplit(text, font_name, font_size, mm_to_pt(width))
    return tuple(lines) or ("",)
