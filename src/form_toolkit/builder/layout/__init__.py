"""
Layout Package

Compose a form's block tree into measured rows and arrange them onto
pages with header/footer chrome.
"""

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
    TextSpan,
)
from .composer import (
    ComposedForm,
    LayoutError,
    compose_form,
    compose_header,
    compose_rows,
    compute_column_sizing,
)
from .formatting import REQUIRED_MARKER, field_label, format_answer, section_label
from .paginator import finalize_footers, paginate

__all__ = [
    "LayoutConfig",
    "ColumnSizing",
    "LayoutResult",
    "LayoutRow",
    "PageFooter",
    "PageHeader",
    "PagePlan",
    "RowKind",
    "RowPlacement",
    "TextSpan",
    "ComposedForm",
    "LayoutError",
    "compose_form",
    "compose_header",
    "compose_rows",
    "compute_column_sizing",
    "REQUIRED_MARKER",
    "field_label",
    "format_answer",
    "section_label",
    "finalize_footers",
    "paginate",
]
