"""
Module: builder.layout.formatting

Purpose:
    Turn answer values into the text printed in a field row's value
    column, and build the numbered labels of field and section rows.
    One formatter per FieldKind; unknown kinds print their raw value.

Key Functions:
    - format_answer(): Printed text for a field's answer
    - field_label(): "<number> <title>" plus the required marker
    - section_label(): "<number> <title>"

Dependencies:
    - core.models: Field, FieldKind
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Dict, Optional

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.blocks import Field, Section
from form_toolkit.core.models.kinds import FieldKind

REQUIRED_MARKER = " *"

Formatter = Callable[[AnswerValue, str], str]


def _text(value: AnswerValue, date_format: str) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _boolean(value: AnswerValue, date_format: str) -> str:
    if isinstance(value, str):
        return "Yes" if value.strip().lower() in ("true", "yes", "1") else "No"
    return "Yes" if value else "No"


def _multi_choice(value: AnswerValue, date_format: str) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _parse_date(text: str) -> Optional[date]:
    text = text.strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _date(value: AnswerValue, date_format: str) -> str:
    if not isinstance(value, str):
        return _text(value, date_format)
    parsed = _parse_date(value)
    if parsed is None:
        return value
    return parsed.strftime(date_format)


def _signature(value: AnswerValue, date_format: str) -> str:
    return value if isinstance(value, str) else ""


_FORMATTERS: Dict[FieldKind, Formatter] = {
    FieldKind.SHORT_TEXT: _text,
    FieldKind.LONG_TEXT: _text,
    FieldKind.NUMBER: _text,
    FieldKind.DATE: _date,
    FieldKind.BOOLEAN: _boolean,
    FieldKind.SINGLE_CHOICE: _text,
    FieldKind.MULTI_CHOICE: _multi_choice,
    FieldKind.DROPDOWN: _text,
    FieldKind.SIGNATURE: _signature,
    FieldKind.UNKNOWN: _text,
}


def format_answer(field: Field, value: AnswerValue, date_format: str = "%d %b %Y") -> str:
    """
    Text printed for `value` in `field`'s value column.

    An absent answer prints blank for every kind.

    Example:
        >>> format_answer(Field("f", "Oil Leaks", FieldKind.BOOLEAN), True)
        'Yes'
    """
    if value is None:
        return ""
    return _FORMATTERS.get(field.kind, _text)(value, date_format)


def field_label(number: str, field: Field) -> str:
    label = f"{number} {field.title}".strip()
    return label + REQUIRED_MARKER if field.required else label


def section_label(number: str, section: Section) -> str:
    return f"{number} {section.title}".strip()
