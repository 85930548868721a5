"""
Module: kinds

Purpose:
    Provides the FieldKind enum - the closed set of field types a form
    can contain. Every consumer (editor helpers, validation, layout
    formatting, sample data) dispatches on this enum instead of raw
    string tags.

Key Functions:
    - FieldKind.parse(tag): Map a stored tag to a FieldKind
    - FieldKind.has_choices: Whether the kind uses a choice list
    - FieldKind.display_label: Human readable name used by editors

Dependencies:
    - enum (std)

Used By:
    - core.models.blocks.Field
    - builder.layout.formatting
    - builder.sample_data
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Type of form field. Values are the stored wire tags."""
    SHORT_TEXT = "text"
    LONG_TEXT = "textarea"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "checkbox"
    SINGLE_CHOICE = "radio"
    MULTI_CHOICE = "multiCheckbox"
    DROPDOWN = "dropdown"
    SIGNATURE = "signature"
    UNKNOWN = "unknown"  # Tag read from storage that this version does not know

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, tag: str | None) -> FieldKind:
        """
        Map a stored field-type tag to a FieldKind.

        Missing tags default to SHORT_TEXT (the editor's default for new
        fields). Unrecognised tags map to UNKNOWN so the field still
        renders its raw value.

        Args:
            tag: Stored tag like "text" or "multiCheckbox"

        Returns:
            Matching FieldKind
        """
        if tag is None or tag == "":
            return cls.SHORT_TEXT
        try:
            return cls(tag)
        except ValueError:
            logger.warning(f"Unknown field type {tag!r}, rendering as plain text")
            return cls.UNKNOWN

    @property
    def has_choices(self) -> bool:
        """True for kinds whose answers come from a choice list."""
        return self in _CHOICE_KINDS

    @property
    def display_label(self) -> str:
        """Editor label for this kind."""
        return _DISPLAY_LABELS[self]


_CHOICE_KINDS = frozenset({
    FieldKind.SINGLE_CHOICE,
    FieldKind.MULTI_CHOICE,
    FieldKind.DROPDOWN,
})

_DISPLAY_LABELS = {
    FieldKind.SHORT_TEXT: "Short Text Field",
    FieldKind.LONG_TEXT: "Long Text Area",
    FieldKind.NUMBER: "Number Field",
    FieldKind.DATE: "Date Picker",
    FieldKind.BOOLEAN: "Checkbox (Yes/No)",
    FieldKind.SINGLE_CHOICE: "Single Choice (Radio)",
    FieldKind.MULTI_CHOICE: "Multiple Choice (Checkboxes)",
    FieldKind.DROPDOWN: "Dropdown Menu",
    FieldKind.SIGNATURE: "Signature Field",
    FieldKind.UNKNOWN: "Unknown Field Type",
}
