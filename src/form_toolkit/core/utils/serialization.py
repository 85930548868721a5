"""
Serialization Utilities

Provides to/from JSON utilities for form documents and answer maps.

- `serialize_*` / `deserialize_*` work on dictionaries
- `load_*_json` / `save_*_json` work on files
- Stored dictionaries are validated before models are built, so a broken
  document fails with a ValidationError naming the offending node
- Block numbers are never stored; they are derived on load
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ..models.answers import AnswerValue
from ..models.forms import FormDocument
from ..schemas.validator import ValidationError, validate_answers, validate_form


# ─────────────────────────────────────────────────────────────────────────────
# Form Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_form(form: FormDocument) -> dict[str, Any]:
    """
    Serialize a FormDocument to a dictionary.

    The output can be written to JSON and will pass schema validation.
    """
    return form.to_dict()


def deserialize_form(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> FormDocument:
    """
    Deserialize a FormDocument from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to run structural checks first
        strict: Also validate against the JSON Schema

    Returns:
        FormDocument instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed
    """
    if validate:
        validate_form(data, strict=strict)
    return FormDocument.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Answer Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_answers(answers: Dict[str, AnswerValue]) -> dict[str, Any]:
    """Answer map as JSON-ready dictionary (sequences become lists)."""
    out: dict[str, Any] = {}
    for field_id, value in answers.items():
        if value is None or isinstance(value, (str, bool, int, float)):
            out[field_id] = value
        else:
            out[field_id] = list(value)
    return out


def deserialize_answers(data: dict[str, Any], *, validate: bool = True) -> Dict[str, AnswerValue]:
    """
    Build an answer map from stored data.

    Numbers written by older clients are kept as text, matching how
    number and date answers are stored.
    """
    if validate:
        validate_answers(data)
    answers: Dict[str, AnswerValue] = {}
    for field_id, value in data.items():
        if isinstance(value, bool) or value is None or isinstance(value, str):
            answers[field_id] = value
        elif isinstance(value, (int, float)):
            answers[field_id] = str(value)
        else:
            answers[field_id] = tuple(value)
    return answers


# ─────────────────────────────────────────────────────────────────────────────
# JSON Files
# ─────────────────────────────────────────────────────────────────────────────

def load_form_json(path: Path, *, validate: bool = True, strict: bool = False) -> FormDocument:
    """
    Load a form from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not valid JSON or the form is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Form file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}", path=str(path), errors=[str(e)])

    try:
        return deserialize_form(data, validate=validate, strict=strict)
    except ValueError as e:
        raise ValidationError(f"Error parsing form: {e}", path=str(path), errors=[str(e)])


def save_form_json(form: FormDocument, path: Path) -> None:
    """Save a form to a JSON file (parent directories are created)."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_form(form), f, indent=2, ensure_ascii=False)


def load_answers_json(path: Path, *, validate: bool = True) -> Dict[str, AnswerValue]:
    """
    Load an answer map from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not valid JSON or holds bad values
    """
    if not path.exists():
        raise FileNotFoundError(f"Answers file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}", path=str(path), errors=[str(e)])

    return deserialize_answers(data, validate=validate)


def save_answers_json(answers: Dict[str, AnswerValue], path: Path) -> None:
    """Save an answer map to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_answers(answers), f, indent=2, ensure_ascii=False)
