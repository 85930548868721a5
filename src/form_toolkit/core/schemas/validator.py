"""
Schema Validation Utilities

Validates stored form documents before they are turned into models.

Two levels:
- Basic checks (always): required keys, block types, level chain, fields
  without children, unique identifiers, at least one root section,
  revision shape. Fail fast with a path to the offending node.
- Strict mode: full JSON Schema validation with jsonschema against the
  bundled form_document.schema.json.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)

# Schema version constants
FORM_SCHEMA_VERSION = 1

_REVISION_RE = re.compile(r"^\d+\.\d+$")
_MAX_SECTION_LEVEL = 3

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_form(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a stored form document.

    Args:
        data: Form dictionary to validate
        strict: If True, also run full JSON Schema validation

    Raises:
        ValidationError: If data is invalid
    """
    missing = [f for f in ("title", "blocks") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    revision = data.get("revision", "1.0")
    if not (isinstance(revision, str) and _REVISION_RE.match(revision)):
        raise ValidationError(
            f"Invalid revision: {revision!r} (must be MAJOR.MINOR)",
            path="revision",
        )

    blocks = data["blocks"]
    if not isinstance(blocks, list):
        raise ValidationError("blocks must be a list", path="blocks")
    if not blocks:
        raise ValidationError("Form must contain at least one section", path="blocks")

    seen_ids: set[str] = set()
    for i, block in enumerate(blocks):
        path = f"blocks[{i}]"
        if not isinstance(block, dict) or block.get("type") != "section":
            raise ValidationError("Root blocks must be sections", path=path)
        _validate_block(block, path, expected_level=1, seen_ids=seen_ids)

    if strict:
        schema = _load_schema("form_document")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            )


def _validate_block(
    data: dict[str, Any],
    path: str,
    expected_level: int,
    seen_ids: set[str],
) -> None:
    """Validate a block node recursively."""
    missing = [f for f in ("id", "type") if f not in data]
    if missing:
        raise ValidationError(
            f"Block missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    block_id = data["id"]
    if not isinstance(block_id, str) or not block_id:
        raise ValidationError(f"Invalid block id: {block_id!r}", path=f"{path}.id")
    if block_id in seen_ids:
        raise ValidationError(f"Duplicate block id: {block_id!r}", path=f"{path}.id")
    seen_ids.add(block_id)

    level = data.get("level", expected_level)
    if level != expected_level:
        raise ValidationError(
            f"Invalid level: {level} (expected {expected_level})",
            path=f"{path}.level",
        )

    block_type = data["type"]
    if block_type == "field":
        if data.get("children"):
            raise ValidationError(
                "Field blocks cannot have children",
                path=f"{path}.children",
            )
        choices = data.get("choices", [])
        if not isinstance(choices, list) or not all(isinstance(c, str) for c in choices):
            raise ValidationError(
                "choices must be a list of strings",
                path=f"{path}.choices",
            )
        return

    if block_type != "section":
        raise ValidationError(f"Invalid block type: {block_type!r}", path=f"{path}.type")

    if level > _MAX_SECTION_LEVEL:
        raise ValidationError(
            f"Sections cannot nest deeper than level {_MAX_SECTION_LEVEL}",
            path=f"{path}.level",
        )

    children = data.get("children", [])
    if not isinstance(children, list):
        raise ValidationError("children must be a list", path=f"{path}.children")
    for i, child in enumerate(children):
        child_path = f"{path}.children[{i}]"
        if not isinstance(child, dict):
            raise ValidationError("Block must be an object", path=child_path)
        _validate_block(child, child_path, expected_level + 1, seen_ids)


def validate_answers(data: dict[str, Any]) -> None:
    """
    Validate an answer map read from storage.

    Values must be text, booleans, lists of text, or null.

    Raises:
        ValidationError: If any value has an unsupported shape
    """
    if not isinstance(data, dict):
        raise ValidationError("Answers must be an object", path="")
    for field_id, value in data.items():
        if value is None or isinstance(value, (str, bool)):
            continue
        if isinstance(value, (int, float)):
            # Numbers typed by older clients; kept, converted to text on load
            continue
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            continue
        raise ValidationError(
            f"Unsupported answer value for {field_id!r}: {value!r}",
            path=field_id,
        )
