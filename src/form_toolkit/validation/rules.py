"""
Module: validation.rules

Purpose:
    Required-field checks over a block tree and an answer map.
    Missing answers are collected per field, never raised one by one;
    ensure_submittable() turns a non-empty result into the pre-submit
    hard stop.

Key Functions:
    - find_required_field_ids(): Identifiers of every required field
    - is_empty(): Whether an answer counts as not given
    - validate_section(): Errors for one section's subtree
    - validate_all(): Errors for the whole tree
    - ensure_submittable(): Raise SubmissionBlockedError on any error

Dependencies:
    - core.models
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.blocks import Block, Field, Section, iter_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequiredFieldMissing:
    """A required field without an answer."""

    field_id: str
    field_title: str = ""
    message: str = "This field is required"


ErrorMap = Dict[str, RequiredFieldMissing]


class SubmissionBlockedError(Exception):
    """Submit refused because required fields are unanswered."""

    def __init__(self, errors: Mapping[str, RequiredFieldMissing]):
        self.errors = dict(errors)
        titles = ", ".join(e.field_title or e.field_id for e in self.errors.values())
        super().__init__(f"{len(self.errors)} required field(s) missing: {titles}")


def find_required_field_ids(blocks: Sequence[Block]) -> Set[str]:
    """Identifiers of all required fields anywhere under `blocks`."""
    return {f.id for f in iter_fields(blocks) if f.required}


def is_empty(value: Optional[AnswerValue]) -> bool:
    """
    True for None, "" and empty sequences.

    False and whitespace-only text are answers.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, bool):
        return False
    try:
        return len(value) == 0
    except TypeError:
        return False


def _collect(fields: Iterable[Field], answers: Mapping[str, AnswerValue]) -> ErrorMap:
    errors: ErrorMap = {}
    for field in fields:
        if field.required and is_empty(answers.get(field.id)):
            errors[field.id] = RequiredFieldMissing(field.id, field.title)
    return errors


def validate_section(section: Section, answers: Mapping[str, AnswerValue]) -> ErrorMap:
    """
    Check every required field in `section`'s subtree.

    Returns:
        Field id -> RequiredFieldMissing; empty when the section is valid
    """
    return _collect(section.iter_fields(), answers)


def validate_all(blocks: Sequence[Block], answers: Mapping[str, AnswerValue]) -> ErrorMap:
    """Same as validate_section() over the whole tree."""
    return _collect(iter_fields(blocks), answers)


def ensure_submittable(blocks: Sequence[Block], answers: Mapping[str, AnswerValue]) -> None:
    """
    Pre-submit gate.

    Raises:
        SubmissionBlockedError: If any required field is empty
    """
    errors = validate_all(blocks, answers)
    if errors:
        logger.info(f"Submission blocked: {len(errors)} required field(s) missing")
        raise SubmissionBlockedError(errors)
