"""
Module: validation.progress

Purpose:
    Completion indicators for stepping through a form: per-section
    validity/data/completeness and the overall percentage of complete
    root sections.

Key Functions:
    - section_progress(): SectionProgress for one section
    - form_progress(): FormProgress for all root sections
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.blocks import Block, Section

from .rules import is_empty, validate_section


@dataclass(frozen=True)
class SectionProgress:
    """
    Completion state of one section.

    Attributes:
        section_id: Section identifier
        is_valid: No required field in the subtree is empty
        has_any_data: At least one field in the subtree is answered
        is_complete: Valid, has data, and has at least one field
    """

    section_id: str
    is_valid: bool
    has_any_data: bool
    is_complete: bool


@dataclass(frozen=True)
class FormProgress:
    """Per-root-section progress plus the overall completion percentage."""

    sections: Tuple[SectionProgress, ...]
    percent_complete: float

    @property
    def completed_count(self) -> int:
        return sum(1 for s in self.sections if s.is_complete)

    @property
    def is_valid(self) -> bool:
        return all(s.is_valid for s in self.sections)


def section_progress(section: Section, answers: Mapping[str, AnswerValue]) -> SectionProgress:
    fields = list(section.iter_fields())
    is_valid = not validate_section(section, answers)
    has_any_data = any(not is_empty(answers.get(f.id)) for f in fields)
    return SectionProgress(
        section_id=section.id,
        is_valid=is_valid,
        has_any_data=has_any_data,
        is_complete=is_valid and has_any_data and bool(fields),
    )


def form_progress(blocks: Sequence[Block], answers: Mapping[str, AnswerValue]) -> FormProgress:
    """
    Progress over the root sections of a form.

    percent_complete is complete roots / roots * 100, and 0.0 for a tree
    without root sections.
    """
    sections = tuple(
        section_progress(block, answers) for block in blocks if isinstance(block, Section)
    )
    if not sections:
        return FormProgress(sections=(), percent_complete=0.0)
    complete = sum(1 for s in sections if s.is_complete)
    return FormProgress(sections=sections, percent_complete=complete / len(sections) * 100)
