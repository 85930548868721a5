"""
Validation Package

Required-field validation and completion progress for answer maps.
"""

from .rules import (
    ErrorMap,
    RequiredFieldMissing,
    SubmissionBlockedError,
    ensure_submittable,
    find_required_field_ids,
    is_empty,
    validate_all,
    validate_section,
)
from .progress import FormProgress, SectionProgress, form_progress, section_progress

__all__ = [
    "ErrorMap",
    "RequiredFieldMissing",
    "SubmissionBlockedError",
    "ensure_submittable",
    "find_required_field_ids",
    "is_empty",
    "validate_all",
    "validate_section",
    "FormProgress",
    "SectionProgress",
    "form_progress",
    "section_progress",
]
