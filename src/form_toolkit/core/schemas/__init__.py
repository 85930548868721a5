"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_form,
    validate_answers,
    ValidationError,
    FORM_SCHEMA_VERSION,
)

__all__ = [
    "validate_form",
    "validate_answers",
    "ValidationError",
    "FORM_SCHEMA_VERSION",
]
