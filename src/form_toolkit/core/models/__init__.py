"""
Core Models Package

Immutable, validated data models that serve as the single source of truth.

All models in this package are frozen dataclasses. Tree edits produce new
instances (see form_toolkit.tree.operations).
"""

from .kinds import FieldKind
from .blocks import (
    Block,
    Field,
    Section,
    MAX_SECTION_LEVEL,
    block_from_dict,
    iter_blocks,
    iter_fields,
    new_block_id,
)
from .forms import FormDocument, Revision, new_form
from .company import CompanySettings, decode_logo
from .answers import AnswerMap, AnswerValue, Role, Submission, UserContext

__all__ = [
    "FieldKind",
    "Block",
    "Field",
    "Section",
    "MAX_SECTION_LEVEL",
    "block_from_dict",
    "iter_blocks",
    "iter_fields",
    "new_block_id",
    "FormDocument",
    "Revision",
    "new_form",
    "CompanySettings",
    "decode_logo",
    "AnswerMap",
    "AnswerValue",
    "Role",
    "Submission",
    "UserContext",
]
