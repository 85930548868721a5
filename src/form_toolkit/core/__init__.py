"""
Form Toolkit Core Package

Shared data models, schema validation and serialization used by the tree
editor, validation, layout and storage modules.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses; every edit returns a new tree

2. **Derived Numbering (Never Stored)**
   - Section/field numbers like "2.1.3" are computed from sibling position
   - Identifiers are the only stable handle on a block

3. **Stored Shape Compatibility**
   - to_dict()/from_dict() keep the existing camelCase document keys
"""

from .models import (
    Block,
    CompanySettings,
    Field,
    FieldKind,
    FormDocument,
    Revision,
    Section,
    new_form,
)

__all__ = [
    "Block",
    "CompanySettings",
    "Field",
    "FieldKind",
    "FormDocument",
    "Revision",
    "Section",
    "new_form",
]
