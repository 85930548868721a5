"""
Storage interface consumed by editor and viewer code.

Adapters raise StorageError for any I/O failure so callers handle one
exception type regardless of the backing store.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol

from form_toolkit.core.models.answers import AnswerValue
from form_toolkit.core.models.company import CompanySettings
from form_toolkit.core.models.forms import FormDocument


class StorageError(Exception):
    """Reading or writing the backing store failed."""
    pass


class FormStore(Protocol):
    """Persistence operations the toolkit needs from a backing store."""

    def load_form(self, form_id: str) -> FormDocument: ...

    def save_form(self, form_id: str, form: FormDocument) -> None: ...

    def load_answers(self, form_id: str, user_id: str) -> Optional[Dict[str, AnswerValue]]: ...

    def save_answers(self, form_id: str, user_id: str, answers: Dict[str, AnswerValue]) -> None: ...

    def load_company_settings(self) -> CompanySettings: ...
