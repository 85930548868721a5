"""
Module: storage.json_store

Purpose:
    FormStore implementation on a directory of JSON files. Every file
    read and write holds a portalocker lock; concurrent structural edits
    to the same form are still last-writer-wins.

Directory Layout:
    <root>/forms/<form_id>.json          working copy (authors)
    <root>/published/<form_id>.json      published snapshot (respondents)
    <root>/answers/<form_id>/<user>.json draft answers
    <root>/submissions/<form_id>.jsonl   submitted answers, one per line
    <root>/settings/company.json         company settings

Key Classes:
    - JsonFormStore: File-backed store

Dependencies:
    - storage.file_locking: Locked JSON reads and writes
    - core.utils.serialization: Validated (de)serialization

Used By:
    - scripts and application code persisting forms
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from form_toolkit.core.models.answers import AnswerValue, Submission, UserContext
from form_toolkit.core.models.company import CompanySettings
from form_toolkit.core.models.forms import FormDocument, new_form
from form_toolkit.core.utils.serialization import (
    deserialize_answers,
    deserialize_form,
    serialize_answers,
    serialize_form,
)
from form_toolkit.validation import ensure_submittable

from .base import StorageError
from .file_locking import locked_append_jsonl, locked_read_json, locked_read_jsonl, locked_write_json

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SAFE_ID_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_")


def _check_id(value: str, what: str) -> str:
    """Identifiers become file names; refuse anything path-like."""
    if not value or not set(value) <= _SAFE_ID_CHARS:
        raise StorageError(f"Invalid {what}: {value!r}")
    return value


class JsonFormStore:
    """
    Forms, answers and settings stored as JSON files under `root`.

    Example:
        >>> store = JsonFormStore(Path("data"))
        >>> form = store.create_form("Daily Inspection")
        >>> store.publish_form(form.id)
        >>> store.load_published_form(form.id).revision
        Revision(major=1, minor=1)
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    # ─────────────────────────────────────────────────────────────────────────
    # Paths
    # ─────────────────────────────────────────────────────────────────────────

    def _form_path(self, form_id: str) -> Path:
        return self.root / "forms" / f"{_check_id(form_id, 'form id')}.json"

    def _published_path(self, form_id: str) -> Path:
        return self.root / "published" / f"{_check_id(form_id, 'form id')}.json"

    def _answers_path(self, form_id: str, user_id: str) -> Path:
        return (
            self.root / "answers" / _check_id(form_id, "form id")
            / f"{_check_id(user_id, 'user id')}.json"
        )

    def _submissions_path(self, form_id: str) -> Path:
        return self.root / "submissions" / f"{_check_id(form_id, 'form id')}.jsonl"

    @property
    def _settings_path(self) -> Path:
        return self.root / "settings" / "company.json"

    # ─────────────────────────────────────────────────────────────────────────
    # I/O Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _read(self, path: Path) -> Any:
        try:
            return locked_read_json(path)
        except FileNotFoundError as e:
            raise StorageError(f"Not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def _write(self, path: Path, data: Any) -> None:
        try:
            locked_write_json(path, data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def _list(self, directory: Path, load: Callable[[str], T]) -> List[T]:
        if not directory.exists():
            return []
        return [load(p.stem) for p in sorted(directory.glob("*.json"))]

    # ─────────────────────────────────────────────────────────────────────────
    # Forms
    # ─────────────────────────────────────────────────────────────────────────

    def load_form(self, form_id: str) -> FormDocument:
        """
        Load the working copy of a form.

        Raises:
            StorageError: If the form does not exist or cannot be read
            ValidationError: If the stored document is invalid
        """
        data = self._read(self._form_path(form_id))
        data["id"] = form_id
        return deserialize_form(data)

    def save_form(self, form_id: str, form: FormDocument) -> None:
        data = serialize_form(form)
        data["id"] = form_id
        self._write(self._form_path(form_id), data)
        logger.debug(f"Saved form {form_id} rev {form.revision}")

    def create_form(
        self,
        title: str,
        *,
        description: str = "",
        department: Optional[str] = None,
        header_on_all_pages: bool = True,
    ) -> FormDocument:
        """Create and save a draft form with a fresh identifier."""
        form = new_form(
            title,
            description=description,
            department=department,
            header_on_all_pages=header_on_all_pages,
        )
        form_id = uuid.uuid4().hex
        form = replace(form, id=form_id)
        self.save_form(form_id, form)
        logger.info(f"Created form {title!r} ({form_id})")
        return form

    def list_forms(self, published_only: bool = False) -> List[FormDocument]:
        """
        All forms sorted by title.

        Args:
            published_only: Return the published snapshots respondents see
        """
        if published_only:
            forms = self._list(self.root / "published", self.load_published_form)
        else:
            forms = self._list(self.root / "forms", self.load_form)
        return sorted(forms, key=lambda f: f.title.lower())

    def publish_form(self, form_id: str, major: bool = False) -> FormDocument:
        """
        Bump the revision and write the respondent-visible snapshot.

        Returns:
            The published form
        """
        form = self.load_form(form_id).publish(major=major)
        self.save_form(form_id, form)
        self._write(self._published_path(form_id), serialize_form(form))
        logger.info(f"Published form {form_id} as rev {form.revision}")
        return form

    def load_published_form(self, form_id: str) -> FormDocument:
        """
        Load the snapshot respondents fill in.

        Raises:
            StorageError: If the form has never been published
        """
        data = self._read(self._published_path(form_id))
        data["id"] = form_id
        return deserialize_form(data)

    # ─────────────────────────────────────────────────────────────────────────
    # Answers
    # ─────────────────────────────────────────────────────────────────────────

    def load_answers(self, form_id: str, user_id: str) -> Optional[Dict[str, AnswerValue]]:
        """Draft answers of a user, or None when nothing has been saved."""
        path = self._answers_path(form_id, user_id)
        if not path.exists():
            return None
        return deserialize_answers(self._read(path))

    def save_answers(self, form_id: str, user_id: str, answers: Dict[str, AnswerValue]) -> None:
        self._write(self._answers_path(form_id, user_id), serialize_answers(answers))

    def submit_answers(
        self,
        form_id: str,
        user: UserContext,
        answers: Dict[str, AnswerValue],
        *,
        submitted_at: Optional[datetime] = None,
    ) -> Submission:
        """
        Validate answers against the published form and record them.

        The user's draft answers are removed after a successful submit.

        Raises:
            SubmissionBlockedError: If a required field is empty
            StorageError: If the form is not published or writing fails
        """
        form = self.load_published_form(form_id)
        ensure_submittable(form.blocks, answers)

        submission = Submission(
            form_id=form_id,
            user_id=user.user_id,
            answers=serialize_answers(answers),
            submitted_at=submitted_at or datetime.now(),
            submitted_by=user.display_name or user.user_id,
            revision=str(form.revision),
        )
        try:
            locked_append_jsonl(self._submissions_path(form_id), submission.to_dict())
        except OSError as e:
            raise StorageError(f"Failed to record submission for {form_id}: {e}") from e

        draft = self._answers_path(form_id, user.user_id)
        if draft.exists():
            try:
                draft.unlink()
            except OSError as e:
                raise StorageError(f"Failed to remove draft answers {draft}: {e}") from e

        logger.info(f"Recorded submission for form {form_id} by {submission.submitted_by}")
        return submission

    def list_submissions(self, form_id: str) -> List[Submission]:
        try:
            records = locked_read_jsonl(self._submissions_path(form_id))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read submissions for {form_id}: {e}") from e
        return [Submission.from_dict(r) for r in records]

    # ─────────────────────────────────────────────────────────────────────────
    # Company Settings
    # ─────────────────────────────────────────────────────────────────────────

    def load_company_settings(self) -> CompanySettings:
        """Company settings, or an empty record when none are saved."""
        if not self._settings_path.exists():
            logger.debug("No company settings saved; using empty settings")
            return CompanySettings()
        return CompanySettings.from_dict(self._read(self._settings_path))

    def save_company_settings(self, settings: CompanySettings) -> None:
        self._write(self._settings_path, settings.to_dict())
