"""
Module: answers

Purpose:
    Answer-map types and the caller context passed into validation and
    rendering. Answers are keyed by field identifier; the value shape
    depends on the field kind (bool, list of labels, or text).

Key Classes:
    - UserContext: Explicit current-user/role value (no global auth state)
    - Submission: A submitted answer map with submitter metadata

Dependencies:
    - dataclasses (std)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

AnswerValue = Union[str, bool, Sequence[str], None]
AnswerMap = Mapping[str, AnswerValue]


class Role(str, Enum):
    """User role. Only gates which outer screens are reachable."""
    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value

    @property
    def can_author(self) -> bool:
        """Managers and admins can create and publish forms."""
        return self in (Role.MANAGER, Role.ADMIN)


@dataclass(frozen=True)
class UserContext:
    """Current user, passed explicitly to callers that need it."""

    user_id: str
    role: Role = Role.EMPLOYEE
    display_name: str = ""


@dataclass(frozen=True)
class Submission:
    """
    A completed answer map as stored after submit.

    Attributes:
        form_id: Form the answers belong to
        user_id: Submitting user
        answers: Field id -> answer value
        submitted_at: Submission time
        submitted_by: Display name printed on the rendered document
        revision: Form revision the answers were given against
    """

    form_id: str
    user_id: str
    answers: Mapping[str, AnswerValue] = field(default_factory=dict)
    submitted_at: Optional[datetime] = None
    submitted_by: str = ""
    revision: str = ""

    def to_dict(self) -> dict:
        return {
            "formId": self.form_id,
            "userId": self.user_id,
            "data": dict(self.answers),
            "submittedAt": self.submitted_at.isoformat() if self.submitted_at else None,
            "submittedBy": self.submitted_by,
            "revision": self.revision,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Submission:
        submitted_at = data.get("submittedAt")
        return cls(
            form_id=data["formId"],
            user_id=data["userId"],
            answers=data.get("data") or {},
            submitted_at=datetime.fromisoformat(submitted_at) if submitted_at else None,
            submitted_by=data.get("submittedBy") or "",
            revision=data.get("revision") or "",
        )
