"""
Module: forms

Purpose:
    Provides the FormDocument dataclass - the persisted aggregate holding
    a form's metadata and its root block tree - and the Revision value
    used to version published forms.

Key Functions:
    - Revision.parse(text) / str(revision): "MAJOR.MINOR" conversion
    - Revision.bump(major): Next minor or major revision
    - FormDocument.with_blocks(blocks): Replace the block tree
    - FormDocument.publish(major): Bump revision and mark published
    - new_form(title): Draft form with one default root section
    - FormDocument.to_dict() / FormDocument.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .blocks: Section, Block

Used By:
    - core.utils.serialization
    - builder.controller
    - storage.json_store

Lifecycle:
    draft (published=False, revision 1.0)
      → publish() → published, revision bumped
      → with_blocks() → has_pending_changes=True (respondents still see
        the last published snapshot)
      → publish() → revision bumped again, pending changes cleared
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Sequence, Tuple

from .blocks import Block, Field, Section, block_from_dict, iter_blocks, iter_fields, new_block_id


_REVISION_RE = re.compile(r"^(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class Revision:
    """
    Form revision of shape MAJOR.MINOR (immutable).

    Example:
        >>> Revision.parse("1.4").bump()
        Revision(major=1, minor=5)
        >>> str(Revision.parse("1.4").bump(major=True))
        '2.0'
    """

    major: int = 1
    minor: int = 0

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0:
            raise ValueError(f"Revision parts must be non-negative: {self.major}.{self.minor}")

    @classmethod
    def parse(cls, text: str) -> Revision:
        """
        Parse a "MAJOR.MINOR" revision string.

        Raises:
            ValueError: If text does not have the MAJOR.MINOR shape
        """
        match = _REVISION_RE.match(str(text).strip())
        if not match:
            raise ValueError(f"Invalid revision {text!r} (expected MAJOR.MINOR)")
        return cls(int(match.group(1)), int(match.group(2)))

    def bump(self, major: bool = False) -> Revision:
        """Return the next revision: (MAJOR+1).0 or MAJOR.(MINOR+1)."""
        if major:
            return Revision(self.major + 1, 0)
        return Revision(self.major, self.minor + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class FormDocument:
    """
    Complete form definition (immutable).

    Attributes:
        id: Storage identifier ("" until first saved)
        title: Form title
        description: Free text shown to respondents
        department: Owning department, optional
        revision: Current revision
        published: Whether respondents can see the form
        header_on_all_pages: Repeat the PDF header block on every page
        blocks: Root sections in display order
        has_pending_changes: Edited since the last publish

    Invariants:
        - Every root block is a level-1 Section
    """

    title: str
    blocks: Tuple[Section, ...]
    id: str = ""
    description: str = ""
    department: Optional[str] = None
    revision: Revision = Revision()
    published: bool = False
    header_on_all_pages: bool = False
    has_pending_changes: bool = False

    def __post_init__(self) -> None:
        """Validate root blocks on construction."""
        for block in self.blocks:
            if not isinstance(block, Section) or block.level != 1:
                raise ValueError(f"Root blocks must be level-1 sections: {block!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def iter_blocks(self) -> Iterator[Block]:
        """All blocks in display order (pre-order)."""
        return iter_blocks(self.blocks)

    def iter_fields(self) -> Iterator[Field]:
        """All fields in display order."""
        return iter_fields(self.blocks)

    def find(self, block_id: str) -> Optional[Block]:
        """Find a block anywhere in the tree by identifier."""
        for block in self.iter_blocks():
            if block.id == block_id:
                return block
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def with_blocks(self, blocks: Sequence[Section]) -> FormDocument:
        """
        Return a copy holding a new block tree.

        Editing a published form marks it as having pending changes; they
        reach respondents only after the next publish().
        """
        return replace(
            self,
            blocks=tuple(blocks),
            has_pending_changes=self.has_pending_changes or self.published,
        )

    def publish(self, major: bool = False) -> FormDocument:
        """
        Return the published copy with the revision bumped.

        Args:
            major: Bump MAJOR (and reset MINOR) instead of MINOR
        """
        return replace(
            self,
            revision=self.revision.bump(major=major),
            published=True,
            has_pending_changes=False,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict using the stored key names ("headerOnAllPages", ...)
        """
        d = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "revision": str(self.revision),
            "published": self.published,
            "headerOnAllPages": self.header_on_all_pages,
            "hasPendingChanges": self.has_pending_changes,
            "blocks": [block.to_dict() for block in self.blocks],
        }
        if self.department:
            d["department"] = self.department
        return d

    @classmethod
    def from_dict(cls, data: dict) -> FormDocument:
        """
        Deserialize from dictionary.

        Args:
            data: Dict representation

        Returns:
            FormDocument instance
        """
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            description=data.get("description") or "",
            department=data.get("department") or None,
            revision=Revision.parse(data.get("revision", "1.0")),
            published=bool(data.get("published", False)),
            header_on_all_pages=bool(data.get("headerOnAllPages", False)),
            has_pending_changes=bool(data.get("hasPendingChanges", False)),
            blocks=tuple(block_from_dict(b) for b in data.get("blocks") or []),
        )

    def __repr__(self) -> str:
        state = "published" if self.published else "draft"
        return f"FormDocument({self.title!r}, rev={self.revision}, {state}, sections={len(self.blocks)})"


def new_form(
    title: str,
    *,
    description: str = "",
    department: Optional[str] = None,
    header_on_all_pages: bool = True,
) -> FormDocument:
    """
    Create a draft form with a single empty root section.

    Example:
        >>> form = new_form("Daily Inspection")
        >>> str(form.revision), form.published, len(form.blocks)
        ('1.0', False, 1)
    """
    return FormDocument(
        title=title,
        description=description,
        department=department,
        header_on_all_pages=header_on_all_pages,
        blocks=(Section(id=new_block_id(), title="Section 1", level=1),),
    )
