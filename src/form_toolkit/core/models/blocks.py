"""
Module: blocks

Purpose:
    Provides the Section and Field dataclasses - immutable nodes of a
    form's block tree. Sections nest up to three levels and hold
    sections or fields; fields are leaves carrying a FieldKind.

Key Functions:
    - Section.iter_all(): Iterate over the section and all descendants
    - Section.iter_fields(): Iterate over descendant fields
    - Section.find(block_id): Find a block by identifier
    - block_from_dict() / Block.to_dict(): Serialization
    - iter_blocks(): Pre-order walk over a root block sequence

Dependencies:
    - dataclasses (std)
    - .kinds.FieldKind

Used By:
    - core.models.forms.FormDocument
    - tree.operations / tree.paths
    - validation
    - builder.layout.composer

Design Notes:
    Blocks are frozen. Tree edits build new tuples (see tree.operations),
    so a block value can be shared safely between trees.
    Identifiers are stable; positional paths are derived, never stored.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple, Union

from .kinds import FieldKind


MAX_SECTION_LEVEL = 3
# Fields sit one level below their section, so a field under a
# level-3 section has level 4.
MAX_FIELD_LEVEL = MAX_SECTION_LEVEL + 1


@dataclass(frozen=True, slots=True)
class Field:
    """
    Form field node (leaf, immutable).

    Attributes:
        id: Stable identifier, used as the answer-map key
        title: Field label shown to respondents
        kind: Field type
        required: Whether an answer is needed before submitting
        level: Nesting level (parent section level + 1)
        choices: Ordered choice labels for choice kinds (duplicates allowed)
        kind_tag: Original stored tag when kind is UNKNOWN

    Example:
        >>> f = Field("f1", "Aircraft Type", FieldKind.SHORT_TEXT, level=2)
        >>> f.is_section
        False
    """

    id: str
    title: str
    kind: FieldKind = FieldKind.SHORT_TEXT
    required: bool = False
    level: int = 2
    choices: Tuple[str, ...] = ()
    kind_tag: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate field on construction."""
        if not self.id:
            raise ValueError("Field id must not be empty")
        if not (2 <= self.level <= MAX_FIELD_LEVEL):
            raise ValueError(f"Field level must be 2-{MAX_FIELD_LEVEL}: {self.level}")

    @property
    def is_section(self) -> bool:
        return False

    @property
    def children(self) -> Tuple[Block, ...]:
        """Fields never have children."""
        return ()

    def iter_all(self) -> Iterator[Block]:
        yield self

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict using the stored key names ("type", "fieldType", ...)
        """
        tag = self.kind_tag if self.kind == FieldKind.UNKNOWN and self.kind_tag else str(self.kind)
        d = {
            "id": self.id,
            "type": "field",
            "title": self.title,
            "fieldType": tag,
            "required": self.required,
            "level": self.level,
        }
        if self.choices:
            d["choices"] = list(self.choices)
        return d

    def __repr__(self) -> str:
        req = ", required" if self.required else ""
        return f"Field({self.id!r}, {self.title!r}, {self.kind.value}{req})"


@dataclass(frozen=True, slots=True)
class Section:
    """
    Form section node (immutable tree structure).

    The tree structure is:
        Section (level 1)
        ├── Field (level 2)
        └── Section (level 2)
            ├── Field (level 3)
            └── Section (level 3)
                └── Field (level 4)

    Attributes:
        id: Stable identifier
        title: Section heading
        description: Optional help text shown under the heading
        level: Nesting level, 1..3
        children: Child sections and fields in display order

    Invariants:
        - 1 <= level <= 3
        - Every child's level is exactly level + 1

    Example:
        >>> field = Field("f1", "Engine Model", level=2)
        >>> s = Section("s1", "Basic Information", children=(field,))
        >>> s.field_count
        1
    """

    id: str
    title: str
    description: str = ""
    level: int = 1
    children: Tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        """Validate section and its immediate children on construction."""
        if not self.id:
            raise ValueError("Section id must not be empty")
        if not (1 <= self.level <= MAX_SECTION_LEVEL):
            raise ValueError(f"Section level must be 1-{MAX_SECTION_LEVEL}: {self.level}")
        for child in self.children:
            if not isinstance(child, (Section, Field)):
                raise ValueError(f"Section {self.id!r} has a non-block child: {child!r}")
            if child.level != self.level + 1:
                raise ValueError(
                    f"Child {child.id!r} of section {self.id!r} must have level "
                    f"{self.level + 1} (got {child.level})"
                )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_section(self) -> bool:
        return True

    @property
    def can_nest_section(self) -> bool:
        """Whether a child section may be added under this section."""
        return self.level < MAX_SECTION_LEVEL

    @property
    def field_count(self) -> int:
        """Count of fields anywhere in this subtree."""
        return sum(1 for _ in self.iter_fields())

    # ─────────────────────────────────────────────────────────────────────────
    # Iteration Methods
    # ─────────────────────────────────────────────────────────────────────────

    def iter_all(self) -> Iterator[Block]:
        """
        Iterate over this section and all descendants (pre-order).

        Yields:
            This section, then all descendants in display order
        """
        yield self
        for child in self.children:
            yield from child.iter_all()

    def iter_fields(self) -> Iterator[Field]:
        """Iterate over all fields in this subtree in display order."""
        for block in self.iter_all():
            if isinstance(block, Field):
                yield block

    def find(self, block_id: str) -> Optional[Block]:
        """
        Find a block by identifier in this subtree.

        Args:
            block_id: Identifier to search for

        Returns:
            Matching block or None if not found
        """
        for block in self.iter_all():
            if block.id == block_id:
                return block
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict representation of this section and children
        """
        return {
            "id": self.id,
            "type": "section",
            "title": self.title,
            "description": self.description,
            "level": self.level,
            "children": [child.to_dict() for child in self.children],
        }

    def __repr__(self) -> str:
        child_str = f", children={len(self.children)}" if self.children else ""
        return f"Section({self.id!r}, {self.title!r}, level={self.level}{child_str})"


Block = Union[Section, Field]


def new_block_id() -> str:
    """Generate a fresh block identifier (assigned once, never changed)."""
    return str(uuid.uuid4())


def block_from_dict(data: dict) -> Block:
    """
    Deserialize a block (and its subtree) from a dictionary.

    Args:
        data: Dict representation with a "type" of "section" or "field"

    Returns:
        Section or Field instance

    Raises:
        ValueError: If the type is unknown or a field carries children
    """
    block_type = data.get("type")
    if block_type == "section":
        return Section(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description") or "",
            level=data.get("level", 1),
            children=tuple(block_from_dict(child) for child in data.get("children") or []),
        )
    if block_type == "field":
        if data.get("children"):
            raise ValueError(f"Field {data.get('id')!r} cannot have children")
        tag = data.get("fieldType")
        kind = FieldKind.parse(tag)
        return Field(
            id=data["id"],
            title=data.get("title", ""),
            kind=kind,
            required=bool(data.get("required", False)),
            level=data.get("level", 2),
            choices=tuple(data.get("choices") or ()),
            kind_tag=tag if kind == FieldKind.UNKNOWN else None,
        )
    raise ValueError(f"Unknown block type: {block_type!r}")


def iter_blocks(blocks: Sequence[Block]) -> Iterator[Block]:
    """
    Iterate over every block under a root sequence (pre-order).

    Args:
        blocks: Root block sequence

    Yields:
        Each block in display order
    """
    for block in blocks:
        yield from block.iter_all()


def iter_fields(blocks: Sequence[Block]) -> Iterator[Field]:
    """Iterate over every field under a root sequence in display order."""
    for block in iter_blocks(blocks):
        if isinstance(block, Field):
            yield block
