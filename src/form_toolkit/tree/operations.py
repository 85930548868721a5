"""
Module: tree.operations

Purpose:
    Pure, path-addressed edits over a form's root block sequence.
    Every operation takes the current tuple of root blocks and returns
    a new tuple; inputs are never modified.

Key Functions:
    - resolve(): Block at a path, or None
    - insert(): Add a block under a parent path (root when empty)
    - update(): Replace the block at a path
    - remove(): Delete a block and its subtree
    - move(): Swap a block with its previous/next sibling
    - add_section() / add_field(): Editor shortcuts with default blocks

Key Classes:
    - TreeEditError: Base class for refused edits
    - LastRootSectionError: The only root section cannot be deleted
    - NestingDepthError: A section would exceed level 3

Dependencies:
    - core.models.blocks
    - tree.paths.BlockPath

Used By:
    - storage / editor callers persisting the returned tree

Edge Cases:
    - A path that does not resolve (index out of range or below 1, or
      descending into a field) leaves the tree unchanged and logs at
      debug level.
    - move() past either end of the sibling list is a no-op.
    - Paths are positional: re-derive them from the latest tree before
      issuing a second edit against the same snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional, Sequence, Tuple, Union

from form_toolkit.core.models.blocks import (
    MAX_SECTION_LEVEL,
    Block,
    Field,
    Section,
    new_block_id,
)
from form_toolkit.core.models.kinds import FieldKind

from .paths import BlockPath, parse_indices

logger = logging.getLogger(__name__)

Blocks = Tuple[Block, ...]
PathLike = Union[BlockPath, str, Sequence[int]]

DEFAULT_SECTION_TITLE = "New Section"
DEFAULT_FIELD_TITLE = "New Field"


class TreeEditError(Exception):
    """Edit refused because it would break a tree invariant."""
    pass


class LastRootSectionError(TreeEditError):
    """Attempt to delete the only root-level section."""

    def __init__(self, path: BlockPath):
        super().__init__(f"Cannot delete the only root section (path {path})")
        self.path = path


class NestingDepthError(TreeEditError):
    """Section would be nested deeper than MAX_SECTION_LEVEL."""

    def __init__(self, block_id: str, level: int):
        super().__init__(
            f"Section {block_id!r} would be at level {level}; "
            f"sections nest at most {MAX_SECTION_LEVEL} levels"
        )
        self.block_id = block_id
        self.level = level


def as_path(path: PathLike) -> Optional[BlockPath]:
    """
    Accept a BlockPath, a dotted string or a sequence of indices.

    Returns None when an index is below 1; such a path addresses nothing.

    Raises:
        ValueError: If a dotted string has a non-integer segment
    """
    if isinstance(path, BlockPath):
        return path
    if isinstance(path, str):
        try:
            indices = parse_indices(path)
        except ValueError as e:
            raise ValueError(f"Invalid block path {path.strip()!r}") from e
    else:
        indices = tuple(path)
    if any(i < 1 for i in indices):
        return None
    return BlockPath(indices)


# ─────────────────────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────────────────────

def resolve(blocks: Sequence[Block], path: PathLike) -> Optional[Block]:
    """
    Walk a path level by level.

    Args:
        blocks: Root block sequence
        path: Path to the target block

    Returns:
        The block, or None if any index is out of range, the walk
        descends into a field, or the path is the (blockless) root
    """
    target = as_path(path)
    if target is None:
        return None
    siblings: Sequence[Block] = blocks
    current: Optional[Block] = None
    for index in target.indices:
        if current is not None:
            if not isinstance(current, Section):
                return None
            siblings = current.children
        if not 1 <= index <= len(siblings):
            return None
        current = siblings[index - 1]
    return current


def _children_at(blocks: Sequence[Block], parent: BlockPath) -> Optional[Sequence[Block]]:
    """Sibling list owned by `parent` (root sequence for the root path)."""
    if parent.is_root:
        return blocks
    node = resolve(blocks, parent)
    if not isinstance(node, Section):
        return None
    return node.children


def _level_under(blocks: Sequence[Block], parent: BlockPath) -> int:
    if parent.is_root:
        return 1
    node = resolve(blocks, parent)
    return node.level + 1


# ─────────────────────────────────────────────────────────────────────────────
# Rebuilding
# ─────────────────────────────────────────────────────────────────────────────

def _rebuild(
    siblings: Sequence[Block],
    indices: Tuple[int, ...],
    edit: Callable[[Blocks], Blocks],
) -> Blocks:
    """
    Copy the spine from `siblings` down to the list at `indices`,
    applying `edit` to that list. Untouched subtrees are shared.
    """
    if not indices:
        return edit(tuple(siblings))
    i = indices[0] - 1
    node = siblings[i]
    new_node = replace(node, children=_rebuild(node.children, indices[1:], edit))
    return tuple(siblings[:i]) + (new_node,) + tuple(siblings[i + 1:])


def relevel(block: Block, level: int) -> Block:
    """
    Return `block` with its level (and its subtree's levels) set so that
    the block itself sits at `level`.

    Raises:
        NestingDepthError: If a section in the subtree would exceed level 3
        TreeEditError: If a field would be placed at the root
    """
    if isinstance(block, Field):
        if level < 2:
            raise TreeEditError(f"Field {block.id!r} must be placed inside a section")
        return block if block.level == level else replace(block, level=level)
    if level > MAX_SECTION_LEVEL:
        raise NestingDepthError(block.id, level)
    if block.level == level:
        return block
    children = tuple(relevel(child, level + 1) for child in block.children)
    return replace(block, level=level, children=children)


# ─────────────────────────────────────────────────────────────────────────────
# Edits
# ─────────────────────────────────────────────────────────────────────────────

def insert(
    blocks: Sequence[Block],
    parent_path: PathLike,
    block: Block,
    position: Optional[int] = None,
) -> Blocks:
    """
    Insert `block` into the children of the section at `parent_path`.

    Args:
        blocks: Root block sequence
        parent_path: Owning section; empty path means the root
        block: Block to insert (re-levelled to fit the parent)
        position: 1-based position among the siblings; None appends

    Returns:
        New root tuple (unchanged if the parent does not resolve to a section)

    Raises:
        NestingDepthError: If the block's subtree would exceed level 3
        TreeEditError: If a field is inserted at the root
        ValueError: If position is outside 1..len(siblings)+1
    """
    parent = as_path(parent_path)
    siblings = _children_at(blocks, parent) if parent is not None else None
    if siblings is None:
        logger.debug(f"insert: parent path {parent} does not resolve to a section")
        return tuple(blocks)

    if position is None:
        position = len(siblings) + 1
    if not 1 <= position <= len(siblings) + 1:
        raise ValueError(f"position must be 1-{len(siblings) + 1}: {position}")

    placed = relevel(block, _level_under(blocks, parent))
    i = position - 1
    return _rebuild(blocks, parent.indices, lambda kids: kids[:i] + (placed,) + kids[i:])


def update(blocks: Sequence[Block], path: PathLike, block: Block) -> Blocks:
    """
    Replace the block at `path` with `block`.

    Children are whatever `block` carries; callers changing a section's
    title must pass the existing children through. The replacement is
    re-levelled to the position's level.

    Returns:
        New root tuple (unchanged if the path does not resolve)
    """
    path = as_path(path)
    current = resolve(blocks, path) if path is not None else None
    if current is None:
        logger.debug(f"update: path {path} does not resolve")
        return tuple(blocks)

    placed = relevel(block, current.level)
    i = path.last - 1
    return _rebuild(blocks, path.parent.indices, lambda kids: kids[:i] + (placed,) + kids[i + 1:])


def remove(blocks: Sequence[Block], path: PathLike) -> Blocks:
    """
    Delete the block at `path` with its whole subtree.

    Raises:
        LastRootSectionError: If `path` is the only root section

    Returns:
        New root tuple (unchanged if the path does not resolve)
    """
    path = as_path(path)
    if path is None or resolve(blocks, path) is None:
        logger.debug(f"remove: path {path} does not resolve")
        return tuple(blocks)
    if path.depth == 1 and len(blocks) == 1:
        raise LastRootSectionError(path)

    i = path.last - 1
    return _rebuild(blocks, path.parent.indices, lambda kids: kids[:i] + kids[i + 1:])


def move(blocks: Sequence[Block], path: PathLike, direction: int) -> Blocks:
    """
    Swap the block at `path` with its neighbour under the same parent.

    Args:
        direction: -1 (up) or +1 (down)

    Returns:
        New root tuple; unchanged when the neighbour does not exist

    Raises:
        ValueError: If direction is not -1 or +1
    """
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or +1: {direction}")
    path = as_path(path)
    if path is None or resolve(blocks, path) is None:
        logger.debug(f"move: path {path} does not resolve")
        return tuple(blocks)

    siblings = _children_at(blocks, path.parent)
    i = path.last - 1
    j = i + direction
    if not 0 <= j < len(siblings):
        logger.debug(f"move: {path} is already at the boundary")
        return tuple(blocks)

    def swap(kids: Blocks) -> Blocks:
        items = list(kids)
        items[i], items[j] = items[j], items[i]
        return tuple(items)

    return _rebuild(blocks, path.parent.indices, swap)


# ─────────────────────────────────────────────────────────────────────────────
# Editor Helpers
# ─────────────────────────────────────────────────────────────────────────────

def new_section(
    title: str = DEFAULT_SECTION_TITLE,
    level: int = 1,
    description: str = "",
) -> Section:
    """Fresh empty section with a new identifier."""
    return Section(id=new_block_id(), title=title, description=description, level=level)


def new_field(
    title: str = DEFAULT_FIELD_TITLE,
    kind: FieldKind = FieldKind.SHORT_TEXT,
    level: int = 2,
    *,
    required: bool = False,
    choices: Sequence[str] = (),
) -> Field:
    """Fresh field with a new identifier."""
    return Field(
        id=new_block_id(),
        title=title,
        kind=kind,
        required=required,
        level=level,
        choices=tuple(choices),
    )


def add_section(blocks: Sequence[Block], parent_path: PathLike = ()) -> Blocks:
    """
    Append a default "New Section" under `parent_path` (root when empty).

    Raises:
        NestingDepthError: If the parent section is already at level 3
    """
    parent = as_path(parent_path)
    if parent is None:
        logger.debug(f"add_section: parent path {parent_path!r} does not resolve")
        return tuple(blocks)
    if parent.is_root:
        return insert(blocks, parent, new_section(level=1))
    node = resolve(blocks, parent)
    if not isinstance(node, Section):
        logger.debug(f"add_section: parent path {parent} does not resolve to a section")
        return tuple(blocks)
    if not node.can_nest_section:
        raise NestingDepthError(node.id, node.level + 1)
    return insert(blocks, parent, new_section(level=node.level + 1))


def add_field(blocks: Sequence[Block], parent_path: PathLike) -> Blocks:
    """Append a default short-text "New Field" to the section at `parent_path`."""
    parent = as_path(parent_path)
    node = resolve(blocks, parent) if parent is not None else None
    if not isinstance(node, Section):
        logger.debug(f"add_field: parent path {parent} does not resolve to a section")
        return tuple(blocks)
    return insert(blocks, parent, new_field(level=node.level + 1))
