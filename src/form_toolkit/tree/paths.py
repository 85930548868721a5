"""
Module: tree.paths

Purpose:
    Positional addressing for blocks. A BlockPath is the sequence of
    1-based sibling indices from the root to a node; its text form is
    the dotted number shown next to section and field titles ("2.1.3").

Key Classes:
    - BlockPath: Immutable path value

Key Functions:
    - compute_path(): Dotted path of a block found by identifier
    - path_of(): BlockPath of a block found by identifier
    - iter_with_paths(): Pre-order walk yielding (path, block)
    - number_blocks(): Identifier -> dotted number for a whole tree
    - parse_indices(): Dotted text -> raw integer indices

Dependencies:
    - core.models.blocks

Used By:
    - tree.operations: Path-addressed edits
    - builder.layout.composer: Section/field numbering

Design Notes:
    Paths are derived from sibling order and never stored. Swapping two
    siblings swaps their paths while identifiers stay put.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence, Tuple

from form_toolkit.core.models.blocks import Block


def parse_indices(text: str) -> Tuple[int, ...]:
    """
    Split a dotted path into integers without range checks.

    Raises:
        ValueError: If a segment is not an integer
    """
    text = text.strip()
    if not text:
        return ()
    return tuple(int(part) for part in text.split("."))


@dataclass(frozen=True)
class BlockPath:
    """
    Position of a block in a tree (immutable).

    Attributes:
        indices: 1-based sibling index at each level, root first.
            Empty for the root itself.

    Example:
        >>> p = BlockPath.parse("2.1")
        >>> str(p.child(3))
        '2.1.3'
        >>> str(p.parent)
        '2'
    """

    indices: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        for i in self.indices:
            if i < 1:
                raise ValueError(f"Path indices are 1-based: {self.indices}")

    @classmethod
    def parse(cls, text: str) -> BlockPath:
        """
        Parse a dotted path like "2.1.3". An empty string is the root.

        Raises:
            ValueError: If a segment is not a positive integer
        """
        try:
            return cls(parse_indices(text))
        except ValueError as e:
            raise ValueError(f"Invalid block path {text.strip()!r}") from e

    @classmethod
    def of(cls, *indices: int) -> BlockPath:
        return cls(tuple(indices))

    @property
    def is_root(self) -> bool:
        return not self.indices

    @property
    def depth(self) -> int:
        """Number of levels below the root (a root section has depth 1)."""
        return len(self.indices)

    @property
    def last(self) -> int:
        """Sibling index of the addressed node."""
        if not self.indices:
            raise ValueError("The root path has no sibling index")
        return self.indices[-1]

    @property
    def parent(self) -> BlockPath:
        """Path of the containing node (the root path for root blocks)."""
        return BlockPath(self.indices[:-1])

    def child(self, index: int) -> BlockPath:
        return BlockPath(self.indices + (index,))

    def sibling(self, offset: int) -> BlockPath:
        """
        Path of the sibling `offset` positions away.

        Raises:
            ValueError: If the result would fall before the first sibling
        """
        return BlockPath(self.indices[:-1] + (self.last + offset,))

    def __str__(self) -> str:
        return ".".join(str(i) for i in self.indices)

    def __repr__(self) -> str:
        return f"BlockPath({str(self)!r})"


def iter_with_paths(
    blocks: Sequence[Block],
    prefix: BlockPath = BlockPath(),
) -> Iterator[Tuple[BlockPath, Block]]:
    """
    Walk a block sequence in display order, yielding each block's path.

    Args:
        blocks: Sibling sequence to walk
        prefix: Path of the node that owns `blocks`

    Yields:
        (BlockPath, Block) pairs, parents before children
    """
    for i, block in enumerate(blocks, 1):
        path = prefix.child(i)
        yield path, block
        if block.children:
            yield from iter_with_paths(block.children, path)


def path_of(blocks: Sequence[Block], block_id: str) -> Optional[BlockPath]:
    """Find the current path of the block with `block_id`, or None."""
    for path, block in iter_with_paths(blocks):
        if block.id == block_id:
            return path
    return None


def compute_path(blocks: Sequence[Block], block_id: str) -> Optional[str]:
    """
    Dotted display number of a block in the current tree shape.

    Example:
        >>> compute_path(form.blocks, field_y.id)
        '2.1'
    """
    path = path_of(blocks, block_id)
    return str(path) if path is not None else None


def number_blocks(blocks: Sequence[Block]) -> Dict[str, str]:
    """Map every block identifier to its dotted number."""
    return {block.id: str(path) for path, block in iter_with_paths(blocks)}
