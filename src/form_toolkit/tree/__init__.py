"""
Tree Package

Path addressing and pure edit operations for form block trees.
"""

from .paths import BlockPath, compute_path, iter_with_paths, number_blocks, path_of
from .operations import (
    LastRootSectionError,
    NestingDepthError,
    TreeEditError,
    add_field,
    add_section,
    insert,
    move,
    new_field,
    new_section,
    relevel,
    remove,
    resolve,
    update,
)

__all__ = [
    "BlockPath",
    "compute_path",
    "iter_with_paths",
    "number_blocks",
    "path_of",
    "LastRootSectionError",
    "NestingDepthError",
    "TreeEditError",
    "add_field",
    "add_section",
    "insert",
    "move",
    "new_field",
    "new_section",
    "relevel",
    "remove",
    "resolve",
    "update",
]
