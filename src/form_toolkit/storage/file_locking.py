"""
Module: storage.file_locking

Purpose:
    Cross-platform file locking for the JSON store, so concurrent
    processes never read a half-written document.
    Uses portalocker for Mac, Windows, and Linux compatibility.

Key Functions:
    - locked_file: Context manager for locked file access
    - locked_read_json: Read a JSON document under a shared lock
    - locked_write_json: Write a JSON document under an exclusive lock
    - locked_append_jsonl: Append to JSONL with exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.json_store
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List

import portalocker

logger = logging.getLogger(__name__)


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.

    Example:
        >>> with locked_file(path, 'a') as f:
        ...     f.write('data')
    """
    if 'r' not in mode:
        path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


def locked_read_json(path: Path) -> Any:
    """
    Read a JSON document holding a shared lock.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the content is not JSON
    """
    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        return json.load(f)


def locked_write_json(path: Path, data: Any) -> None:
    """Replace a JSON document holding an exclusive lock."""
    with locked_file(path, 'w', portalocker.LOCK_EX) as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.debug(f"Wrote {path.name}")


def locked_append_jsonl(path: Path, record: Dict[str, Any]) -> None:
    """
    Append a record to JSONL file with exclusive lock.

    Safe for concurrent writers appending to the same log.

    Example:
        >>> locked_append_jsonl(submissions_path, submission.to_dict())
    """
    with locked_file(path, 'a', portalocker.LOCK_EX) as f:
        f.write(json.dumps(record, ensure_ascii=False) + '\n')

    logger.debug(f"Appended record to {path.name}")


def locked_read_jsonl(path: Path) -> List[Dict[str, Any]]:
    """Read every record of a JSONL file (empty list if it does not exist)."""
    if not path.exists():
        return []
    records = []
    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records
