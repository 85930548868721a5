"""
Tests for Locked File Helpers
"""

import json

import pytest

from form_toolkit.storage.file_locking import (
    locked_append_jsonl,
    locked_file,
    locked_read_json,
    locked_read_jsonl,
    locked_write_json,
)


class TestLockedJson:
    def test_write_creates_parent_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "doc.json"

        locked_write_json(path, {"k": "ø"})

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "ø"}
        assert locked_read_json(path) == {"k": "ø"}

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            locked_read_json(tmp_path / "missing.json")


class TestJsonl:
    def test_append_then_read_in_order(self, tmp_path):
        path = tmp_path / "log.jsonl"

        locked_append_jsonl(path, {"n": 1})
        locked_append_jsonl(path, {"n": 2})

        assert locked_read_jsonl(path) == [{"n": 1}, {"n": 2}]

    def test_read_missing_file_is_empty(self, tmp_path):
        assert locked_read_jsonl(tmp_path / "none.jsonl") == []

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "log.jsonl"
        path.write_text('{"n": 1}\n\n{"n": 2}\n', encoding="utf-8")
        assert len(locked_read_jsonl(path)) == 2


class TestLockedFile:
    def test_yields_writable_handle(self, tmp_path):
        path = tmp_path / "x.txt"
        with locked_file(path, "w") as f:
            f.write("hello")
        assert path.read_text(encoding="utf-8") == "hello"
