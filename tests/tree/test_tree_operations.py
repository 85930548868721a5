"""
Unit Tests for Tree Edit Operations

Tests for insert/update/remove/move and the editor shortcuts.
"""

from dataclasses import replace

import pytest

from form_toolkit.core.models import Field, FieldKind, Section, iter_blocks
from form_toolkit.tree import (
    LastRootSectionError,
    NestingDepthError,
    TreeEditError,
    add_field,
    add_section,
    compute_path,
    insert,
    iter_with_paths,
    move,
    new_field,
    new_section,
    relevel,
    remove,
    resolve,
    update,
)


def _ids(blocks):
    return [b.id for b in iter_blocks(blocks)]


class TestResolve:
    def test_when_path_valid_then_returns_block(self, nested_blocks):
        assert resolve(nested_blocks, "1.2.2.1").id == "f-deep"

    def test_when_index_out_of_range_then_none(self, nested_blocks):
        assert resolve(nested_blocks, "3") is None
        assert resolve(nested_blocks, "1.9") is None

    def test_when_path_descends_into_field_then_none(self, nested_blocks):
        assert resolve(nested_blocks, "1.1.1") is None

    def test_root_path_resolves_to_none(self, nested_blocks):
        assert resolve(nested_blocks, "") is None

    def test_accepts_index_sequence(self, nested_blocks):
        assert resolve(nested_blocks, (2, 1)).id == "f-second"


class TestInsert:
    def test_when_parent_root_then_appends_section(self, two_section_blocks):
        # Arrange
        section = Section("C", "Section C")

        # Act
        result = insert(two_section_blocks, "", section)

        # Assert
        assert [b.id for b in result] == ["A", "B", "C"]

    def test_inserted_block_takes_parent_level(self, two_section_blocks):
        result = insert(two_section_blocks, "1", Section("S", "Sub"))

        sub = resolve(result, "1.2")
        assert sub.id == "S"
        assert sub.level == 2

    def test_insert_at_position(self, two_section_blocks):
        result = insert(two_section_blocks, "1", Field("F0", "First"), position=1)

        assert [c.id for c in result[0].children] == ["F0", "X"]

    def test_when_position_out_of_range_then_raises(self, two_section_blocks):
        with pytest.raises(ValueError):
            insert(two_section_blocks, "1", Field("F0", "First"), position=5)

    def test_when_parent_is_field_then_unchanged(self, two_section_blocks):
        result = insert(two_section_blocks, "1.1", Field("F0", "First"))
        assert result == two_section_blocks

    def test_when_field_at_root_then_raises(self, two_section_blocks):
        with pytest.raises(TreeEditError):
            insert(two_section_blocks, "", Field("F0", "Loose"))

    def test_when_subtree_would_exceed_depth_then_raises(self, nested_blocks):
        deep = Section("n", "N", level=2, children=(Section("n2", "N2", level=3),))
        with pytest.raises(NestingDepthError):
            insert(nested_blocks, "1.2", deep)

    def test_input_is_not_modified(self, two_section_blocks):
        before = _ids(two_section_blocks)
        insert(two_section_blocks, "2", Field("Z", "Z"))
        assert _ids(two_section_blocks) == before

    def test_untouched_subtrees_are_shared(self, two_section_blocks):
        result = insert(two_section_blocks, "2", Field("Z", "Z"))
        assert result[0] is two_section_blocks[0]


class TestUpdate:
    def test_replaces_block_and_keeps_position(self, two_section_blocks):
        field = resolve(two_section_blocks, "2.1")
        renamed = replace(field, title="Renamed", required=True)

        result = update(two_section_blocks, "2.1", renamed)

        assert resolve(result, "2.1").title == "Renamed"
        assert resolve(result, "2.1").required

    def test_replacement_is_relevelled(self, two_section_blocks):
        result = update(two_section_blocks, "1.1", Field("X2", "Other", level=3))
        assert resolve(result, "1.1").level == 2

    def test_when_path_missing_then_unchanged(self, two_section_blocks):
        assert update(two_section_blocks, "4", Section("Q", "Q")) == two_section_blocks


class TestRemove:
    def test_removes_subtree(self, nested_blocks):
        result = remove(nested_blocks, "1.2")
        assert _ids(result) == ["s1", "f-top", "s2", "f-second"]

    def test_when_last_root_section_then_raises(self):
        only = (Section("A", "Only"),)
        with pytest.raises(LastRootSectionError):
            remove(only, "1")

    def test_when_several_roots_then_root_removable(self, two_section_blocks):
        result = remove(two_section_blocks, "1")
        assert [b.id for b in result] == ["B"]

    def test_last_field_of_section_is_removable(self):
        only = (Section("A", "Only", children=(Field("X", "X"),)),)
        result = remove(only, "1.1")
        assert result[0].children == ()

    def test_when_path_missing_then_unchanged(self, two_section_blocks):
        assert remove(two_section_blocks, "1.5") == two_section_blocks


class TestMove:
    def test_move_up_swaps_with_previous(self, two_section_blocks):
        result = move(two_section_blocks, "2", -1)
        assert [b.id for b in result] == ["B", "A"]

    def test_numbering_follows_new_order(self, two_section_blocks):
        # Arrange - [A[X], B[Y]]
        # Act
        result = move(two_section_blocks, "2", -1)

        # Assert - ids keep their blocks, numbers follow position
        assert compute_path(result, "B") == "1"
        assert compute_path(result, "Y") == "1.1"
        assert compute_path(result, "A") == "2"
        assert compute_path(result, "X") == "2.1"

    def test_when_first_moved_up_then_unchanged(self, two_section_blocks):
        assert move(two_section_blocks, "1", -1) == two_section_blocks

    def test_when_last_moved_down_then_unchanged(self, two_section_blocks):
        assert move(two_section_blocks, "2", 1) == two_section_blocks

    def test_when_direction_invalid_then_raises(self, two_section_blocks):
        with pytest.raises(ValueError):
            move(two_section_blocks, "1", 2)

    def test_move_within_nested_section(self, nested_blocks):
        result = move(nested_blocks, "1.2.1", 1)
        assert [c.id for c in resolve(result, "1.2").children] == ["s1.1.1", "f-mid"]

    def test_move_twice_restores_order(self, nested_blocks):
        result = move(move(nested_blocks, "1.1", 1), "1.2", -1)
        assert result == nested_blocks


class TestRelevel:
    def test_section_subtree_shifts_together(self):
        section = Section("s", "S", level=1, children=(Field("f", "F", level=2),))
        moved = relevel(section, 2)
        assert moved.level == 2
        assert moved.children[0].level == 3

    def test_when_section_above_three_then_raises(self):
        with pytest.raises(NestingDepthError) as exc_info:
            relevel(Section("s", "S"), 4)
        assert exc_info.value.level == 4


class TestEditorHelpers:
    def test_new_section_defaults(self):
        section = new_section()
        assert section.title == "New Section"
        assert section.children == ()
        assert section.id

    def test_new_field_defaults(self):
        field = new_field()
        assert field.title == "New Field"
        assert field.kind == FieldKind.SHORT_TEXT
        assert not field.required

    def test_new_blocks_get_distinct_ids(self):
        assert new_field().id != new_field().id

    def test_add_section_at_root(self, two_section_blocks):
        result = add_section(two_section_blocks)
        assert len(result) == 3
        assert result[2].title == "New Section"
        assert result[2].level == 1

    def test_add_section_nested(self, nested_blocks):
        result = add_section(nested_blocks, "1.2")
        added = resolve(result, "1.2.3")
        assert isinstance(added, Section)
        assert added.level == 3

    def test_add_section_under_level_three_then_raises(self, nested_blocks):
        with pytest.raises(NestingDepthError):
            add_section(nested_blocks, "1.2.2")

    def test_add_field_under_level_three_section(self, nested_blocks):
        result = add_field(nested_blocks, "1.2.2")
        added = resolve(result, "1.2.2.2")
        assert isinstance(added, Field)
        assert added.level == 4

    def test_add_field_when_parent_is_field_then_unchanged(self, nested_blocks):
        assert add_field(nested_blocks, "1.1") == nested_blocks


class TestNonPositiveIndices:
    """Indices below 1 address nothing; edits leave the tree alone."""

    def test_resolve_zero_index_then_none(self, two_section_blocks):
        assert resolve(two_section_blocks, (0,)) is None
        assert resolve(two_section_blocks, "1.0") is None

    def test_resolve_negative_index_then_none(self, two_section_blocks):
        assert resolve(two_section_blocks, (1, -1)) is None

    def test_remove_zero_path_then_unchanged(self, two_section_blocks):
        assert remove(two_section_blocks, "0") == two_section_blocks

    def test_move_zero_index_then_unchanged(self, two_section_blocks):
        assert move(two_section_blocks, (1, 0), 1) == two_section_blocks

    def test_update_zero_index_then_unchanged(self, two_section_blocks):
        assert update(two_section_blocks, (0,), Section("Q", "Q")) == two_section_blocks

    def test_insert_under_zero_index_then_unchanged(self, two_section_blocks):
        assert insert(two_section_blocks, "0", Field("Z", "Z")) == two_section_blocks

    def test_editor_helpers_ignore_zero_index(self, two_section_blocks):
        assert add_section(two_section_blocks, (0,)) == two_section_blocks
        assert add_field(two_section_blocks, "0") == two_section_blocks

    def test_when_not_numeric_then_still_raises(self, two_section_blocks):
        with pytest.raises(ValueError, match="Invalid block path"):
            resolve(two_section_blocks, "abc")


class TestEditProperties:
    """Properties that hold for every path in the sample trees."""

    def _all_paths(self, blocks):
        return [path for path, _ in iter_with_paths(blocks)]

    def test_resolve_after_update_returns_replacement(self, nested_blocks):
        for path in self._all_paths(nested_blocks):
            current = resolve(nested_blocks, path)
            replacement = replace(current, title=f"Edited {path}")

            result = update(nested_blocks, path, replacement)

            assert resolve(result, path) == replacement

    def test_insert_then_remove_restores_sibling_count(self, nested_blocks):
        parent = resolve(nested_blocks, "1.2")
        inserted = insert(nested_blocks, "1.2", new_field(), position=1)

        result = remove(inserted, "1.2.1")

        assert len(resolve(result, "1.2").children) == len(parent.children)
        assert result == nested_blocks

    def test_move_down_then_up_restores_order_for_interior_indices(self):
        section = Section(
            "S",
            "S",
            children=tuple(Field(f"f{i}", f"F{i}") for i in range(1, 5)),
        )
        blocks = (section,)
        for index in range(1, 4):
            moved = move(blocks, f"1.{index}", 1)
            restored = move(moved, f"1.{index + 1}", -1)
            assert restored == blocks

    def test_failed_root_delete_leaves_tree_unchanged(self):
        only = (Section("A", "Only", children=(Field("X", "X"),)),)
        snapshot = only
        with pytest.raises(LastRootSectionError):
            remove(only, "1")
        assert only == snapshot
        assert len(only) == 1

    def test_root_delete_reduces_root_count_by_one(self, nested_blocks):
        assert len(remove(nested_blocks, "2")) == len(nested_blocks) - 1
