"""
Unit Tests for Block Models

Tests for Section, Field and FieldKind.
"""

import pytest

from form_toolkit.core.models import (
    Field,
    FieldKind,
    Section,
    block_from_dict,
    iter_blocks,
    iter_fields,
)


class TestFieldKind:
    """Tests for FieldKind parsing."""

    def test_parse_when_known_tag_then_returns_kind(self):
        assert FieldKind.parse("multiCheckbox") == FieldKind.MULTI_CHOICE
        assert FieldKind.parse("checkbox") == FieldKind.BOOLEAN

    def test_parse_when_missing_tag_then_short_text(self):
        assert FieldKind.parse(None) == FieldKind.SHORT_TEXT
        assert FieldKind.parse("") == FieldKind.SHORT_TEXT

    def test_parse_when_unknown_tag_then_unknown(self):
        assert FieldKind.parse("rating") == FieldKind.UNKNOWN

    def test_has_choices_only_for_choice_kinds(self):
        choice_kinds = {k for k in FieldKind if k.has_choices}
        assert choice_kinds == {FieldKind.SINGLE_CHOICE, FieldKind.MULTI_CHOICE, FieldKind.DROPDOWN}

    def test_display_label_defined_for_every_kind(self):
        for kind in FieldKind:
            assert kind.display_label


class TestSection:
    """Tests for Section invariants."""

    def test_when_child_level_not_parent_plus_one_then_raises(self):
        with pytest.raises(ValueError, match="level"):
            Section("s", "S", level=1, children=(Field("f", "F", level=3),))

    def test_when_level_above_three_then_raises(self):
        with pytest.raises(ValueError):
            Section("s", "S", level=4)

    def test_when_child_not_block_then_raises(self):
        with pytest.raises(ValueError, match="non-block"):
            Section("s", "S", children=("oops",))

    def test_field_count_counts_nested_fields(self, nested_blocks):
        assert nested_blocks[0].field_count == 3

    def test_can_nest_section_only_below_level_three(self):
        assert Section("a", "A", level=2).can_nest_section
        assert not Section("b", "B", level=3).can_nest_section

    def test_find_when_nested_then_returns_block(self, nested_blocks):
        found = nested_blocks[0].find("f-deep")
        assert found is not None
        assert found.title == "Deep Field"

    def test_find_when_missing_then_none(self, nested_blocks):
        assert nested_blocks[0].find("nope") is None


class TestField:
    """Tests for Field."""

    def test_when_level_one_then_raises(self):
        with pytest.raises(ValueError):
            Field("f", "F", level=1)

    def test_children_always_empty(self):
        assert Field("f", "F").children == ()


class TestBlockSerialization:
    """Tests for to_dict / block_from_dict."""

    def test_round_trip_preserves_tree(self, nested_blocks):
        data = nested_blocks[0].to_dict()
        assert block_from_dict(data) == nested_blocks[0]

    def test_field_to_dict_uses_stored_keys(self):
        data = Field("f", "F", FieldKind.DROPDOWN, required=True, choices=("a", "b")).to_dict()
        assert data["type"] == "field"
        assert data["fieldType"] == "dropdown"
        assert data["choices"] == ["a", "b"]

    def test_unknown_kind_keeps_original_tag(self):
        data = {"id": "f", "type": "field", "title": "Stars", "fieldType": "rating", "level": 2}
        field = block_from_dict(data)
        assert field.kind == FieldKind.UNKNOWN
        assert field.to_dict()["fieldType"] == "rating"

    def test_when_field_has_children_then_raises(self):
        data = {
            "id": "f",
            "type": "field",
            "title": "F",
            "level": 2,
            "children": [{"id": "g", "type": "field", "title": "G", "level": 3}],
        }
        with pytest.raises(ValueError, match="children"):
            block_from_dict(data)

    def test_when_type_unknown_then_raises(self):
        with pytest.raises(ValueError, match="Unknown block type"):
            block_from_dict({"id": "x", "type": "table"})


class TestIteration:
    def test_iter_blocks_is_preorder(self, two_section_blocks):
        assert [b.id for b in iter_blocks(two_section_blocks)] == ["A", "X", "B", "Y"]

    def test_iter_fields_only_fields(self, nested_blocks):
        assert [f.id for f in iter_fields(nested_blocks)] == ["f-top", "f-mid", "f-deep", "f-second"]
