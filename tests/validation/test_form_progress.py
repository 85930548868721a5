"""
Unit Tests for Form Progress
"""

from form_toolkit.core.models import Field, Section
from form_toolkit.validation import form_progress, section_progress


def _form_with_required_sections():
    return (
        Section(
            "one",
            "One",
            children=(
                Field("a", "A", required=True),
                Field("b", "B", required=True),
            ),
        ),
        Section("two", "Two", children=(Field("c", "C", required=True),)),
    )


class TestSectionProgress:
    def test_when_untouched_then_not_complete(self, two_section_blocks):
        progress = section_progress(two_section_blocks[0], {})

        assert progress.is_valid  # no required fields
        assert not progress.has_any_data
        assert not progress.is_complete

    def test_when_optional_field_answered_then_complete(self, two_section_blocks):
        progress = section_progress(two_section_blocks[0], {"X": "done"})
        assert progress.is_complete

    def test_when_required_missing_then_invalid_even_with_data(self):
        blocks = _form_with_required_sections()
        progress = section_progress(blocks[0], {"a": "x"})

        assert progress.has_any_data
        assert not progress.is_valid
        assert not progress.is_complete

    def test_section_without_fields_never_complete(self):
        progress = section_progress(Section("e", "Empty"), {})
        assert progress.is_valid
        assert not progress.is_complete


class TestFormProgress:
    def test_one_of_two_sections_answered_is_fifty_percent(self):
        # Arrange
        blocks = _form_with_required_sections()
        answers = {"a": "x", "b": "y"}

        # Act
        progress = form_progress(blocks, answers)

        # Assert
        assert progress.percent_complete == 50.0
        assert progress.completed_count == 1
        assert not progress.is_valid

    def test_all_answered_is_hundred_percent(self):
        blocks = _form_with_required_sections()
        progress = form_progress(blocks, {"a": "x", "b": "y", "c": "z"})
        assert progress.percent_complete == 100.0
        assert progress.is_valid

    def test_empty_tree_is_zero(self):
        progress = form_progress((), {})
        assert progress.percent_complete == 0.0
        assert progress.sections == ()
