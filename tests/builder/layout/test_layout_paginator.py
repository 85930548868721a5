"""
Unit Tests for Pagination

Uses hand-built rows with round heights so page arithmetic is exact.
Default A4 geometry: content runs from 50mm (with header) or 15mm
(without) down to 274mm.
"""

import pytest

from form_toolkit.builder.layout import (
    ColumnSizing,
    LayoutConfig,
    LayoutRow,
    PageHeader,
    RowKind,
    compose_rows,
    finalize_footers,
    paginate,
)

HEADER = PageHeader(company_name="Acme", title_line="Form (Rev. 1.0)")
SIZING = ColumnSizing(label_fraction=0.35, label_width=63.0, value_width=117.0)


def section_row(block_id, height=5.0):
    return LayoutRow(RowKind.SECTION, block_id, 1, "1", height, 13.0, height)


def field_row(block_id, lines=1, line_height=5.0, padding=2.0, value_lines=None):
    label = tuple(f"label {i}" for i in range(lines))
    return LayoutRow(
        RowKind.FIELD,
        block_id,
        2,
        "1.1",
        lines * line_height + 2 * padding,
        10.0,
        line_height,
        padding=padding,
        label_lines=label,
        value_lines=value_lines if value_lines is not None else ("value",),
    )


def run(rows, config=None, header_on_all_pages=False):
    return paginate(
        rows,
        config or LayoutConfig(),
        header=HEADER,
        header_on_all_pages=header_on_all_pages,
        column_sizing=SIZING,
    )


def filler(total, count=8):
    """Field rows adding up to `total` mm."""
    each = total / count
    return [field_row(f"fill{i}", line_height=each - 4.0) for i in range(count)]


class TestHeaderPolicy:
    def test_first_page_always_has_header(self):
        result = run([section_row("s"), field_row("f")])

        page = result.pages[0]
        assert page.has_header
        assert page.content_top == pytest.approx(50.0)
        assert page.placements[0].top == pytest.approx(50.0)

    @pytest.mark.parametrize("header_on_all_pages", [True, False])
    def test_header_repeats_iff_flag_set(self, header_on_all_pages):
        rows = [field_row(f"f{i}", line_height=40.0) for i in range(12)]

        result = run(rows, header_on_all_pages=header_on_all_pages)

        assert result.page_count > 1
        for page in result.pages[1:]:
            assert page.has_header is header_on_all_pages
            expected_top = 50.0 if header_on_all_pages else 15.0
            assert page.content_top == pytest.approx(expected_top)


class TestSectionThreshold:
    """A section row starts a new page when less than the threshold remains."""

    def _rows(self):
        # 224mm available on page 1; filler leaves 40mm
        return filler(184.0) + [section_row("late"), field_row("after")]

    def test_when_remaining_below_threshold_then_section_moves(self):
        config = LayoutConfig(section_break_threshold=50.0)

        result = run(self._rows(), config)

        assert result.page_count == 2
        assert result.pages_for("late") == (1,)
        assert result.pages[1].placements[0].row.block_id == "late"

    def test_when_remaining_above_threshold_then_section_stays(self):
        config = LayoutConfig(section_break_threshold=20.0)

        result = run(self._rows(), config)

        assert result.page_count == 1
        assert result.pages_for("late") == (0,)

    @pytest.mark.parametrize("header_on_all_pages", [True, False])
    def test_broken_section_page_repeats_header_iff_flag(self, header_on_all_pages):
        config = LayoutConfig(section_break_threshold=50.0)

        result = run(self._rows(), config, header_on_all_pages=header_on_all_pages)

        new_page = result.pages[1]
        assert new_page.has_header is header_on_all_pages
        assert new_page.placements[0].top == pytest.approx(config.content_top(header_on_all_pages))


class TestAtomicHeaders:
    def test_section_moves_with_first_field_line(self):
        # 12mm left: section (5) + spacing (4) fits, its field (9) does not
        rows = filler(212.0) + [section_row("s"), field_row("f")]

        result = run(rows, LayoutConfig(section_break_threshold=0.0))

        assert result.pages_for("s") == (1,)
        assert result.pages_for("f") == (1,)

    def test_no_page_ends_with_a_header_row(self, long_form):
        config = LayoutConfig()
        rows = compose_rows(long_form.blocks, {}, config)

        result = run(rows, config)

        assert result.page_count > 1
        for page in result.pages:
            assert page.placements[-1].row.kind == RowKind.FIELD

    def test_every_row_placed_exactly_once(self, long_form):
        config = LayoutConfig()
        rows = compose_rows(long_form.blocks, {}, config)

        result = run(rows, config)

        assert result.total_placements == len(rows)
        assert all(p.bottom <= config.content_bottom + 1e-6 for page in result.pages for p in page.placements)


class TestFieldSplitting:
    def test_tall_field_splits_line_by_line(self):
        # 30mm left; 10-line field of 54mm fits 5 lines here
        rows = filler(194.0, count=1) + [field_row("big", lines=10, value_lines=("a", "b", "c"))]

        result = run(rows)

        assert result.page_count == 2
        assert result.pages_for("big") == (0, 1)
        head = result.pages[0].placements[-1].row
        tail = result.pages[1].placements[0].row
        assert len(head.label_lines) == 5
        assert head.value_lines == ("a", "b", "c")
        assert not head.continued
        assert tail.label_lines == tuple(f"label {i}" for i in range(5, 10))
        assert tail.value_lines == ()
        assert tail.continued

    def test_single_line_field_moves_whole(self):
        rows = filler(220.0) + [field_row("f")]

        result = run(rows)

        assert result.pages_for("f") == (1,)

    def test_oversized_header_chain_warns(self):
        rows = [section_row("huge", height=500.0), field_row("f")]

        result = run(rows)

        assert any("overflows" in w for w in result.warnings)


class TestFooters:
    def test_footers_numbered_after_pagination(self):
        rows = [field_row(f"f{i}", line_height=40.0) for i in range(12)]
        result = finalize_footers(run(rows), legal_text="Confidential")

        labels = [page.footer.label for page in result.pages]
        assert labels == [f"Page {n} of {result.page_count}" for n in range(1, result.page_count + 1)]
        assert all(page.footer.legal_text == "Confidential" for page in result.pages)


class TestEdgeCases:
    def test_empty_rows_give_one_empty_page(self):
        result = run([])
        assert result.page_count == 1
        assert result.pages[0].is_empty
        assert result.pages[0].has_header

    def test_existing_warnings_are_kept(self):
        result = paginate(
            [],
            LayoutConfig(),
            header=HEADER,
            header_on_all_pages=False,
            column_sizing=SIZING,
            warnings=["earlier"],
        )
        assert result.warnings == ("earlier",)

    def test_result_collections_are_read_only(self):
        # Arrange
        rows = [section_row("s"), field_row("f")]

        # Act
        result = run(rows)

        # Assert
        assert isinstance(result.warnings, tuple)
        assert result.pages_for("f") == (0,)
        with pytest.raises(TypeError):
            result.block_page_map["f"] = (5,)

    def test_result_copies_caller_lists(self):
        warnings = ["earlier"]
        result = paginate(
            [],
            LayoutConfig(),
            header=HEADER,
            header_on_all_pages=False,
            column_sizing=SIZING,
            warnings=warnings,
        )

        warnings.append("later")

        assert result.warnings == ("earlier",)
