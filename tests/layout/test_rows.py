"""
Unit tests for the row height and pagination engine.

Uses the fake document from conftest: 600x800 page, 50pt margins (safe
content height 700, safe bottom 750), 10pt font where each glyph is 5pt
wide and each line 10pt tall.
"""

import logging
from unittest.mock import patch

import pytest

from pdftable.core.errors import RowOrderError
from pdftable.core.models import Alignment, CellStyle, ContentSize, FontSpec, Sides
from pdftable.layout.columns import ColumnSpec, solve_column_widths
from pdftable.layout.rows import RowEngine, RowSpec, text_constraints

AUTO = RowSpec()


@pytest.fixture
def columns():
    """Three 100pt columns starting at x=50."""
    return solve_column_widths([ColumnSpec(width=100)] * 3, 300, origin_x=50)


@pytest.fixture
def engine_factory(document, columns):
    def _create(top: float = 50):
        return RowEngine(document, columns, top)
    return _create


def cell(content=None, row=0, col=0, row_span=1, col_span=1, **kwargs) -> CellStyle:
    return CellStyle(
        content=content,
        row_index=row,
        col_index=col,
        row_span=row_span,
        col_span=col_span,
        **kwargs,
    )


def lines(count: int) -> str:
    """Content that wraps to exactly `count` lines in a 100pt column."""
    return "x" * (20 * count)


class TestRowSpec:
    def test_clamp_when_bounds_then_applied(self):
        spec = RowSpec(min_height=10, max_height=20)
        assert spec.clamp(5) == 10
        assert spec.clamp(25) == 20
        assert RowSpec().clamp(500) == 500

    def test_init_when_negative_then_raises(self):
        with pytest.raises(ValueError, match="min_height"):
            RowSpec(min_height=-1)


class TestAutoHeight:
    """Tests for automatic row heights."""

    def test_when_non_spanning_cells_then_max_content_plus_padding(self, engine_factory):
        # Arrange
        engine = engine_factory()
        engine.admit([
            cell("abc", col=0, padding=Sides(2, 0, 3, 0)),  # 10 + 5
            cell(lines(3), col=1),                          # 30
            cell("", col=2),                                # no content
        ])

        # Act
        row = engine.measure(0, AUTO)

        # Assert
        assert row.height == 30
        assert [c.height for c in row.cells] == [30, 30, 30]
        assert row.y == 50
        assert not row.new_page

    def test_when_row_fully_spanned_then_zero_height(self, engine_factory):
        # Arrange
        engine = engine_factory()
        engine.admit([cell("a", col=0, row_span=2), cell("b", col=1)])
        engine.measure(0, AUTO)

        # Act
        row = engine.measure(1, AUTO)

        # Assert
        assert row.height == 0
        assert len(row.cells) == 1

    def test_when_spanned_row_has_min_height_then_min_wins(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a", row_span=2)])
        engine.measure(0, AUTO)
        assert engine.measure(1, RowSpec(min_height=12)).height == 12

    def test_when_span_concludes_then_only_increment_attributed(self, engine_factory):
        # Arrange
        engine = engine_factory()
        engine.admit([cell(lines(5), col=0, row_span=2), cell("b", col=1)])

        # Act
        first = engine.measure(0, AUTO)
        second = engine.measure(1, AUTO)

        # Assert
        assert first.height == 10
        assert second.height == 40
        spanning = second.cells[0]
        assert spanning.y == 50
        assert spanning.height == 50

    def test_when_max_height_then_clamped(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell(lines(3))])
        assert engine.measure(0, RowSpec(max_height=15)).height == 15

    def test_when_no_cells_then_zero(self, engine_factory):
        engine = engine_factory()
        assert engine.measure(0, AUTO).height == 0


class TestFixedHeight:
    def test_when_declared_then_used_regardless_of_content(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a"), cell(lines(6), col=1)])
        row = engine.measure(0, RowSpec(height=40))
        assert row.height == 40
        assert all(c.height == 40 for c in row.cells)

    def test_when_declared_then_positions_accumulate(self, engine_factory):
        engine = engine_factory(top=100)
        for index in range(3):
            engine.admit([cell("a", row=index)])
            engine.measure(index, RowSpec(height=20))
        assert engine.positions == (100, 120, 140)
        assert engine.heights == (20, 20, 20)


class TestPagination:
    """Tests for page moves and clamping."""

    def test_when_row_crosses_safe_bottom_then_new_page_at_top_margin(self, engine_factory):
        # Arrange
        engine = engine_factory(top=700)
        engine.admit([cell(lines(6))])  # 60pt, 700 + 60 > 750

        # Act
        row = engine.measure(0, AUTO)

        # Assert
        assert row.new_page
        assert row.y == 50
        assert row.page_index == 1
        assert row.cells[0].y == 50

    def test_when_row_ends_exactly_on_safe_bottom_then_stays(self, engine_factory):
        engine = engine_factory(top=700)
        engine.admit([cell(lines(5))])  # 700 + 50 == 750
        row = engine.measure(0, AUTO)
        assert not row.new_page
        assert row.y == 700

    def test_when_row_taller_than_page_then_clamped_to_remaining_space(self, engine_factory, caplog):
        # Arrange
        engine = engine_factory(top=100)
        engine.admit([cell("a")])

        # Act
        with caplog.at_level(logging.WARNING):
            row = engine.measure(0, RowSpec(height=900))

        # Assert
        assert row.clamped
        assert not row.new_page
        assert row.height == 650
        assert "safe page height" in caplog.text

    def test_when_next_row_after_move_then_follows_on_new_page(self, engine_factory):
        engine = engine_factory(top=700)
        engine.admit([cell(lines(6))])
        engine.measure(0, AUTO)
        engine.admit([cell("a", row=1)])
        row = engine.measure(1, AUTO)
        assert row.y == 110
        assert row.page_index == 1
        assert not row.new_page

    def test_when_span_concludes_on_new_page_then_box_covers_new_page_rows_only(self, engine_factory):
        # Arrange
        engine = engine_factory(top=700)
        engine.admit([cell("a", col=0, row_span=2), cell("b", col=1)])
        engine.measure(0, AUTO)
        engine.admit([cell(lines(5), row=1, col=1)])

        # Act
        row = engine.measure(1, AUTO)

        # Assert
        assert row.new_page
        spanning = next(c for c in row.cells if c.style.col_index == 0)
        assert spanning.y == 50
        assert spanning.height == row.height == 50


class TestMeasurementPasses:
    def test_when_row_measured_then_each_content_cell_measured_twice(self, document, engine_factory):
        # Arrange
        engine = engine_factory()
        engine.admit([cell("a"), cell("b", col=1), cell(None, col=2)])

        # Act
        with patch.object(document, "measure_text_block", wraps=document.measure_text_block) as measure:
            engine.measure(0, AUTO)

        # Assert
        assert measure.call_count == 4

    def test_when_provisional_pass_on_auto_row_then_page_height_allocated(self, document, engine_factory):
        # Arrange
        engine = engine_factory()
        engine.admit([cell("a")])

        # Act
        with patch.object(document, "measure_text_block", wraps=document.measure_text_block) as measure:
            row = engine.measure(0, AUTO)

        # Assert
        first, second = measure.call_args_list
        assert first.args[1].height == document.page.content_height
        assert second.args[1].height == row.height == 10

    def test_when_cell_measured_before_row_staged_then_placed_at_table_top(self, document, engine_factory):
        # Arrange
        engine = engine_factory(top=120)

        # Act
        sized = engine.measure_cell(cell("a"), None)

        # Assert
        assert sized.y == 120
        assert sized.height == document.page.content_height

    def test_when_cell_has_font_then_document_font_restored(self, document, engine_factory):
        engine = engine_factory()
        engine.admit([cell("abc", font=FontSpec(size=20))])
        row = engine.measure(0, AUTO)
        assert row.height == 20
        assert document.font == FontSpec("Helvetica", 10)


class TestOrderingAndFlush:
    def test_when_row_skipped_then_raises(self, engine_factory):
        engine = engine_factory()
        with pytest.raises(RowOrderError, match="expected row 0"):
            engine.measure(1, AUTO)

    def test_when_span_open_at_end_then_concludes_on_last_row(self, engine_factory, caplog):
        # Arrange
        engine = engine_factory()
        engine.admit([cell("a", col=0, row_span=3), cell("b", col=1)])
        engine.measure(0, AUTO)

        # Act
        with caplog.at_level(logging.WARNING):
            flushed = engine.flush()

        # Assert
        assert len(flushed) == 1
        assert flushed[0].style.row_span == 1
        assert flushed[0].height == engine.heights[0]
        assert engine.pending == ()
        assert "still spanning" in caplog.text

    def test_when_nothing_pending_then_flush_empty(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a")])
        engine.measure(0, AUTO)
        assert engine.flush() == ()


class TestCellGeometry:
    def test_when_spanning_columns_then_width_is_sum(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a", col=1, col_span=2, padding=Sides.all(4))])
        sized = engine.measure(0, AUTO).cells[0]
        assert (sized.x, sized.width) == (150, 200)
        assert (sized.content_x, sized.content_y) == (154, 54)
        assert sized.content_allocated_width == 192

    def test_when_span_past_last_column_then_existing_widths_only(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a", col=2, col_span=3)])
        assert engine.measure(0, AUTO).cells[0].width == 100

    def test_when_position_override_then_box_moved(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a", x=10.0, y=20.0)])
        sized = engine.measure(0, AUTO).cells[0]
        assert (sized.x, sized.y) == (10.0, 20.0)

    def test_when_rotated_quarter_turn_then_content_box_swapped(self, engine_factory):
        engine = engine_factory()
        engine.admit([cell("a", rotation=90)])
        sized = engine.measure(0, RowSpec(height=40)).cells[0]
        assert sized.content_max == ContentSize(40, 100)


class TestTextConstraints:
    def test_when_justify_then_passed_to_document(self):
        style = CellStyle(align=Alignment(x="justify"), text_stroke=1.0, rotation=30)
        constraints = text_constraints(style, ContentSize(80, 40))
        assert constraints.align == "justify"
        assert constraints.stroke
        assert (constraints.width, constraints.height, constraints.rotation) == (80, 40, 30)

    def test_when_other_alignment_then_left_to_engine(self):
        style = CellStyle(align=Alignment(x="right"))
        assert text_constraints(style, ContentSize(1, 1)).align is None
