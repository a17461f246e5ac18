"""
Unit tests for the span claim tracker.
"""

import logging

import pytest

from pdftable.core.models import GridCoordinate
from pdftable.layout.claims import SpanClaimTracker


class TestSpanClaimTracker:
    """Tests for sequential placement and span claims."""

    def test_place_when_single_cells_then_left_to_right(self):
        tracker = SpanClaimTracker(columns=3)
        anchors = [tracker.place() for _ in range(3)]
        assert anchors == [GridCoordinate(0, 0), GridCoordinate(1, 0), GridCoordinate(2, 0)]
        assert len(tracker) == 0

    @pytest.mark.parametrize("col_span, row_span", [(1, 1), (2, 1), (1, 3), (2, 2), (3, 4)])
    def test_place_when_spanning_then_claims_area_minus_anchor(self, col_span, row_span):
        # Arrange
        tracker = SpanClaimTracker(columns=5)

        # Act
        anchor = tracker.place(col_span, row_span)

        # Assert
        assert len(tracker) == col_span * row_span - 1
        assert anchor not in tracker

    def test_place_when_slot_claimed_then_skips_it(self):
        # Arrange: a 2x2 cell at (0,0) followed by two single cells
        tracker = SpanClaimTracker(columns=4)
        tracker.place(2, 2)
        tracker.place()
        tracker.place()

        # Act: next row starts under the spanning cell
        tracker.begin_row(1)
        anchor = tracker.place()

        # Assert
        assert anchor == GridCoordinate(2, 1)
        assert tracker.claims == {GridCoordinate(1, 0), GridCoordinate(0, 1), GridCoordinate(1, 1)}

    def test_place_when_column_count_exceeded_then_wraps(self):
        tracker = SpanClaimTracker(columns=2)
        anchors = [tracker.place() for _ in range(3)]
        assert anchors[2] == GridCoordinate(0, 1)
        assert tracker.max_row == 1

    def test_place_when_claimed_tail_of_row_then_wraps_past_it(self):
        # Arrange
        tracker = SpanClaimTracker(columns=2)
        tracker.place()
        tracker.place(1, 2)
        tracker.begin_row(1)
        tracker.place()

        # Act: (1,1) is claimed, so the next free slot is on row 2
        anchor = tracker.place()

        # Assert
        assert anchor == GridCoordinate(0, 2)

    def test_place_when_columns_unknown_then_never_wraps(self):
        tracker = SpanClaimTracker()
        anchors = [tracker.place() for _ in range(10)]
        assert anchors[-1] == GridCoordinate(9, 0)

    def test_claim_when_overlapping_then_earlier_owner_kept_and_warns(self, caplog):
        # Arrange
        tracker = SpanClaimTracker(columns=3)
        tracker.claim(GridCoordinate(0, 0), 2, 2)

        # Act
        with caplog.at_level(logging.WARNING):
            added = tracker.claim(GridCoordinate(0, 1), 2, 1)

        # Assert
        assert added == 0
        assert "already claimed" in caplog.text
        assert len(tracker) == 3

    def test_claims_when_placed_then_never_released(self):
        tracker = SpanClaimTracker(columns=2)
        tracker.place(1, 3)
        before = tracker.claims
        tracker.begin_row(1)
        tracker.place()
        tracker.begin_row(2)
        tracker.place()
        assert before <= tracker.claims

    def test_columns_when_non_positive_then_raises(self):
        tracker = SpanClaimTracker()
        with pytest.raises(ValueError, match="columns must be positive"):
            tracker.columns = 0

    def test_is_claimed_when_anchor_then_false(self):
        tracker = SpanClaimTracker(columns=2)
        tracker.place(2, 1)
        assert not tracker.is_claimed(0, 0)
        assert tracker.is_claimed(1, 0)
