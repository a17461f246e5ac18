"""
Module: layout.claims

Purpose:
    Track grid slots already covered by spanning cells and place new
    cells sequentially into the first free slot.

Key Classes:
    - SpanClaimTracker: Grows-only claim set plus a placement cursor

Algorithm:
    1. Scan left to right from the cursor, skipping claimed slots
    2. Wrap to column 0 of the next row once the column count is passed
       (no wrapping while the column count is still unknown)
    3. Anchor the cell, claim the rest of its span rectangle
    4. Advance the cursor by one column

Dependencies:
    - core.models.geometry: GridCoordinate

Used By:
    - table.Table: Cell placement
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Optional, Set

from pdftable.core.models import GridCoordinate

logger = logging.getLogger(__name__)


class SpanClaimTracker:
    """
    Grid claim set for one table session.

    The anchor slot of a placed cell is not stored: it is occupied by
    virtue of being the placement point, and the cursor has already moved
    past it. Claims are never released.

    Example:
        >>> tracker = SpanClaimTracker(columns=4)
        >>> tracker.place(col_span=2, row_span=2)
        GridCoordinate(column=0, row=0)
        >>> len(tracker)
        3
    """

    def __init__(self, columns: Optional[int] = None):
        self._columns = columns
        self._claims: Set[GridCoordinate] = set()
        self._cursor_column = 0
        self._cursor_row = 0
        self._max_row = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def columns(self) -> Optional[int]:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        if value <= 0:
            raise ValueError(f"columns must be positive: {value}")
        self._columns = value

    @property
    def claims(self) -> FrozenSet[GridCoordinate]:
        """Snapshot of every claimed (non-anchor) slot."""
        return frozenset(self._claims)

    @property
    def cursor(self) -> GridCoordinate:
        return GridCoordinate(self._cursor_column, self._cursor_row)

    @property
    def max_row(self) -> int:
        """Highest grid row an anchor has been placed on."""
        return self._max_row

    def __len__(self) -> int:
        return len(self._claims)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._claims

    def is_claimed(self, column: int, row: int) -> bool:
        return GridCoordinate(column, row) in self._claims

    # ─────────────────────────────────────────────────────────────────────────
    # Placement
    # ─────────────────────────────────────────────────────────────────────────

    def begin_row(self, row: int) -> None:
        """Move the cursor to column 0 of `row`."""
        self._cursor_column = 0
        self._cursor_row = row
        self._max_row = max(self._max_row, row)

    def next_free(self) -> GridCoordinate:
        """
        Advance the cursor to the first unclaimed slot and return it.

        Wraps to the next row once the known column count is exceeded;
        with no column count the scan stays on the cursor row.
        """
        while True:
            if self._columns and self._cursor_column >= self._columns:
                self._cursor_column = 0
                self._cursor_row += 1
            if not self.is_claimed(self._cursor_column, self._cursor_row):
                return self.cursor
            self._cursor_column += 1

    def claim(self, anchor: GridCoordinate, col_span: int, row_span: int) -> int:
        """
        Claim a span rectangle except its anchor.

        A slot already claimed by an earlier span keeps its owner.

        Args:
            anchor: Top-left slot of the span
            col_span: Columns covered
            row_span: Rows covered

        Returns:
            Number of slots newly claimed
        """
        added = 0
        for i in range(col_span):
            for j in range(row_span):
                if i == 0 and j == 0:
                    continue
                slot = GridCoordinate(anchor.column + i, anchor.row + j)
                if slot in self._claims:
                    logger.warning(
                        f"Cell at {anchor} overlaps slot {slot} already claimed by an earlier span"
                    )
                    continue
                self._claims.add(slot)
                added += 1
        return added

    def place(self, col_span: int = 1, row_span: int = 1) -> GridCoordinate:
        """
        Place one cell at the next free slot and claim its span.

        Returns:
            The anchor slot of the placed cell
        """
        anchor = self.next_free()
        self.claim(anchor, col_span, row_span)
        self._max_row = max(self._max_row, anchor.row)
        self._cursor_column += 1
        return anchor
