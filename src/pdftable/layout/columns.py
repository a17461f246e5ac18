"""
Module: layout.columns

Purpose:
    Compute absolute column widths once the column count is known,
    distributing unclaimed width across star ("*") columns.

Key Classes:
    - ColumnSpec: Resolved column declaration (points)
    - ColumnLayout: Solved widths and x-positions

Key Functions:
    - solve_column_widths(): Main solver

Algorithm:
    1. Fixed columns take their width; the rest is "unclaimed"
    2. If the star columns' minimum widths already meet or exceed the
       unclaimed width, every star column gets exactly its minimum and the
       table overflows (logged)
    3. Otherwise star columns, in order, take unclaimed / stars_left,
       clamped to [min_width, max_width]; the taken width leaves the pool
       so later columns absorb what a clamped column did not use
    4. With no star columns, unclaimed width is left unused

Dependencies:
    - dataclasses (std)

Used By:
    - table.Table: Once per table (or on first-row column inference)
    - layout.rows: Cell widths and x-positions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """
    Resolved column declaration.

    Attributes:
        width: Fixed width in points, or None for star sizing
        min_width: Star lower bound
        max_width: Star upper bound (0 = unbounded)
    """

    width: Optional[float] = None
    min_width: float = 0.0
    max_width: float = 0.0

    def __post_init__(self) -> None:
        if self.width is not None and self.width < 0:
            raise ValueError(f"width must be non-negative: {self.width}")
        if self.min_width < 0:
            raise ValueError(f"min_width must be non-negative: {self.min_width}")
        if self.max_width < 0:
            raise ValueError(f"max_width must be non-negative: {self.max_width}")

    @property
    def is_star(self) -> bool:
        return self.width is None

    def clamp(self, width: float) -> float:
        """Clamp a proposed star width to this column's bounds."""
        width = max(width, self.min_width)
        if self.max_width > 0:
            width = min(width, self.max_width)
        return width


@dataclass(frozen=True)
class ColumnLayout:
    """
    Solved column geometry (immutable).

    Attributes:
        widths: Absolute width per column
        positions: Left x of each column (prefix sums from origin_x)
        origin_x: Table left edge
        nominal_width: Width the table was solved against
        overflow: Star minimums forced the table past its nominal width
        warnings: Degraded-mode messages raised while solving
    """

    widths: tuple[float, ...]
    positions: tuple[float, ...]
    origin_x: float = 0.0
    nominal_width: float = 0.0
    overflow: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.widths)

    @property
    def total_width(self) -> float:
        return sum(self.widths)

    def span_width(self, start: int, span: int) -> float:
        """Sum of widths of columns [start, start + span) that exist."""
        return sum(self.widths[start:start + span])

    def x_of(self, column: int) -> float:
        """Left x of `column`; columns past the end sit at the right edge."""
        if column < len(self.positions):
            return self.positions[column]
        return self.origin_x + self.total_width


def column_positions(widths: Sequence[float], origin_x: float = 0.0) -> tuple[float, ...]:
    """Running prefix sum of widths starting at origin_x."""
    positions: List[float] = []
    x = origin_x
    for width in widths:
        positions.append(x)
        x += width
    return tuple(positions)


def solve_column_widths(
    columns: Sequence[ColumnSpec],
    available_width: float,
    origin_x: float = 0.0,
) -> ColumnLayout:
    """
    Compute absolute widths for every column.

    Idempotent: the same inputs always give the same layout, so the
    session can simply re-run it if the column count changes.

    Args:
        columns: Resolved declaration per column
        available_width: Nominal table width in points
        origin_x: Table left edge

    Returns:
        ColumnLayout with widths and positions

    Example:
        >>> layout = solve_column_widths(
        ...     [ColumnSpec(width=100), ColumnSpec(), ColumnSpec()], 300
        ... )
        >>> layout.widths
        (100, 100.0, 100.0)
    """
    widths: List[float] = [0.0] * len(columns)
    warnings: List[str] = []
    star_indexes: List[int] = []
    star_min_total = 0.0
    unclaimed = available_width

    for i, col in enumerate(columns):
        if col.is_star:
            star_indexes.append(i)
            star_min_total += col.min_width
        else:
            widths[i] = col.width
            unclaimed -= col.width

    overflow = False
    if star_indexes and star_min_total >= unclaimed:
        # No page-width solution exists; render every star column at its floor.
        for i in star_indexes:
            widths[i] = columns[i].min_width
        overflow = star_min_total > unclaimed
        message = (
            f"Star columns need {star_min_total:.2f}pt minimum but only "
            f"{max(unclaimed, 0):.2f}pt is unclaimed, using minimum widths"
        )
        logger.warning(message)
        warnings.append(message)
    elif star_indexes:
        stars_left = len(star_indexes)
        for i in star_indexes:
            widths[i] = columns[i].clamp(unclaimed / stars_left)
            unclaimed -= widths[i]
            stars_left -= 1

    layout = ColumnLayout(
        widths=tuple(widths),
        positions=column_positions(widths, origin_x),
        origin_x=origin_x,
        nominal_width=available_width,
        overflow=overflow,
        warnings=tuple(warnings),
    )
    logger.info(
        f"Solved {layout.count} columns ({len(star_indexes)} star): "
        f"{layout.total_width:.2f}pt of {available_width:.2f}pt"
    )
    return layout
