"""
Module: layout.rows

Purpose:
    Finalise row heights in order, defer cells that span into later rows,
    and decide when a row has to move onto a new page.

Key Classes:
    - RowSpec: Resolved row sizing (points)
    - RowEngine: Per-table row state machine

Key Functions:
    - text_constraints(): Measurement constraints for a cell's content box

Algorithm (per row, strictly in order):
    1. Admit: the row's cells join the pending buffer, keyed by the row
       their span concludes on
    2. Resolve Y: previous row's Y plus its height
    3. Conclude: pending cells ending on this row are measured; each
       contributes its required height minus the rows it already covers
    4. Finalise: auto height is the largest contribution (0 if nothing
       concludes), else the declared height; clamp to min/max
    5. Paginate: a row taller than the safe page height is clamped to the
       space left on the page; a row crossing the safe bottom moves to the
       top margin of a new page
    6. Re-measure the concluding cells against the final height

    Exactly two measuring passes per row, never a loop to convergence.

Dependencies:
    - layout.columns: ColumnLayout
    - layout.rotation: compute_content_bounds
    - document.base: DocumentCollaborator, TextConstraints

Used By:
    - table.Table: One measure() per grid row, flush() at end
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from pdftable.core.errors import RowOrderError
from pdftable.core.models import CellStyle, ContentBounds, ContentSize, RowLayout, SizedCell
from pdftable.document.base import DocumentCollaborator, TextConstraints

from .columns import ColumnLayout
from .rotation import compute_content_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RowSpec:
    """
    Resolved row sizing.

    Attributes:
        height: Declared height in points, or None for auto
        min_height: Lower clamp
        max_height: Upper clamp (0 = unbounded)
    """

    height: Optional[float] = None
    min_height: float = 0.0
    max_height: float = 0.0

    def __post_init__(self) -> None:
        if self.height is not None and self.height < 0:
            raise ValueError(f"height must be non-negative: {self.height}")
        if self.min_height < 0:
            raise ValueError(f"min_height must be non-negative: {self.min_height}")
        if self.max_height < 0:
            raise ValueError(f"max_height must be non-negative: {self.max_height}")

    @property
    def is_auto(self) -> bool:
        return self.height is None

    def clamp(self, height: float) -> float:
        height = max(height, self.min_height)
        if self.max_height > 0:
            height = min(height, self.max_height)
        return height


def text_constraints(style: CellStyle, content_max: ContentSize) -> TextConstraints:
    """Constraints used both to measure and to draw a cell's content."""
    return TextConstraints(
        width=content_max.width,
        height=content_max.height,
        # Only justify is left to the document; other alignments are
        # applied as offsets inside the content box.
        align="justify" if style.align.x == "justify" else None,
        rotation=style.rotation,
        ellipsis=True,
        stroke=style.text_stroke > 0,
    )


class RowEngine:
    """
    Row height and pagination state for one table.

    Rows must be measured in increasing order starting at 0. Finalised
    heights and positions are kept for the table's lifetime so spanning
    cells can add up the rows they cover.

    Example:
        >>> engine = RowEngine(document, columns, top=72)
        >>> engine.admit(cells)
        >>> layout = engine.measure(0, RowSpec())
        >>> layout.new_page
        False
    """

    def __init__(self, document: DocumentCollaborator, columns: ColumnLayout, top: float):
        self._document = document
        self._columns = columns
        self._top = top
        self._heights: List[float] = []
        self._positions: List[float] = []
        self._pages: List[int] = []
        self._page_start = 0
        self._pending: Dict[int, List[CellStyle]] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def columns(self) -> ColumnLayout:
        return self._columns

    @columns.setter
    def columns(self, layout: ColumnLayout) -> None:
        self._columns = layout

    @property
    def heights(self) -> Tuple[float, ...]:
        """Finalised height of every measured row."""
        return tuple(self._heights)

    @property
    def positions(self) -> Tuple[float, ...]:
        """Top Y of every measured row (after page moves)."""
        return tuple(self._positions)

    @property
    def next_row(self) -> int:
        return len(self._heights)

    @property
    def page_index(self) -> int:
        """Page of the last measured row, relative to the table's first page."""
        return self._pages[-1] if self._pages else 0

    @property
    def pending(self) -> Tuple[CellStyle, ...]:
        """Cells admitted but not yet concluded."""
        return tuple(cell for row in sorted(self._pending) for cell in self._pending[row])

    # ─────────────────────────────────────────────────────────────────────────
    # Row state machine
    # ─────────────────────────────────────────────────────────────────────────

    def admit(self, cells: Iterable[CellStyle]) -> None:
        """Buffer cells until the row their span concludes on."""
        for cell in cells:
            self._pending.setdefault(cell.last_row, []).append(cell)

    def measure(self, row_index: int, spec: RowSpec) -> RowLayout:
        """
        Finalise one row.

        Args:
            row_index: Grid row, must equal next_row
            spec: Resolved sizing for the row

        Returns:
            RowLayout holding the row geometry and its concluding cells

        Raises:
            RowOrderError: If rows are not measured in order
        """
        if row_index != self.next_row:
            raise RowOrderError(self.next_row, row_index)

        page = self._document.page
        y = self._top if row_index == 0 else self._positions[-1] + self._heights[-1]
        page_index = self.page_index

        # Stage the row so spanning cells can see its position
        self._heights.append(0.0)
        self._positions.append(y)
        self._pages.append(page_index)

        concluding = self._pending.pop(row_index, [])
        provisional = spec.height if not spec.is_auto else None
        first_pass = [self.measure_cell(cell, provisional) for cell in concluding]
        height = self._finalize_height(row_index, spec, first_pass)

        new_page = False
        clamped = False
        if height > page.content_height:
            clamped = True
            remaining = max(page.max_y - y, 0.0)
            logger.warning(
                f"Row {row_index} needs {height:.2f}pt, more than the safe page height "
                f"{page.content_height:.2f}pt, clamping to {remaining:.2f}pt"
            )
            height = remaining
        elif y + height > page.max_y:
            new_page = True
            y = page.margin_top
            page_index += 1
            self._page_start = row_index
            self._positions[-1] = y
            self._pages[-1] = page_index
            # Spans started on the previous page no longer share this
            # row's height with rows above it
            height = self._finalize_height(row_index, spec, first_pass)
            if height > page.content_height:
                clamped = True
                logger.warning(
                    f"Row {row_index} needs {height:.2f}pt on a fresh page, "
                    f"clamping to {page.content_height:.2f}pt"
                )
                height = page.content_height
            logger.info(f"Row {row_index} moved to page {page_index} at y={y:.2f}")

        self._heights[-1] = height
        logger.debug(
            f"Row {row_index}: y={y:.2f} height={height:.2f} "
            f"({len(concluding)} concluding, {len(self._pending)} rows pending)"
        )

        cells = tuple(self.measure_cell(cell, height) for cell in concluding)
        return RowLayout(
            index=row_index,
            y=y,
            height=height,
            cells=cells,
            new_page=new_page,
            page_index=page_index,
            clamped=clamped,
        )

    def flush(self) -> Tuple[SizedCell, ...]:
        """
        Conclude every span still open at the last measured row.

        Their row span is truncated to end on the last row, which keeps
        its finalised height.
        """
        if not self._pending or not self._heights:
            return ()
        last_row = self.next_row - 1
        open_cells = self.pending
        self._pending.clear()
        logger.warning(
            f"{len(open_cells)} cell(s) still spanning past row {last_row} at table end, "
            f"concluding them on row {last_row}"
        )
        sized = []
        for cell in open_cells:
            start = min(cell.row_index, last_row)
            truncated = replace(cell, row_index=start, row_span=last_row - start + 1)
            sized.append(self.measure_cell(truncated, self._heights[last_row]))
        return tuple(sized)

    # ─────────────────────────────────────────────────────────────────────────
    # Cell measurement
    # ─────────────────────────────────────────────────────────────────────────

    def measure_cell(self, cell: CellStyle, row_height: Optional[float]) -> SizedCell:
        """
        Size a cell against the height of the row it concludes on.

        A cell whose row has not been staged by measure() yet is placed
        at the table top.

        Args:
            cell: Normalised cell concluding on a measured row
            row_height: Height of the concluding row, or None while it is
                still unknown (the page content height is used instead)

        Returns:
            SizedCell with box, content area and measured content bounds
        """
        document = self._document
        start = self._span_start(cell)

        width = self._columns.span_width(cell.col_index, cell.col_span)
        if row_height is None:
            height = document.page.content_height
        else:
            height = sum(self._heights[start:cell.last_row]) + row_height

        x = self._columns.x_of(cell.col_index) if cell.x is None else cell.x
        if cell.y is not None:
            y = cell.y
        elif start < len(self._positions):
            y = self._positions[start]
        else:
            # Row not staged yet: it would open at the table top
            y = self._top

        padding = cell.padding
        alloc_width = width - padding.horizontal
        alloc_height = height - padding.vertical
        content_max = compute_content_bounds(cell.rotation, alloc_width, alloc_height)

        bounds = ContentBounds()
        if cell.has_content:
            with document.using_font(cell.font):
                bounds = document.measure_text_block(cell.content, text_constraints(cell, content_max))

        return SizedCell(
            style=cell,
            x=x,
            y=y,
            width=width,
            height=height,
            content_x=x + padding.left,
            content_y=y + padding.top,
            content_allocated_width=alloc_width,
            content_allocated_height=alloc_height,
            content_max=content_max,
            content_bounds=bounds,
        )

    def _span_start(self, cell: CellStyle) -> int:
        """First row of the span that lies on the current page."""
        return max(cell.row_index, self._page_start)

    def _finalize_height(self, row_index: int, spec: RowSpec, measured: List[SizedCell]) -> float:
        if not spec.is_auto:
            return spec.clamp(spec.height)
        height = 0.0
        for sized in measured:
            covered = sum(self._heights[self._span_start(sized.style):row_index])
            height = max(height, sized.required_height - covered)
        return spec.clamp(height)
