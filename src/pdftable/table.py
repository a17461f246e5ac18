"""
Module: pdftable.table

Purpose:
    Table session: accepts rows of cell declarations, lays them out and
    draws them into the document as they arrive.
    Normalise → Place → Solve columns → Measure rows → Draw

Key Classes:
    - Table: One table's mutable layout state

Dependencies:
    - pdftable.layout: Styles, claims, columns, rows
    - pdftable.output: Row drawing, border policy
    - pdftable.document.base: DocumentCollaborator

Used By:
    - scripts/generate_sample_tables.py
    - Library callers
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from pdftable.core.errors import TableError
from pdftable.core.models import AUTO, STAR, CellStyle, GridCoordinate, RowLayout, Sides, TableSpec
from pdftable.document.base import DocumentCollaborator
from pdftable.layout.claims import SpanClaimTracker
from pdftable.layout.columns import ColumnLayout, ColumnSpec, solve_column_widths
from pdftable.layout.rows import RowEngine, RowSpec
from pdftable.layout.sides import normalize_sides
from pdftable.layout.styles import coerce_declaration, merge_declarations, normalize_cell, span_extents
from pdftable.output.borders import draw_border, plan_border
from pdftable.output.renderer import render_row

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "pdftable"


class _WarningCollector(logging.Handler):
    """Copy warning records into a list."""

    def __init__(self, sink: List[str]):
        super().__init__(level=logging.WARNING)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        self._sink.append(record.getMessage())


class Table:
    """
    Table session bound to one document.

    Rows are laid out and drawn immediately; the session keeps only what
    later rows need (claims, spans in flight, row heights).

    Attributes:
        document: Collaborator the table draws into
        spec: Table configuration
        x, y: Top-left corner of the table
        width: Nominal table width
        height: Nominal table height
        rows: Every finalised grid row, in order
        structure: Per-row cell metadata for tagged output
        warnings: Degraded-mode warnings raised during the session

    Example:
        >>> table = Table(doc, TableSpec(column_styles=[100, "*", "*"]))
        >>> table.row(["A", "B", "C"])
        >>> table.row([{"value": "D", "col_span": 2}, "E"])
        >>> table.end()
    """

    def __init__(self, document: DocumentCollaborator, spec: Optional[TableSpec] = None, **options: Any):
        self.document = document
        self.spec = spec if spec is not None else TableSpec(**options)
        self.rows: List[RowLayout] = []
        self.structure: List[List[Dict[str, Any]]] = []
        self.warnings: List[str] = []
        self._claims = SpanClaimTracker(self.spec.cols)
        self._columns: Optional[ColumnLayout] = None
        self._engine: Optional[RowEngine] = None
        self._next_row = 0
        self._ended = False

        with self._collecting_warnings():
            spec = self.spec
            page = document.page
            self.x = document.resolve_size(spec.x, document.x)
            self.y = document.resolve_size(spec.y, document.y)
            if spec.width is not None:
                self.width = document.resolve_size(spec.width, percent_of=page.content_width)
            elif spec.cell_width is not None and spec.cols:
                self.width = document.resolve_size(spec.cell_width) * spec.cols
            else:
                self.width = page.max_x - self.x
            if spec.height is not None:
                self.height = document.resolve_size(spec.height, percent_of=page.content_height)
            else:
                self.height = page.max_y - self.y

            self.border = normalize_sides(spec.border, 0, document.resolve_size)
            self.border_color = normalize_sides(spec.border_color)
            self._bottom = self.y

            if spec.cols:
                self._ensure_columns(spec.cols)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def columns(self) -> Optional[ColumnLayout]:
        """Solved column layout, None until the column count is known."""
        return self._columns

    @property
    def bottom(self) -> float:
        """Bottom Y reached by the last drawn row."""
        return self._bottom

    @property
    def claims(self) -> SpanClaimTracker:
        return self._claims

    # ─────────────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────────────

    def row(self, cells: Iterable[Any], default_cell: Optional[Mapping[str, Any]] = None) -> float:
        """
        Lay out and draw one row of cells.

        Cells past the column count wrap onto following grid rows; every
        grid row touched is measured and drawn before returning.

        Args:
            cells: Cell declarations (mappings or bare values)
            default_cell: Declaration applied to every cell of this row

        Returns:
            Bottom Y coordinate reached

        Raises:
            TableError: If the table has already ended
        """
        if self._ended:
            raise TableError("Cannot add rows to a table that has ended")

        with self._collecting_warnings():
            declarations = [coerce_declaration(cell) for cell in cells]
            start = self._next_row
            row_style = self.spec.row_style(start)

            # Spans are needed before placement; the column is not known yet
            extents = [
                span_extents(merge_declarations(
                    self.spec.default_cell, row_style.cell, default_cell, declaration,
                ))
                for declaration in declarations
            ]

            if self._columns is None:
                inferred = sum(col_span for col_span, _ in extents)
                if inferred == 0:
                    logger.debug("Skipping empty row: column count still unknown")
                    return self._bottom
                self._ensure_columns(inferred)

            self._claims.begin_row(start)
            placed = []
            for declaration, (col_span, row_span) in zip(declarations, extents):
                anchor = self._claims.place(col_span, row_span)
                placed.append(self._normalize(declaration, default_cell, anchor, col_span, row_span))

            last_row = max((style.row_index for style in placed), default=start)
            self._engine.admit(placed)
            for index in range(self._engine.next_row, last_row + 1):
                self._draw_row(self._engine.measure(index, self._row_spec(index)))

            self._next_row = last_row + 1
            self.document.move_to(self.x, self._bottom)
        return self._bottom

    def end(self) -> DocumentCollaborator:
        """
        Finish the table: conclude open spans and close the outer frame.

        Returns:
            The document, for chaining
        """
        if self._ended:
            return self.document

        with self._collecting_warnings():
            if self._engine is not None:
                flushed = self._engine.flush()
                if flushed:
                    self.structure.append(render_row(self.document, flushed))
                    # The spans now conclude on the last row
                    last = self.rows[-1]
                    self.rows[-1] = replace(last, cells=last.cells + flushed)
            self._close_frame()
            self.document.move_to(self.x, self._bottom)

        self._ended = True
        logger.debug(f"Table ended after {len(self.rows)} rows at y={self._bottom:.2f}")
        return self.document

    # ─────────────────────────────────────────────────────────────────────────
    # Layout helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _ensure_columns(self, count: int) -> None:
        """Fix the column count and solve column widths."""
        spec = self.spec
        resolve = self.document.resolve_size
        if spec.width is None and spec.cell_width is not None and not spec.cols:
            self.width = resolve(spec.cell_width) * count

        columns = []
        for index in range(count):
            style = spec.column_style(index)
            width = style.width if style.width is not None else spec.cell_width
            if width is None or width == STAR:
                columns.append(ColumnSpec(
                    min_width=resolve(style.min_width, percent_of=self.width),
                    max_width=resolve(style.max_width, percent_of=self.width),
                ))
            else:
                columns.append(ColumnSpec(width=resolve(width, percent_of=self.width)))

        self._claims.columns = count
        self._columns = solve_column_widths(columns, self.width, self.x)
        self._engine = RowEngine(self.document, self._columns, self.y)

    def _row_spec(self, index: int) -> RowSpec:
        """Resolve the declared sizing of grid row `index`."""
        spec = self.spec
        resolve = self.document.resolve_size
        style = spec.row_style(index)

        height = style.height
        if height is None:
            if spec.cell_height is not None:
                height = spec.cell_height
            elif spec.rows and spec.height is not None:
                height = self.height / spec.rows
            else:
                height = AUTO

        return RowSpec(
            height=None if height == AUTO else resolve(height, percent_of=self.height),
            min_height=resolve(style.min_height, percent_of=self.height),
            max_height=resolve(style.max_height, percent_of=self.height),
        )

    def _normalize(
        self,
        declaration: Mapping[str, Any],
        default_cell: Optional[Mapping[str, Any]],
        anchor: GridCoordinate,
        col_span: int,
        row_span: int,
    ) -> CellStyle:
        spec = self.spec
        if anchor.column + col_span > self._columns.count:
            logger.warning(
                f"Cell at {anchor} spans {col_span} columns past the last column "
                f"({self._columns.count}), using the existing columns only"
            )
        merged = merge_declarations(
            spec.default_cell,
            spec.column_style(anchor.column).cell,
            spec.row_style(anchor.row).cell,
            default_cell,
            declaration,
        )
        merged["col_span"] = col_span
        merged["row_span"] = row_span
        return normalize_cell(
            merged,
            self.document,
            row_index=anchor.row,
            col_index=anchor.column,
            debug=spec.debug,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _draw_row(self, layout: RowLayout) -> None:
        first_on_page = layout.index == 0
        if layout.new_page:
            self._close_frame()
            self.document.add_page()
            first_on_page = True

        self.structure.append(render_row(self.document, layout.cells))
        self._draw_frame(layout.y, layout.height, top=first_on_page)
        self.rows.append(layout)
        self._bottom = layout.bottom

    def _draw_frame(self, y: float, height: float, *, top: bool) -> None:
        """Outer frame around one row band; bottom edges are drawn on close."""
        mask = Sides(top=top, right=True, bottom=False, left=True)
        draw_border(
            self.document,
            plan_border(self.border, self.border_color, self.x, y, self._frame_width, height, mask),
        )

    def _close_frame(self) -> None:
        """Bottom edge of the outer frame at the last drawn row."""
        if not self.rows:
            return
        mask = Sides(top=False, right=False, bottom=True, left=False)
        draw_border(
            self.document,
            plan_border(self.border, self.border_color, self.x, self._bottom, self._frame_width, 0, mask),
        )

    @property
    def _frame_width(self) -> float:
        return self._columns.total_width if self._columns is not None else self.width

    @contextmanager
    def _collecting_warnings(self) -> Iterator[None]:
        handler = _WarningCollector(self.warnings)
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.addHandler(handler)
        try:
            yield
        finally:
            package_logger.removeHandler(handler)
