"""
Module: pdftable.layout

Purpose:
    Table geometry: everything that decides where and how big cells are.
    Nothing here draws; sized rows are handed to pdftable.output.

Key Functions:
    - normalize_sides(): Side shorthand -> Sides
    - normalize_cell(): Merged declaration -> CellStyle
    - solve_column_widths(): Fixed + star column widths
    - compute_content_bounds(): Largest rotated content box

Key Classes:
    - SpanClaimTracker: Grid slots covered by spanning cells
    - ColumnSpec, ColumnLayout: Column declarations and solved widths
    - RowSpec, RowEngine: Row heights and pagination

Dependencies:
    - pdftable.core.models: Style and geometry records
    - pdftable.document.base: Size resolution and text measurement

Used By:
    - pdftable.table: Table session
"""

from .sides import normalize_sides
from .styles import (
    CHECK_MARK,
    CROSS_MARK,
    coerce_declaration,
    format_value,
    merge_declarations,
    normalize_alignment,
    normalize_cell,
    resolve_span,
    span_extents,
)
from .claims import SpanClaimTracker
from .columns import ColumnLayout, ColumnSpec, column_positions, solve_column_widths
from .rotation import compute_content_bounds, rotated_extent
from .rows import RowEngine, RowSpec, text_constraints

__all__ = [
    # Styles
    "normalize_sides",
    "CHECK_MARK",
    "CROSS_MARK",
    "coerce_declaration",
    "format_value",
    "merge_declarations",
    "normalize_alignment",
    "normalize_cell",
    "resolve_span",
    "span_extents",
    # Claims
    "SpanClaimTracker",
    # Columns
    "ColumnLayout",
    "ColumnSpec",
    "column_positions",
    "solve_column_widths",
    # Rotation
    "compute_content_bounds",
    "rotated_extent",
    # Rows
    "RowEngine",
    "RowSpec",
    "text_constraints",
]
