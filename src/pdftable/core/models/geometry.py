"""
Module: core.models.geometry

Purpose:
    Resolved geometry produced by the layout engine. All coordinates are
    top-down document points (y grows towards the page bottom); the
    ReportLab backend flips them when drawing.

Key Classes:
    - GridCoordinate: (column, row) grid slot
    - ContentSize: Width/height pair from the rotated-bounds solver
    - ContentBounds: Measured bounding box of rendered content
    - SizedCell: CellStyle plus absolute geometry
    - RowLayout: One finalised row ready to draw

Dependencies:
    - dataclasses (std)
    - core.models.styles: CellStyle

Used By:
    - layout.claims, layout.rotation, layout.rows
    - output.renderer, output.visualizer
    - table.Table
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .styles import CellStyle


@dataclass(frozen=True, slots=True)
class GridCoordinate:
    """Zero-based (column, row) grid slot."""

    column: int
    row: int

    def __str__(self) -> str:
        return f"{self.column},{self.row}"


@dataclass(frozen=True, slots=True)
class ContentSize:
    """Maximum unrotated content rectangle for a cell."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ContentBounds:
    """
    Measured bounds of rendered content relative to its text origin.

    x/y are the offset of the bounding box's top-left corner from the
    origin, which is non-zero once content is rotated.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True, slots=True)
class SizedCell:
    """
    Cell with fully resolved geometry (immutable).

    Produced fresh per row by the row engine; read-only afterwards.

    Attributes:
        style: Normalised cell declaration
        x: Left edge of the cell box
        y: Top edge of the cell box
        width: Cell box width (sum of spanned column widths)
        height: Cell box height (sum of spanned row heights)
        content_x: Left edge of the content area (inside padding)
        content_y: Top edge of the content area
        content_allocated_width: Content area width
        content_allocated_height: Content area height
        content_max: Largest unrotated content rectangle that fits once rotated
        content_bounds: Measured bounds of the rendered content
    """

    style: CellStyle
    x: float
    y: float
    width: float
    height: float
    content_x: float
    content_y: float
    content_allocated_width: float
    content_allocated_height: float
    content_max: ContentSize
    content_bounds: ContentBounds

    @property
    def required_height(self) -> float:
        """Content height plus vertical padding."""
        return self.content_bounds.height + self.style.padding.vertical

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    def metadata(self) -> Dict[str, Any]:
        """Structure attributes passed through for tagged output."""
        style = self.style
        return {
            "Type": style.cell_type,
            "Width": self.width,
            "Height": self.height,
            "Padding": [style.padding.top, style.padding.bottom, style.padding.left, style.padding.right],
            "RowSpan": style.row_span,
            "ColSpan": style.col_span,
            "BackgroundColor": style.background_color,
            "BorderColor": style.border_color.top,
            "BorderThickness": [style.border.top, style.border.bottom, style.border.left, style.border.right],
        }


@dataclass(frozen=True, slots=True)
class RowLayout:
    """
    Finalised row (immutable).

    Attributes:
        index: Grid row index
        y: Top edge after any page move
        height: Finalised height
        cells: Cells concluding on this row, sized against the final height
        new_page: Caller must break the page before drawing this row
        page_index: Zero-based page (relative to the table's first page)
        clamped: Row was taller than a page and got clamped
    """

    index: int
    y: float
    height: float
    cells: tuple[SizedCell, ...]
    new_page: bool = False
    page_index: int = 0
    clamped: bool = False

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (y + height)."""
        return self.y + self.height
