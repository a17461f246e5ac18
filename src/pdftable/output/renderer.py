"""
Module: output.renderer

Purpose:
    Draw sized rows through the document collaborator.
    Each cell draws, in order: background, border, debug outline, content.

Key Functions:
    - render_row(): Draw every cell of a row, return structure metadata
    - render_cell(): Draw one sized cell
    - content_offset(): Aligned offset of content inside its box

Dependencies:
    - output.borders: Border merge policy
    - layout.rows: text_constraints
    - document.base: DocumentCollaborator

Used By:
    - table.Table: Row drawing
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Tuple

from pdftable.core.models import SizedCell
from pdftable.document.base import DocumentCollaborator
from pdftable.layout.rows import text_constraints

from .borders import draw_border, plan_border

logger = logging.getLogger(__name__)

# Debug outline styling
DEBUG_DASH = (1.0, 1.0)
DEBUG_LINE_WIDTH = 1.0
DEBUG_OPACITY = 0.3
DEBUG_CELL_COLOR = "green"
DEBUG_ALLOCATED_COLOR = "orange"
DEBUG_X_GUIDE_COLOR = "blue"
DEBUG_Y_GUIDE_COLOR = "green"


def render_row(document: DocumentCollaborator, cells: Iterable[SizedCell]) -> List[Dict[str, Any]]:
    """
    Draw every cell of a row.

    Args:
        document: Collaborator to draw through
        cells: Sized cells concluding on the row

    Returns:
        Structure metadata, one mapping per drawn cell
    """
    structure = []
    for cell in cells:
        render_cell(document, cell)
        structure.append(cell.metadata())
    logger.debug(f"Drew {len(structure)} cells")
    return structure


def render_cell(document: DocumentCollaborator, cell: SizedCell) -> None:
    """Draw background, border, debug outline and content of one cell."""
    style = cell.style

    if style.background_color is not None:
        with document.graphics_state():
            document.set_fill_color(style.background_color)
            document.rect(cell.x, cell.y, cell.width, cell.height, fill=True)

    draw_border(
        document,
        plan_border(style.border, style.border_color, cell.x, cell.y, cell.width, cell.height),
    )

    if style.debug:
        with document.graphics_state():
            _debug_stroke(document, DEBUG_CELL_COLOR)
            document.rect(cell.x, cell.y, cell.width, cell.height, stroke=True)

    if style.has_content:
        render_content(document, cell)


def content_offset(cell: SizedCell) -> Tuple[float, float]:
    """
    Offset of the content box inside the allocated content area.

    Free space is split by the alignment factors (0 left/top, 0.5 center,
    1 right/bottom).
    """
    align = cell.style.align
    bounds = cell.content_bounds
    offset_x = (cell.content_allocated_width - bounds.width) * align.x_factor
    offset_y = (cell.content_allocated_height - bounds.height) * align.y_factor
    return offset_x, offset_y


def render_content(document: DocumentCollaborator, cell: SizedCell) -> None:
    """
    Draw a cell's text, aligned and clipped to its content area.

    The clip stops at the padding edge, not the cell edge.
    """
    style = cell.style
    x, y = cell.content_x, cell.content_y
    alloc_w, alloc_h = cell.content_allocated_width, cell.content_allocated_height
    bounds = cell.content_bounds
    offset_x, offset_y = content_offset(cell)

    with document.using_font(style.font):
        if style.debug:
            with document.graphics_state():
                _debug_stroke(document, DEBUG_X_GUIDE_COLOR)
                document.line(x + offset_x, y, x + offset_x, y + alloc_h)
                document.line(x + offset_x + bounds.width, y, x + offset_x + bounds.width, y + alloc_h)
                document.set_stroke_color(DEBUG_Y_GUIDE_COLOR)
                document.line(x, y + offset_y, x + alloc_w, y + offset_y)
                document.line(x, y + offset_y + bounds.height, x + alloc_w, y + offset_y + bounds.height)
                document.set_stroke_color(DEBUG_ALLOCATED_COLOR)
                document.rect(x, y, alloc_w, alloc_h, stroke=True)

        with document.graphics_state():
            document.clip_rect(x, y, alloc_w, alloc_h)
            document.set_fill_color(style.text_color)
            document.set_stroke_color(style.text_stroke_color)
            if style.text_stroke > 0:
                document.set_line_width(style.text_stroke)
            # Shift by the bounds origin so rotated text lands inside the box
            document.draw_text(
                style.content,
                x + offset_x - bounds.x,
                y + offset_y - bounds.y,
                text_constraints(style, cell.content_max),
            )


def _debug_stroke(document: DocumentCollaborator, color: str) -> None:
    document.set_dash(*DEBUG_DASH)
    document.set_line_width(DEBUG_LINE_WIDTH)
    document.set_stroke_opacity(DEBUG_OPACITY)
    document.set_stroke_color(color)
