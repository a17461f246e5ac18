"""
Module: output.borders

Purpose:
    Decide how a box's border is stroked. When all four effective widths
    match, one closed rectangle is drawn with a single colour; otherwise
    each non-zero side becomes its own open segment with its own colour.

    A mask switches sides off (shared edges between rows, the outer
    frame's top edge after the first row).

Key Classes:
    - BorderSegment: One stroke instruction
    - BorderPlan: Set of stroke instructions for one box

Key Functions:
    - plan_border(): Widths/colours/mask -> BorderPlan
    - draw_border(): Replay a plan through the document

Dependencies:
    - core.models.sides: Sides

Used By:
    - output.renderer: Cell borders
    - table.Table: Outer table frame
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pdftable.core.models import Color, Sides
from pdftable.document.base import DocumentCollaborator

ALL_SIDES: Sides[bool] = Sides.all(True)


@dataclass(frozen=True, slots=True)
class BorderSegment:
    """
    One stroke instruction.

    side is "rect" for a closed rectangle, else the edge name.
    """

    side: str
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: Color = None


@dataclass(frozen=True, slots=True)
class BorderPlan:
    """Stroke instructions for one box, in top/right/bottom/left order."""

    segments: Tuple[BorderSegment, ...] = ()

    @property
    def is_rect(self) -> bool:
        return len(self.segments) == 1 and self.segments[0].side == "rect"

    @property
    def sides(self) -> frozenset[str]:
        return frozenset(segment.side for segment in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)


def plan_border(
    border: Sides[float],
    color: Sides[Color],
    x: float,
    y: float,
    width: float,
    height: float,
    mask: Optional[Sides[bool]] = None,
) -> BorderPlan:
    """
    Plan the strokes for a box's border.

    Args:
        border: Per-side widths
        color: Per-side colours
        x, y: Top-left corner of the box
        width, height: Box size
        mask: Sides to keep (default all)

    Returns:
        BorderPlan with one "rect" segment, or up to four edge segments

    Example:
        >>> plan_border(Sides.all(1), Sides.all("black"), 0, 0, 10, 10).is_rect
        True
    """
    widths = border.masked(mask or ALL_SIDES, 0)

    if widths.all_equal():
        if widths.top <= 0:
            return BorderPlan()
        # Same width everywhere: one rectangle in the top colour
        return BorderPlan(segments=(
            BorderSegment("rect", x, y, x + width, y + height, widths.top, color.top),
        ))

    right, bottom = x + width, y + height
    edges = {
        "top": (x, y, right, y),
        "right": (right, y, right, bottom),
        "bottom": (x, bottom, right, bottom),
        "left": (x, y, x, bottom),
    }
    segments = []
    for (side, line_width), (_, side_color) in zip(widths.items(), color.items()):
        if line_width > 0:
            segments.append(BorderSegment(side, *edges[side], line_width, side_color))
    return BorderPlan(segments=tuple(segments))


def draw_border(document: DocumentCollaborator, plan: BorderPlan) -> None:
    """Stroke every segment of a plan, each in its own graphics state."""
    for segment in plan.segments:
        with document.graphics_state():
            document.set_line_width(segment.width)
            document.set_stroke_color(segment.color)
            if segment.side == "rect":
                document.rect(
                    segment.x1,
                    segment.y1,
                    segment.x2 - segment.x1,
                    segment.y2 - segment.y1,
                    stroke=True,
                )
            else:
                document.line(segment.x1, segment.y1, segment.x2, segment.y2)
