"""
Module: document.base

Purpose:
    Abstract interface for the document the table is laid out in. The
    engine treats it as an oracle for size resolution and text
    measurement, and as a capability interface for drawing.

Key Classes:
    - PageGeometry: Safe content area of the current page
    - TextConstraints: Constraints for measuring/drawing a text run
    - DocumentCollaborator: Abstract base class for documents

Dependencies:
    - abc, contextlib (std)
    - core.models: ContentBounds, FontSpec

Used By:
    - layout.styles: Size resolution
    - layout.rows: Text measurement, page geometry
    - output.renderer: Drawing primitives
    - table.Table: Cursor, page breaks
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from pdftable.core.models import Color, ContentBounds, FontSpec


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """
    Safe content area of a page, in top-down points.

    Attributes:
        width: Full page width
        height: Full page height
        margin_top: Top margin (first content y)
        margin_bottom: Bottom margin
        margin_left: Left margin
        margin_right: Right margin
    """

    width: float
    height: float
    margin_top: float
    margin_bottom: float
    margin_left: float
    margin_right: float

    @property
    def content_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        """Safe page height: space between top and bottom margins."""
        return self.height - self.margin_top - self.margin_bottom

    @property
    def max_x(self) -> float:
        return self.width - self.margin_right

    @property
    def max_y(self) -> float:
        """Safe bottom: last y content may reach."""
        return self.height - self.margin_bottom


@dataclass(frozen=True, slots=True)
class TextConstraints:
    """
    Constraints for laying out one text run.

    Attributes:
        width: Maximum unrotated line width
        height: Maximum unrotated block height
        align: Horizontal alignment inside the block (justify is honoured
            by the backend; other alignments are applied by the engine)
        rotation: Counter-clockwise rotation in degrees about the origin
        ellipsis: Truncate overflowing lines with an ellipsis
        stroke: Outline glyphs in addition to filling them
    """

    width: float
    height: float
    align: Optional[str] = None
    rotation: float = 0.0
    ellipsis: bool = True
    stroke: bool = False


class DocumentCollaborator(ABC):
    """
    Abstract document used by the table engine.

    Coordinates are top-down points: (0, 0) is the page's top-left corner.
    Implementations convert to their native coordinate system.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Oracle: sizes and measurement
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def resolve_size(self, size: Any, default: Any = 0, *, percent_of: Optional[float] = None) -> float:
        """
        Convert a size expression to points.

        Args:
            size: Number, numeric string, unit-suffixed string, bool, or None
            default: Expression used when size is None
            percent_of: Reference length for "%" (defaults to font size)

        Raises:
            ValueError: If the expression cannot be parsed
        """

    @abstractmethod
    def measure_text_block(self, content: str, constraints: TextConstraints) -> ContentBounds:
        """Rendered bounds of a text run under the given constraints."""

    def measure_text_height(self, content: str, constraints: TextConstraints) -> float:
        """Rendered height of a text run under the given constraints."""
        return self.measure_text_block(content, constraints).height

    # ─────────────────────────────────────────────────────────────────────────
    # Page and cursor
    # ─────────────────────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def page(self) -> PageGeometry:
        """Geometry of the current page."""

    @property
    @abstractmethod
    def x(self) -> float:
        """Cursor x."""

    @property
    @abstractmethod
    def y(self) -> float:
        """Cursor y."""

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        """Move the flow cursor."""

    @abstractmethod
    def add_page(self) -> None:
        """Start a new page; the cursor moves to the top-left content corner."""

    # ─────────────────────────────────────────────────────────────────────────
    # Font state
    # ─────────────────────────────────────────────────────────────────────────

    @property
    @abstractmethod
    def font(self) -> FontSpec:
        """Current font (name and size always set)."""

    @abstractmethod
    def set_font(self, font: FontSpec) -> None:
        """Switch font; None fields keep their current value."""

    @contextmanager
    def using_font(self, font: Optional[FontSpec]) -> Iterator[FontSpec]:
        """Apply `font` for the block and restore the previous font on exit."""
        previous = self.font
        if font is not None:
            self.set_font(font)
        try:
            yield self.font
        finally:
            self.set_font(previous)

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing primitives
    # ─────────────────────────────────────────────────────────────────────────

    @abstractmethod
    def save_state(self) -> None:
        """Push the graphics state."""

    @abstractmethod
    def restore_state(self) -> None:
        """Pop the graphics state."""

    @contextmanager
    def graphics_state(self) -> Iterator["DocumentCollaborator"]:
        """Save the graphics state for the block and restore it on exit."""
        self.save_state()
        try:
            yield self
        finally:
            self.restore_state()

    @abstractmethod
    def set_line_width(self, width: float) -> None: ...

    @abstractmethod
    def set_stroke_color(self, color: Color) -> None: ...

    @abstractmethod
    def set_fill_color(self, color: Color) -> None: ...

    @abstractmethod
    def set_stroke_opacity(self, opacity: float) -> None: ...

    @abstractmethod
    def set_dash(self, length: float, space: float) -> None: ...

    @abstractmethod
    def rect(self, x: float, y: float, width: float, height: float, *, stroke: bool = False, fill: bool = False) -> None:
        """Draw a rectangle with top-left corner (x, y)."""

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Stroke a straight segment."""

    @abstractmethod
    def clip_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Intersect the clip region with a rectangle (until restore)."""

    @abstractmethod
    def draw_text(self, content: str, x: float, y: float, constraints: TextConstraints) -> None:
        """Draw a text run with its origin (top-left before rotation) at (x, y)."""
