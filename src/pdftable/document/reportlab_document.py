"""
Module: document.reportlab_document

Purpose:
    DocumentCollaborator backed by a ReportLab canvas.
    Resolves sizes, measures wrapped text with standard font metrics and
    draws through the canvas, flipping top-down coordinates to PDF's
    bottom-up system.

Key Classes:
    - ReportLabDocument: Canvas-backed collaborator

Dependencies:
    - reportlab: Canvas, font metrics, line splitting, colours
    - document.units: Size expression parsing

Used By:
    - pdftable.table: Default document for scripts and tests
    - scripts/generate_sample_tables.py
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from pdftable.core.models import Color, ContentBounds, FontSpec

from .base import DocumentCollaborator, PageGeometry, TextConstraints
from .config import PageConfig
from .units import SizeContext, to_points

logger = logging.getLogger(__name__)

ELLIPSIS = "…"

# (text, ends_paragraph)
Line = Tuple[str, bool]


def _rotated_box(width: float, height: float, rotation: float) -> ContentBounds:
    """
    Bounds of a width x height box rotated counter-clockwise about its
    top-left corner, in top-down coordinates.
    """
    if rotation % 360 == 0:
        return ContentBounds(0.0, 0.0, width, height)
    radians = math.radians(rotation)
    cos, sin = math.cos(radians), math.sin(radians)
    corners = [(0.0, 0.0), (width, 0.0), (width, height), (0.0, height)]
    # y grows downwards, so a visual counter-clockwise turn negates sin
    xs = [px * cos + py * sin for px, py in corners]
    ys = [-px * sin + py * cos for px, py in corners]
    return ContentBounds(
        x=min(xs),
        y=min(ys),
        width=max(xs) - min(xs),
        height=max(ys) - min(ys),
    )


class ReportLabDocument(DocumentCollaborator):
    """
    Document backed by a single ReportLab canvas.

    Example:
        >>> doc = ReportLabDocument(Path("out/table.pdf"))
        >>> doc.resolve_size("1in")
        72.0
        >>> doc.save()
    """

    def __init__(
        self,
        output: Union[str, Path, BinaryIO],
        config: Optional[PageConfig] = None,
    ):
        self.config = config or PageConfig()
        if isinstance(output, Path):
            output.parent.mkdir(parents=True, exist_ok=True)
            output = str(output)
        self._output = output
        self._canvas = canvas.Canvas(output, pagesize=self.config.page_size)
        self._font = FontSpec(self.config.font_name, self.config.font_size)
        self._apply_font()
        self._x = self.config.margin_left
        self._y = self.config.margin_top
        self._page_count = 1

    # ─────────────────────────────────────────────────────────────────────────
    # Page and cursor
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def canvas(self) -> canvas.Canvas:
        return self._canvas

    @property
    def page(self) -> PageGeometry:
        config = self.config
        return PageGeometry(
            width=config.page_width,
            height=config.page_height,
            margin_top=config.margin_top,
            margin_bottom=config.margin_bottom,
            margin_left=config.margin_left,
            margin_right=config.margin_right,
        )

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def move_to(self, x: float, y: float) -> None:
        self._x = x
        self._y = y

    def add_page(self) -> None:
        self._canvas.showPage()
        # showPage resets the graphics state, font included
        self._apply_font()
        self._page_count += 1
        self._x = self.config.margin_left
        self._y = self.config.margin_top
        logger.debug(f"Started page {self._page_count}")

    def save(self) -> None:
        """Finish the current page and write the PDF."""
        self._canvas.save()
        logger.info(f"Rendered {self._page_count} pages to {self._output}")

    # ─────────────────────────────────────────────────────────────────────────
    # Oracle
    # ─────────────────────────────────────────────────────────────────────────

    def resolve_size(self, size: Any, default: Any = 0, *, percent_of: Optional[float] = None) -> float:
        if size is None:
            size = default
        if size is None:
            return 0.0
        context = SizeContext(
            font_size=self._font.size,
            root_font_size=self.config.font_size,
            ch_width=pdfmetrics.stringWidth("0", self._font.name, self._font.size),
            page_width=self.config.page_width,
            page_height=self.config.page_height,
        )
        return to_points(size, context, percent_of=percent_of)

    def measure_text_block(self, content: str, constraints: TextConstraints) -> ContentBounds:
        lines = self._layout_lines(content, constraints)
        if not lines:
            return ContentBounds()
        width, height = self._block_size(lines, constraints)
        return _rotated_box(width, height, constraints.rotation)

    # ─────────────────────────────────────────────────────────────────────────
    # Font state
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def font(self) -> FontSpec:
        return self._font

    @property
    def leading(self) -> float:
        return self._font.size * self.config.line_height

    def set_font(self, font: FontSpec) -> None:
        self._font = FontSpec(
            name=font.name or self._font.name,
            size=font.size or self._font.size,
        )
        self._apply_font()

    def _apply_font(self) -> None:
        self._canvas.setFont(self._font.name, self._font.size, leading=self.leading)

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing primitives
    # ─────────────────────────────────────────────────────────────────────────

    def save_state(self) -> None:
        self._canvas.saveState()

    def restore_state(self) -> None:
        self._canvas.restoreState()

    def set_line_width(self, width: float) -> None:
        self._canvas.setLineWidth(width)

    def set_stroke_color(self, color: Color) -> None:
        if color is not None:
            self._canvas.setStrokeColor(colors.toColor(color))

    def set_fill_color(self, color: Color) -> None:
        if color is not None:
            self._canvas.setFillColor(colors.toColor(color))

    def set_stroke_opacity(self, opacity: float) -> None:
        self._canvas.setStrokeAlpha(opacity)

    def set_dash(self, length: float, space: float) -> None:
        self._canvas.setDash(length, space)

    def rect(self, x: float, y: float, width: float, height: float, *, stroke: bool = False, fill: bool = False) -> None:
        self._canvas.rect(
            x,
            self._transform_y(y, height),
            width,
            height,
            stroke=int(stroke),
            fill=int(fill),
        )

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1, self._transform_y(y1), x2, self._transform_y(y2))

    def clip_rect(self, x: float, y: float, width: float, height: float) -> None:
        path = self._canvas.beginPath()
        path.rect(x, self._transform_y(y, height), width, height)
        self._canvas.clipPath(path, stroke=0, fill=0)

    def draw_text(self, content: str, x: float, y: float, constraints: TextConstraints) -> None:
        lines = self._layout_lines(content, constraints)
        if not lines:
            return

        c = self._canvas
        name, size = self._font.name, self._font.size
        leading = self.leading
        ascent, descent = pdfmetrics.getAscentDescent(name, size)
        # Centre the glyph box within each line's leading
        baseline = (leading - (ascent - descent)) / 2 + ascent

        c.saveState()
        c.translate(x, self._transform_y(y))
        if constraints.rotation:
            c.rotate(constraints.rotation)
        for i, (text, last) in enumerate(lines):
            text_obj = c.beginText(0, -(i * leading + baseline))
            text_obj.setFont(name, size, leading)
            text_obj.setTextRenderMode(2 if constraints.stroke else 0)
            if constraints.align == "justify" and not last:
                gaps = text.count(" ")
                if gaps:
                    spare = constraints.width - pdfmetrics.stringWidth(text, name, size)
                    text_obj.setWordSpace(max(spare, 0) / gaps)
            text_obj.textOut(text)
            c.drawText(text_obj)
        c.restoreState()

    # ─────────────────────────────────────────────────────────────────────────
    # Text layout
    # ─────────────────────────────────────────────────────────────────────────

    def _layout_lines(self, content: str, constraints: TextConstraints) -> List[Line]:
        """Wrap content to the constraint width and cut it to the height."""
        if not content:
            return []
        name, size = self._font.name, self._font.size
        width = max(constraints.width, 0.0)

        lines: List[Line] = []
        for paragraph in content.split("\n"):
            wrapped = simpleSplit(paragraph, name, size, width) or [""]
            lines.extend((text, i == len(wrapped) - 1) for i, text in enumerate(wrapped))

        max_lines = max(1, int(constraints.height // self.leading)) if constraints.height > 0 else 1
        if len(lines) > max_lines:
            lines = lines[:max_lines]
            if constraints.ellipsis:
                text, _ = lines[-1]
                lines[-1] = (self._truncate(text + ELLIPSIS, width), True)
        return lines

    def _truncate(self, text: str, width: float) -> str:
        """Shorten text so it ends with an ellipsis and fits the width."""
        name, size = self._font.name, self._font.size
        if pdfmetrics.stringWidth(text, name, size) <= width:
            return text
        body = text[:-len(ELLIPSIS)].rstrip()
        for i in range(len(body), 0, -1):
            candidate = body[:i].rstrip() + ELLIPSIS
            if pdfmetrics.stringWidth(candidate, name, size) <= width:
                return candidate
        return ELLIPSIS

    def _block_size(self, lines: List[Line], constraints: TextConstraints) -> Tuple[float, float]:
        name, size = self._font.name, self._font.size
        width = max(pdfmetrics.stringWidth(text, name, size) for text, _ in lines)
        if constraints.align == "justify" and len(lines) > 1:
            width = max(width, constraints.width)
        return width, len(lines) * self.leading

    def _transform_y(self, y: float, height: float = 0.0) -> float:
        """Convert a top-down y (and element height) to bottom-up PDF y."""
        return self.config.page_height - y - height
