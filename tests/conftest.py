import math
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

import pytest

# Add src to sys.path so we can import pdftable
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pdftable.core.models import ContentBounds, FontSpec  # noqa: E402
from pdftable.document.base import DocumentCollaborator, PageGeometry, TextConstraints  # noqa: E402
from pdftable.document.units import SizeContext, to_points  # noqa: E402
from pdftable.layout.rotation import rotated_extent  # noqa: E402


class FakeDocument(DocumentCollaborator):
    """
    Deterministic in-memory document.

    Every glyph advances half the font size and every line is exactly one
    font size tall, so text extents are easy to compute by hand. Drawing
    calls are recorded in `calls` as (name, args) tuples.
    """

    def __init__(
        self,
        width: float = 600,
        height: float = 800,
        margin: float = 50,
        font_size: float = 10,
    ):
        self._page = PageGeometry(
            width=width,
            height=height,
            margin_top=margin,
            margin_bottom=margin,
            margin_left=margin,
            margin_right=margin,
        )
        self._font = FontSpec("Helvetica", font_size)
        self._x = margin
        self._y = margin
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.pages = 1
        self.state_depth = 0

    # Oracle

    def resolve_size(self, size: Any, default: Any = 0, *, percent_of: Optional[float] = None) -> float:
        if size is None:
            size = default
        if size is None:
            return 0.0
        context = SizeContext(
            font_size=self._font.size,
            root_font_size=10,
            ch_width=self._font.size / 2,
            page_width=self._page.width,
            page_height=self._page.height,
        )
        return to_points(size, context, percent_of=percent_of)

    def measure_text_block(self, content: str, constraints: TextConstraints) -> ContentBounds:
        advance = self._font.size / 2
        per_line = max(1, int(constraints.width // advance)) if constraints.width > 0 else 1
        lines = 0
        longest = 0
        for paragraph in content.split("\n"):
            lines += max(1, math.ceil(len(paragraph) / per_line))
            longest = max(longest, min(len(paragraph), per_line))
        width, height = longest * advance, lines * self._font.size
        if constraints.rotation:
            width, height = rotated_extent(constraints.rotation, width, height)
        return ContentBounds(0.0, 0.0, width, height)

    # Page and cursor

    @property
    def page(self) -> PageGeometry:
        return self._page

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def move_to(self, x: float, y: float) -> None:
        self._x, self._y = x, y

    def add_page(self) -> None:
        self.calls.append(("add_page", ()))
        self.pages += 1
        self._x, self._y = self._page.margin_left, self._page.margin_top

    # Font

    @property
    def font(self) -> FontSpec:
        return self._font

    def set_font(self, font: FontSpec) -> None:
        self._font = FontSpec(font.name or self._font.name, font.size or self._font.size)
        self.calls.append(("set_font", (self._font.name, self._font.size)))

    # Drawing

    def save_state(self) -> None:
        self.state_depth += 1
        self.calls.append(("save_state", ()))

    def restore_state(self) -> None:
        self.state_depth -= 1
        self.calls.append(("restore_state", ()))

    def set_line_width(self, width: float) -> None:
        self.calls.append(("set_line_width", (width,)))

    def set_stroke_color(self, color: Any) -> None:
        self.calls.append(("set_stroke_color", (color,)))

    def set_fill_color(self, color: Any) -> None:
        self.calls.append(("set_fill_color", (color,)))

    def set_stroke_opacity(self, opacity: float) -> None:
        self.calls.append(("set_stroke_opacity", (opacity,)))

    def set_dash(self, length: float, space: float) -> None:
        self.calls.append(("set_dash", (length, space)))

    def rect(self, x, y, width, height, *, stroke=False, fill=False) -> None:
        self.calls.append(("rect", (x, y, width, height, stroke, fill)))

    def line(self, x1, y1, x2, y2) -> None:
        self.calls.append(("line", (x1, y1, x2, y2)))

    def clip_rect(self, x, y, width, height) -> None:
        self.calls.append(("clip_rect", (x, y, width, height)))

    def draw_text(self, content, x, y, constraints) -> None:
        self.calls.append(("draw_text", (content, x, y, constraints)))

    # Helpers

    def named(self, name: str) -> List[Tuple[Any, ...]]:
        """Arguments of every recorded call with this name."""
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def document():
    """Fresh 600x800 fake document with 50pt margins and a 10pt font."""
    return FakeDocument()


@pytest.fixture
def document_factory():
    """Factory for fake documents with custom page geometry."""
    return FakeDocument
