"""
Module: core.models.styles

Purpose:
    Normalised style records for cells, columns and rows. A CellStyle is
    what remains of a user's cell declaration after shorthand expansion,
    precedence merging and size resolution; every geometric field is in
    document points.

Key Classes:
    - Alignment: Horizontal/vertical content alignment
    - FontSpec: Font selection for a cell
    - CellStyle: Normalised cell declaration with grid placement
    - ColumnStyle: Declared column sizing plus per-column cell defaults
    - RowStyle: Declared row sizing plus per-row cell defaults

Dependencies:
    - dataclasses (std)
    - core.models.sides: Sides

Used By:
    - layout.styles: Produces CellStyle
    - layout.rows: Measures CellStyle into SizedCell
    - core.models.table_spec: Column/row style lookups
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .sides import Sides

# Colours are passed through to the document collaborator untouched
# (names, hex strings, RGB tuples or backend colour objects).
Color = Any

STAR = "*"
AUTO = "auto"

HORIZONTAL_ALIGNMENTS = ("left", "center", "right", "justify")
VERTICAL_ALIGNMENTS = ("top", "center", "bottom")


@dataclass(frozen=True, slots=True)
class Alignment:
    """
    Content alignment within the allocated content box.

    Attributes:
        x: One of left, center, right, justify
        y: One of top, center, bottom
    """

    x: str = "left"
    y: str = "top"

    def __post_init__(self) -> None:
        if self.x not in HORIZONTAL_ALIGNMENTS:
            raise ValueError(f"align.x must be one of {HORIZONTAL_ALIGNMENTS}: {self.x!r}")
        if self.y not in VERTICAL_ALIGNMENTS:
            raise ValueError(f"align.y must be one of {VERTICAL_ALIGNMENTS}: {self.y!r}")

    @property
    def x_factor(self) -> float:
        """Fraction of free horizontal space placed before the content."""
        return {"right": 1.0, "center": 0.5}.get(self.x, 0.0)

    @property
    def y_factor(self) -> float:
        """Fraction of free vertical space placed above the content."""
        return {"bottom": 1.0, "center": 0.5}.get(self.y, 0.0)


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font selection; None fields inherit the document's current font."""

    name: Optional[str] = None
    size: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.size is None


@dataclass(frozen=True, slots=True)
class CellStyle:
    """
    Normalised cell declaration (immutable).

    Created by layout.styles.normalize_cell() once precedence merging is
    done. Grid placement (row_index/col_index) is stamped on afterwards
    by the span claim tracker.

    Attributes:
        content: Text to render, or None for an empty cell
        row_span: Rows covered (>= 1)
        col_span: Columns covered (>= 1)
        padding: Inner padding in points
        border: Border widths in points
        border_color: Per-side border colours (None = current stroke colour)
        background_color: Fill colour for the cell box
        text_color: Fill colour for text
        text_stroke: Text outline width in points (0 = no outline)
        text_stroke_color: Text outline colour
        align: Content alignment
        font: Font override for this cell
        x: Absolute x override in points
        y: Absolute y override in points
        rotation: Content rotation in degrees (counter-clockwise)
        cell_type: Structure type, "TD" or "TH"
        debug: Draw debug outlines for this cell
        row_index: Anchor row (zero-based)
        col_index: Anchor column (zero-based)
    """

    content: Optional[str] = None
    row_span: int = 1
    col_span: int = 1
    padding: Sides[float] = field(default_factory=lambda: Sides.all(0.0))
    border: Sides[float] = field(default_factory=lambda: Sides.all(0.0))
    border_color: Sides[Color] = field(default_factory=lambda: Sides.all(None))
    background_color: Color = None
    text_color: Color = None
    text_stroke: float = 0.0
    text_stroke_color: Color = None
    align: Alignment = field(default_factory=Alignment)
    font: Optional[FontSpec] = None
    x: Optional[float] = None
    y: Optional[float] = None
    rotation: float = 0.0
    cell_type: str = "TD"
    debug: bool = False
    row_index: int = 0
    col_index: int = 0

    def __post_init__(self) -> None:
        if self.row_span < 1:
            raise ValueError(f"row_span must be >= 1: {self.row_span}")
        if self.col_span < 1:
            raise ValueError(f"col_span must be >= 1: {self.col_span}")

    @property
    def last_row(self) -> int:
        """Row on which this cell's span concludes."""
        return self.row_index + self.row_span - 1

    @property
    def has_content(self) -> bool:
        return bool(self.content)


def _split_style(
    data: Mapping[str, Any],
    own_keys: tuple[str, ...],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a mapping into (own sizing keys, remaining cell keys)."""
    own = {k: v for k, v in data.items() if k in own_keys}
    cell = {k: v for k, v in data.items() if k not in own_keys and k != "cell"}
    cell.update(data.get("cell") or {})
    return own, cell


@dataclass(frozen=True)
class ColumnStyle:
    """
    Declared sizing for one column.

    Sizes are unresolved expressions; the table session resolves them
    against the table width once the column count is known.

    Attributes:
        width: Size expression, "*" for star sizing, or None (table default)
        min_width: Lower bound for star sizing
        max_width: Upper bound for star sizing (0 = unbounded)
        cell: Cell declaration defaults for cells anchored in this column
    """

    width: Any = None
    min_width: Any = 0
    max_width: Any = 0
    cell: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Any) -> "ColumnStyle":
        """Build a ColumnStyle from None, a ColumnStyle, a mapping or a bare width."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            own, cell = _split_style(value, ("width", "min_width", "max_width"))
            return cls(cell=cell, **own)
        return cls(width=value)

    @property
    def is_star(self) -> bool:
        return self.width == STAR


@dataclass(frozen=True)
class RowStyle:
    """
    Declared sizing for one row.

    Attributes:
        height: Size expression, "auto", or None (table default)
        min_height: Lower clamp for the finalised height
        max_height: Upper clamp for the finalised height (0 = unbounded)
        cell: Cell declaration defaults for cells in this row
    """

    height: Any = None
    min_height: Any = 0
    max_height: Any = 0
    cell: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Any) -> "RowStyle":
        """Build a RowStyle from None, a RowStyle, a mapping or a bare height."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            own, cell = _split_style(value, ("height", "min_height", "max_height"))
            return cls(cell=cell, **own)
        return cls(height=value)

    @property
    def is_auto(self) -> bool:
        return self.height == AUTO
