"""
Core Models Package

Immutable data models passed between the layout stages.

All models are frozen dataclasses: a row's sized cells are derived
values, produced fresh per row and discarded after drawing, so nothing
downstream can mutate the table session's state through them.
"""

from .sides import Sides, SIDE_NAMES
from .styles import (
    AUTO,
    STAR,
    Alignment,
    CellStyle,
    Color,
    ColumnStyle,
    FontSpec,
    RowStyle,
)
from .table_spec import TableSpec
from .geometry import ContentBounds, ContentSize, GridCoordinate, RowLayout, SizedCell

__all__ = [
    "Sides",
    "SIDE_NAMES",
    "AUTO",
    "STAR",
    "Alignment",
    "CellStyle",
    "Color",
    "ColumnStyle",
    "FontSpec",
    "RowStyle",
    "TableSpec",
    "ContentBounds",
    "ContentSize",
    "GridCoordinate",
    "RowLayout",
    "SizedCell",
]
