"""
Module: layout.styles

Purpose:
    Merge cell declarations from every precedence level and normalise the
    result into a CellStyle.

    Precedence (later wins, shallow per key):
        engine defaults < table default cell < column style
        < row style < row default cell < cell

    Side definitions are replaced whole, never spliced: a cell that sets
    its own padding gets exactly that padding, with no table-level sides
    leaking through.

Key Functions:
    - coerce_declaration(): Scalar -> {"value": scalar}
    - merge_declarations(): Shallow precedence merge
    - resolve_span(): Span value -> int >= 1
    - span_extents(): (col_span, row_span) of a merged declaration
    - normalize_cell(): Declaration -> CellStyle

Dependencies:
    - layout.sides: normalize_sides
    - document.base: DocumentCollaborator (size resolution, font scope)

Used By:
    - table.Table: Cell intake
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Tuple

from pdftable.core.models import Alignment, CellStyle, FontSpec
from pdftable.document.base import DocumentCollaborator

from .sides import normalize_sides

logger = logging.getLogger(__name__)

CHECK_MARK = "✓"
CROSS_MARK = "✕"

ENGINE_DEFAULTS: Dict[str, Any] = {
    "row_span": 1,
    "col_span": 1,
    "padding": "0.25em",
    "border": 1,
    "text_stroke": 0,
    "type": "TD",
    "debug": False,
}

KNOWN_KEYS = frozenset({
    "value",
    "row_span",
    "col_span",
    "padding",
    "border",
    "border_color",
    "background_color",
    "text_color",
    "text_stroke",
    "text_stroke_color",
    "align",
    "font",
    "font_size",
    "rotation",
    "x",
    "y",
    "type",
    "debug",
})


def coerce_declaration(cell: Any) -> Dict[str, Any]:
    """Turn a bare value into a declaration mapping."""
    if isinstance(cell, Mapping):
        return dict(cell)
    return {"value": cell}


def merge_declarations(*sources: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Shallow-merge declarations; later sources win per key.

    A key explicitly set to None counts as undeclared and does not
    override an earlier source.
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if value is not None:
                merged[key] = value
    return merged


def resolve_span(value: Any) -> int:
    """Floor a span value to an integer, minimum 1."""
    if value is None:
        return 1
    return max(1, math.floor(float(value)))


def span_extents(declaration: Mapping[str, Any]) -> Tuple[int, int]:
    """(col_span, row_span) of a declaration."""
    return resolve_span(declaration.get("col_span")), resolve_span(declaration.get("row_span"))


def format_value(value: Any) -> Optional[str]:
    """Cell value -> display text (booleans become check/cross marks)."""
    if value is None:
        return None
    if isinstance(value, bool):
        return CHECK_MARK if value else CROSS_MARK
    return str(value)


def normalize_alignment(align: Any) -> Alignment:
    """A string aligns both axes; a mapping sets x/y independently."""
    if align is None:
        return Alignment()
    if isinstance(align, Alignment):
        return align
    if isinstance(align, Mapping):
        return Alignment(x=align.get("x") or "left", y=align.get("y") or "top")
    # "center" is the only value valid on both axes; other strings only
    # make sense on one axis, so apply them there.
    if align in ("top", "bottom"):
        return Alignment(y=align)
    if align in ("left", "right", "justify"):
        return Alignment(x=align)
    return Alignment(x=align, y=align)


def normalize_font(declaration: Mapping[str, Any], document: DocumentCollaborator) -> Optional[FontSpec]:
    """Font selection from `font` (name, mapping or FontSpec) and `font_size`."""
    font = declaration.get("font")
    size = declaration.get("font_size")

    if isinstance(font, FontSpec):
        spec = font
    elif isinstance(font, Mapping):
        spec = FontSpec(name=font.get("name"), size=font.get("size"))
    else:
        spec = FontSpec(name=font)

    if size is not None:
        spec = FontSpec(name=spec.name, size=size)
    if spec.size is not None:
        spec = FontSpec(name=spec.name, size=document.resolve_size(spec.size))
    return None if spec.is_empty else spec


def normalize_cell(
    declaration: Mapping[str, Any],
    document: DocumentCollaborator,
    *,
    row_index: int = 0,
    col_index: int = 0,
    debug: bool = False,
) -> CellStyle:
    """
    Normalise a merged cell declaration into a CellStyle.

    Relative sizes (em, ex, ch) resolve against the cell's own font, so
    the font is applied for the duration of normalisation and restored
    afterwards.

    Args:
        declaration: Declaration already merged across precedence levels
        document: Collaborator used to resolve size expressions
        row_index: Anchor row from the span claim tracker
        col_index: Anchor column from the span claim tracker
        debug: Table-wide debug flag (or-ed with the cell's own)

    Returns:
        Normalised CellStyle
    """
    decl = merge_declarations(ENGINE_DEFAULTS, declaration)
    unknown = set(decl) - KNOWN_KEYS
    if unknown:
        logger.debug(f"Ignoring unknown cell keys: {sorted(unknown)}")

    font = normalize_font(decl, document)
    with document.using_font(font):
        resolve = document.resolve_size
        padding = normalize_sides(decl.get("padding"), 0, resolve)
        border = normalize_sides(decl.get("border"), 0, resolve)
        text_stroke = resolve(decl.get("text_stroke"), 0)
        x = resolve(decl["x"]) if "x" in decl else None
        y = resolve(decl["y"]) if "y" in decl else None

    col_span, row_span = span_extents(decl)
    return CellStyle(
        content=format_value(decl.get("value")),
        row_span=row_span,
        col_span=col_span,
        padding=padding,
        border=border,
        border_color=normalize_sides(decl.get("border_color")),
        background_color=decl.get("background_color"),
        text_color=decl.get("text_color"),
        text_stroke=text_stroke,
        text_stroke_color=decl.get("text_stroke_color"),
        align=normalize_alignment(decl.get("align")),
        font=font,
        x=x,
        y=y,
        rotation=float(decl.get("rotation") or 0.0),
        cell_type=str(decl.get("type")),
        debug=bool(decl.get("debug")) or debug,
        row_index=row_index,
        col_index=col_index,
    )
