"""
Module: document.units

Purpose:
    Parse size expressions and convert them to PDF points.

    PDF points are 1/72 inch. Absolute units convert directly; relative
    units need a context (font size, page size, percentage reference).

Key Classes:
    - SizeContext: Reference lengths for relative units

Key Functions:
    - parse_size(): "12.5mm" -> (12.5, "mm")
    - to_points(): Any size expression -> points

Dependencies:
    - re (std)

Used By:
    - document.reportlab_document: resolve_size()
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

IN_TO_PT = 72.0
PX_TO_IN = 1 / 96
CM_TO_IN = 1 / 2.54
MM_TO_CM = 1 / 10
PC_TO_PT = 12.0

ABSOLUTE_UNITS = {
    "pt": 1.0,
    "in": IN_TO_PT,
    "px": PX_TO_IN * IN_TO_PT,
    "cm": CM_TO_IN * IN_TO_PT,
    "mm": MM_TO_CM * CM_TO_IN * IN_TO_PT,
    "pc": PC_TO_PT,
}

RELATIVE_UNITS = ("em", "rem", "ex", "ch", "vw", "vh", "vmin", "vmax", "%")

_SIZE_RE = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))\s*(pt|in|px|cm|mm|pc|em|rem|ex|ch|vw|vh|vmin|vmax|%)?\s*$"
)


@dataclass(frozen=True, slots=True)
class SizeContext:
    """
    Reference lengths for relative units.

    Attributes:
        font_size: Current font size (em, ex, default %)
        root_font_size: Document default font size (rem)
        ch_width: Advance width of "0" in the current font (ch)
        page_width: Page width (vw, vmin, vmax)
        page_height: Page height (vh, vmin, vmax)
    """

    font_size: float = 12.0
    root_font_size: float = 12.0
    ch_width: float = 6.0
    page_width: float = 595.2756
    page_height: float = 841.8898


def parse_size(expr: str) -> Tuple[float, Optional[str]]:
    """
    Split a size string into value and unit.

    Raises:
        ValueError: If the string is not a number with an optional known unit
    """
    match = _SIZE_RE.match(expr)
    if not match:
        raise ValueError(f"Unsupported size {expr!r}")
    return float(match.group(1)), match.group(2)


def to_points(
    size: Any,
    context: SizeContext,
    *,
    percent_of: Optional[float] = None,
) -> float:
    """
    Convert a size expression to points.

    Booleans are widths: False is 0 and True is 1. Numbers are already
    points. Strings are parsed as number + optional unit.

    Args:
        size: Expression to convert (not None)
        context: Reference lengths for relative units
        percent_of: Reference for "%" (defaults to the font size)

    Returns:
        Size in points

    Raises:
        ValueError: If the expression cannot be parsed

    Example:
        >>> to_points("1in", SizeContext())
        72.0
        >>> to_points("50%", SizeContext(), percent_of=300)
        150.0
    """
    if isinstance(size, bool):
        return float(size)
    if isinstance(size, (int, float)):
        return float(size)
    if not isinstance(size, str):
        raise ValueError(f"Unsupported size {size!r}")

    value, unit = parse_size(size)
    if unit is None:
        return value
    if unit in ABSOLUTE_UNITS:
        return value * ABSOLUTE_UNITS[unit]
    if unit == "em":
        return value * context.font_size
    if unit == "rem":
        return value * context.root_font_size
    if unit == "ex":
        return value * context.font_size / 2
    if unit == "ch":
        return value * context.ch_width
    if unit == "vw":
        return value * context.page_width / 100
    if unit == "vh":
        return value * context.page_height / 100
    if unit == "vmin":
        return value * min(context.page_width, context.page_height) / 100
    if unit == "vmax":
        return value * max(context.page_width, context.page_height) / 100
    # "%"
    reference = context.font_size if percent_of is None else percent_of
    return value * reference / 100
