"""
Module: layout.sides

Purpose:
    Expand side-definition shorthand into an explicit Sides record.

    Accepted shapes:
    - single value                      -> all four sides
    - [vertical, horizontal]            -> top/bottom, right/left
    - [top, right, bottom, left]
    - {"vertical": v, "horizontal": h}
    - {"top": t, "right": r, "bottom": b, "left": l}

    Other list lengths are read clockwise from the top, and a mapping
    missing sides takes the default for them; both log a warning.

Key Functions:
    - normalize_sides(): Shorthand -> Sides with optional transformer

Dependencies:
    - core.models.sides: Sides

Used By:
    - layout.styles: Cell padding/border/border_color
    - table.Table: Outer frame border
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from pdftable.core.models import Sides

logger = logging.getLogger(__name__)

_FOUR = ("top", "right", "bottom", "left")


def _identity(value: Any) -> Any:
    return value


def normalize_sides(
    sides: Any,
    default: Any = None,
    transformer: Optional[Callable[[Any], Any]] = None,
) -> Sides:
    """
    Convert any side definition into an explicit four-sided record.

    An absent definition (None) is replaced by `default` before shape
    detection, so a shorthand default is itself expanded. The transformer
    is applied to each resolved side independently.

    Args:
        sides: Side definition in any accepted shape, or None
        default: Definition used when `sides` is None
        transformer: Per-side conversion (e.g. size expression -> points)

    Returns:
        Sides record with transformed values

    Example:
        >>> normalize_sides([1, 2])
        Sides(top=1, right=2, bottom=1, left=2)
        >>> normalize_sides(None, default={"vertical": 3, "horizontal": 0})
        Sides(top=3, right=0, bottom=3, left=0)
    """
    transform = transformer or _identity
    from_default = sides is None
    if from_default:
        sides = default

    if isinstance(sides, Sides):
        return sides.map(transform)

    if isinstance(sides, (list, tuple)):
        if len(sides) == 2:
            sides = {"vertical": sides[0], "horizontal": sides[1]}
        elif len(sides) == 4:
            sides = dict(zip(_FOUR, sides))
        else:
            logger.warning(
                f"Side definition with {len(sides)} values is not a valid shorthand, "
                f"reading it clockwise from the top"
            )
            sides = dict(zip(_FOUR, sides))

    if isinstance(sides, Mapping):
        if "vertical" in sides and "horizontal" in sides:
            vertical, horizontal = sides["vertical"], sides["horizontal"]
            sides = {"top": vertical, "right": horizontal, "bottom": vertical, "left": horizontal}
        missing = [key for key in _FOUR if key not in sides]
        if missing:
            logger.warning(
                f"Side definition {dict(sides)!r} does not name {', '.join(missing)}, "
                f"using the default there"
            )
            fallback = Sides.all(None) if from_default else normalize_sides(default)
            sides = {key: sides.get(key, getattr(fallback, key)) for key in _FOUR}
        return Sides(*(transform(sides[key]) for key in _FOUR))

    return Sides.all(transform(sides))
