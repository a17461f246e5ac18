"""
Module: layout.rotation

Purpose:
    Largest content rectangle that still fits inside a cell's allocated
    content box once rotated about its centre.

Key Functions:
    - compute_content_bounds(): (rotation, alloc_w, alloc_h) -> ContentSize
    - rotated_extent(): Axis-aligned extent of a rotated rectangle

Geometry:
    A w x h rectangle rotated by t occupies
        W(t) = w|cos t| + h|sin t|   horizontally
        H(t) = w|sin t| + h|cos t|   vertically

    With only the width binding, area w*h on the line W(t) = A_w peaks at
        w = A_w / (2|cos t|),   h = A_w / (2|sin t|)

    Folding t onto its acute reference angle (|cos|, |sin|) is what makes
    the second and fourth quadrants the mirror image of the first and
    third: cos and sin trade roles, and the result is the same pair.

    If that optimum overflows A_h, the height-only optimum is tried
    (A_h / (2|sin t|), A_h / (2|cos t|)); if neither fits, both constraints
    bind and the rectangle sits on their intersection:
        w = (A_w|cos| - A_h|sin|) / (cos^2 - sin^2)
        h = (A_h|cos| - A_w|sin|) / (cos^2 - sin^2)

Dependencies:
    - math (std)
    - core.models.geometry: ContentSize

Used By:
    - layout.rows: Content box for every measured cell
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from pdftable.core.models import ContentSize

# Relative tolerance for "fits" checks and near-degenerate determinants.
EPSILON = 1e-9


def _trig(rotation: float) -> Tuple[float, float]:
    """|cos|, |sin| of rotation in degrees, exact on quarter turns."""
    angle = rotation % 360
    if angle in (0, 180):
        return 1.0, 0.0
    if angle in (90, 270):
        return 0.0, 1.0
    radians = math.radians(angle)
    return abs(math.cos(radians)), abs(math.sin(radians))


def rotated_extent(rotation: float, width: float, height: float) -> Tuple[float, float]:
    """Axis-aligned (width, height) of a width x height box rotated by `rotation` degrees."""
    cos, sin = _trig(rotation)
    return width * cos + height * sin, width * sin + height * cos


def _fits(cos: float, sin: float, w: float, h: float, alloc_w: float, alloc_h: float) -> bool:
    tolerance = EPSILON * max(1.0, alloc_w, alloc_h)
    return (
        w * cos + h * sin <= alloc_w + tolerance
        and w * sin + h * cos <= alloc_h + tolerance
    )


def _single_constraint(cos: float, sin: float, bound: float) -> ContentSize:
    """Area optimum on the line w*cos + h*sin = bound."""
    return ContentSize(width=bound / (2 * cos), height=bound / (2 * sin))


def _both_constraints(cos: float, sin: float, alloc_w: float, alloc_h: float) -> Optional[ContentSize]:
    """Intersection of both extent constraints, or None if degenerate."""
    denominator = cos * cos - sin * sin
    if abs(denominator) < EPSILON:
        return None
    width = (alloc_w * cos - alloc_h * sin) / denominator
    height = (alloc_h * cos - alloc_w * sin) / denominator
    if width < 0 or height < 0:
        return None
    return ContentSize(width=width, height=height)


def compute_content_bounds(rotation: float, alloc_width: float, alloc_height: float) -> ContentSize:
    """
    Compute the maximum-area content rectangle for a rotated cell.

    Quarter turns are exact: 0/180 return the allocation unchanged and
    90/270 swap it. Negative allocations (padding wider than the cell)
    are treated as zero.

    Args:
        rotation: Rotation in degrees (any value, taken modulo 360)
        alloc_width: Allocated content width
        alloc_height: Allocated content height

    Returns:
        Non-negative ContentSize of the unrotated content rectangle

    Example:
        >>> compute_content_bounds(90, 100, 40)
        ContentSize(width=40, height=100)
        >>> round(compute_content_bounds(45, 100, 100).width, 2)
        70.71
    """
    alloc_width = max(alloc_width, 0)
    alloc_height = max(alloc_height, 0)
    cos, sin = _trig(rotation)

    if sin == 0:
        return ContentSize(width=alloc_width, height=alloc_height)
    if cos == 0:
        return ContentSize(width=alloc_height, height=alloc_width)
    if alloc_width == 0 or alloc_height == 0:
        return ContentSize(width=0.0, height=0.0)

    # Width-bound optimum; the common case for wide cells
    best = _single_constraint(cos, sin, alloc_width)
    if _fits(cos, sin, best.width, best.height, alloc_width, alloc_height):
        return best

    # Height-bound optimum: same shape of solution with cos and sin traded
    tall = _single_constraint(sin, cos, alloc_height)
    if _fits(cos, sin, tall.width, tall.height, alloc_width, alloc_height):
        return tall

    both = _both_constraints(cos, sin, alloc_width, alloc_height)
    if both is not None:
        return both

    # Degenerate (45 degrees with unequal sides): the tighter bound governs
    return _single_constraint(cos, sin, min(alloc_width, alloc_height))
