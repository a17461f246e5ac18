"""
Module: core.models.sides

Purpose:
    Provides the Sides dataclass - an explicit four-sided record used for
    padding, border widths, border colours and border masks.

Key Classes:
    - Sides: Immutable {top, right, bottom, left} record

Dependencies:
    - dataclasses (std)

Used By:
    - layout.sides: normalize_sides() output
    - core.models.styles: CellStyle padding/border fields
    - output.borders: Border plans and masks
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")

SIDE_NAMES: Tuple[str, str, str, str] = ("top", "right", "bottom", "left")


@dataclass(frozen=True, slots=True)
class Sides(Generic[T]):
    """
    Four-sided value record (immutable).

    Iteration order is clockwise from the top, matching CSS shorthand.

    Attributes:
        top: Value for the top edge
        right: Value for the right edge
        bottom: Value for the bottom edge
        left: Value for the left edge

    Example:
        >>> pad = Sides(2, 4, 2, 4)
        >>> pad.vertical
        4
        >>> Sides.all(1).all_equal()
        True
    """

    top: T
    right: T
    bottom: T
    left: T

    @classmethod
    def all(cls, value: T) -> "Sides[T]":
        """Broadcast one value to every side."""
        return cls(value, value, value, value)

    def __iter__(self) -> Iterator[T]:
        return iter((self.top, self.right, self.bottom, self.left))

    def items(self) -> Iterator[Tuple[str, T]]:
        """Yield (side_name, value) pairs in clockwise order."""
        return zip(SIDE_NAMES, self)

    def map(self, fn: Callable[[T], U]) -> "Sides[U]":
        """Apply fn to each side independently."""
        return Sides(fn(self.top), fn(self.right), fn(self.bottom), fn(self.left))

    def all_equal(self) -> bool:
        """True when all four sides hold the same value."""
        return self.right == self.top and self.bottom == self.top and self.left == self.top

    def masked(self, mask: "Sides[bool]", off: T) -> "Sides[T]":
        """Replace every side whose mask is False with `off`."""
        return Sides(*(value if keep else off for value, keep in zip(self, mask)))

    @property
    def vertical(self):
        """Sum of top and bottom (numeric sides only)."""
        return self.top + self.bottom

    @property
    def horizontal(self):
        """Sum of left and right (numeric sides only)."""
        return self.left + self.right
