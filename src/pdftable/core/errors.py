"""
Module: core.errors

Purpose:
    Exceptions raised by the table engine. Only construction problems are
    fatal; everything else degrades with a logged warning.

Used By:
    - core.models.table_spec: Column count validation
    - layout.rows: Row ordering guard
"""

from __future__ import annotations


class TableError(Exception):
    """Base error for table construction and layout."""
    pass


class InvalidColumnCountError(TableError, ValueError):
    """Explicit column count is zero or negative."""

    def __init__(self, cols: int):
        super().__init__(f"cols must be greater than 0: {cols}")
        self.cols = cols


class RowOrderError(TableError):
    """Rows were measured out of order."""

    def __init__(self, expected: int, received: int):
        super().__init__(f"Row {received} measured out of order, expected row {expected}")
        self.expected = expected
        self.received = received
