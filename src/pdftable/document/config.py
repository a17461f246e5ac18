"""
Module: document.config

Purpose:
    Configuration for the ReportLab document backend.
    Defines page size, margins and the default font.

Key Classes:
    - PageConfig: Immutable page configuration

Dependencies:
    - reportlab.lib.pagesizes: Standard page sizes

Used By:
    - document.reportlab_document: Canvas setup and page geometry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from reportlab.lib.pagesizes import A4

# Same default margin as one inch in PDF points
DEFAULT_MARGIN_PT = 72.0
DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 12.0


@dataclass(frozen=True)
class PageConfig:
    """
    Configuration for document pages (immutable).

    Attributes:
        page_size: (width, height) in points
        margin_top: Top margin in points
        margin_bottom: Bottom margin in points
        margin_left: Left margin in points
        margin_right: Right margin in points
        font_name: Default font (also the root font for rem)
        font_size: Default font size in points
        line_height: Leading as a multiple of font size

    Example:
        >>> config = PageConfig()
        >>> round(config.available_height, 2)
        697.89
    """

    page_size: Tuple[float, float] = A4

    margin_top: float = DEFAULT_MARGIN_PT
    margin_bottom: float = DEFAULT_MARGIN_PT
    margin_left: float = DEFAULT_MARGIN_PT
    margin_right: float = DEFAULT_MARGIN_PT

    font_name: str = DEFAULT_FONT_NAME
    font_size: float = DEFAULT_FONT_SIZE
    line_height: float = 1.2

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        width, height = self.page_size
        if width <= 0 or height <= 0:
            raise ValueError(f"page_size must be positive: {self.page_size}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if self.line_height <= 0:
            raise ValueError(f"line_height must be positive: {self.line_height}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom
