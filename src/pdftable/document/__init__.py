"""
Module: pdftable.document

Purpose:
    The document the table is laid out in: an abstract collaborator the
    engine measures and draws through, plus a ReportLab implementation.

Key Classes:
    - DocumentCollaborator: Abstract document interface
    - PageGeometry: Safe content area of a page
    - TextConstraints: Text measurement/drawing constraints
    - PageConfig: Page size, margins and default font
    - ReportLabDocument: Canvas-backed collaborator

Key Functions:
    - to_points(): Size expression -> points

Dependencies:
    - reportlab: PDF generation

Used By:
    - pdftable.layout, pdftable.output, pdftable.table
"""

from .base import DocumentCollaborator, PageGeometry, TextConstraints
from .config import PageConfig
from .units import SizeContext, parse_size, to_points
from .reportlab_document import ReportLabDocument

__all__ = [
    "DocumentCollaborator",
    "PageGeometry",
    "TextConstraints",
    "PageConfig",
    "SizeContext",
    "parse_size",
    "to_points",
    "ReportLabDocument",
]
