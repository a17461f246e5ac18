"""
Module: pdftable.output

Purpose:
    Drawing of laid-out tables: border merge policy, cell drawing through
    the document collaborator and raster debug previews.

Key Functions:
    - plan_border(), draw_border(): Border merge policy
    - render_row(), render_cell(): Draw sized cells
    - visualize_rows(), save_debug_preview(): PIL previews

Dependencies:
    - PIL: Preview images
    - pdftable.document.base: Drawing primitives

Used By:
    - pdftable.table: Row drawing and outer frame
"""

from .borders import BorderPlan, BorderSegment, draw_border, plan_border
from .renderer import content_offset, render_cell, render_content, render_row
from .visualizer import save_debug_preview, visualize_rows

__all__ = [
    "BorderPlan",
    "BorderSegment",
    "draw_border",
    "plan_border",
    "content_offset",
    "render_cell",
    "render_content",
    "render_row",
    "save_debug_preview",
    "visualize_rows",
]
