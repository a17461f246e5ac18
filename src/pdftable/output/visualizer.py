"""
Module: output.visualizer

Purpose:
    Raster debug preview of a laid-out table. Draws every sized cell's
    box, allocated content area and measured content bounds onto a blank
    page image, without going through a PDF.

Key Functions:
    - visualize_rows(): Create preview image for one page of rows
    - save_debug_preview(): Save preview to disk

Dependencies:
    - PIL: Image drawing
    - core.models.geometry: RowLayout, SizedCell

Used By:
    - scripts/generate_sample_tables.py
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Tuple

from PIL import Image, ImageDraw, ImageFont

from pdftable.core.models import RowLayout, SizedCell

from .renderer import content_offset

logger = logging.getLogger(__name__)

# Visualization constants
COLORS = {
    "cell": (0, 128, 0, 180),          # Green - cell box
    "allocated": (255, 165, 0, 160),   # Orange - content area inside padding
    "content": (0, 0, 255, 120),       # Blue - measured content bounds
    "background": (200, 200, 200, 90), # Grey - cells with a background colour
}

PAGE_COLOR = (255, 255, 255, 255)
LABEL_BG_COLOR = (0, 0, 0, 200)
LABEL_TEXT_COLOR = (255, 255, 255)
BOX_LINE_WIDTH = 1
FONT_SIZE = 10


def visualize_rows(
    rows: Iterable[RowLayout],
    page_size: Tuple[float, float],
    scale: float = 1.0,
    *,
    page_index: int = 0,
) -> Image.Image:
    """
    Create a preview of the rows laid out on one page.

    Each cell is drawn as three nested boxes: the cell box (green), the
    allocated content area (orange) and the measured content bounds
    (blue, filled). Cells are labelled "row,column".

    Args:
        rows: Finalised rows from the row engine
        page_size: (width, height) of the page in points
        scale: Pixels per point
        page_index: Only rows on this page are drawn

    Returns:
        RGB image of the page

    Example:
        >>> img = visualize_rows(table.rows, A4, scale=2)
        >>> img.save("preview.png")
    """
    width_px = max(1, round(page_size[0] * scale))
    height_px = max(1, round(page_size[1] * scale))
    page = Image.new("RGBA", (width_px, height_px), PAGE_COLOR)

    overlay = Image.new("RGBA", page.size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(overlay)

    try:
        font = ImageFont.truetype("Arial.ttf", FONT_SIZE)
    except (IOError, OSError):
        font = ImageFont.load_default()

    count = 0
    for row in rows:
        if row.page_index != page_index:
            continue
        for cell in row.cells:
            _draw_cell(draw, cell, scale, font)
            count += 1

    page = Image.alpha_composite(page, overlay)
    logger.debug(f"Previewed {count} cells on page {page_index}")
    return page.convert("RGB")


def _scaled(box: Tuple[float, float, float, float], scale: float) -> Tuple[int, int, int, int]:
    x, y, w, h = box
    return (
        round(x * scale),
        round(y * scale),
        round((x + max(w, 0)) * scale),
        round((y + max(h, 0)) * scale),
    )


def _draw_cell(
    draw: ImageDraw.ImageDraw,
    cell: SizedCell,
    scale: float,
    font: ImageFont.ImageFont,
) -> None:
    """Draw one cell's boxes and its grid label."""
    cell_box = _scaled((cell.x, cell.y, cell.width, cell.height), scale)
    if cell.style.background_color is not None:
        draw.rectangle(cell_box, fill=COLORS["background"])
    draw.rectangle(cell_box, outline=COLORS["cell"], width=BOX_LINE_WIDTH)

    draw.rectangle(
        _scaled(
            (cell.content_x, cell.content_y, cell.content_allocated_width, cell.content_allocated_height),
            scale,
        ),
        outline=COLORS["allocated"],
        width=BOX_LINE_WIDTH,
    )

    if cell.style.has_content:
        offset_x, offset_y = content_offset(cell)
        bounds = cell.content_bounds
        draw.rectangle(
            _scaled(
                (cell.content_x + offset_x, cell.content_y + offset_y, bounds.width, bounds.height),
                scale,
            ),
            fill=COLORS["content"],
        )

    label = f"{cell.style.row_index},{cell.style.col_index}"
    text_bbox = draw.textbbox((0, 0), label, font=font)
    text_width = text_bbox[2] - text_bbox[0]
    text_height = text_bbox[3] - text_bbox[1]
    label_x, label_y = cell_box[0] + 1, cell_box[1] + 1
    draw.rectangle(
        (label_x, label_y, label_x + text_width + 4, label_y + text_height + 4),
        fill=LABEL_BG_COLOR,
    )
    draw.text((label_x + 2, label_y + 2), label, fill=LABEL_TEXT_COLOR, font=font)


def save_debug_preview(
    rows: Iterable[RowLayout],
    page_size: Tuple[float, float],
    output_path: Path,
    scale: float = 1.0,
    *,
    page_index: int = 0,
) -> Path:
    """
    Create and save a preview image.

    Args:
        rows: Finalised rows
        page_size: (width, height) in points
        output_path: PNG file to write
        scale: Pixels per point
        page_index: Page to preview

    Returns:
        Path to the saved image
    """
    rows = list(rows)
    image = visualize_rows(rows, page_size, scale, page_index=page_index)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, "PNG")

    logger.info(f"Saved table preview for page {page_index} to {output_path}")
    return output_path
