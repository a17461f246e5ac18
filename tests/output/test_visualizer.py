"""
Tests for the PIL debug preview.
"""

from PIL import Image

from pdftable.core.models import CellStyle, ContentBounds, ContentSize, RowLayout, SizedCell
from pdftable.output.visualizer import COLORS, save_debug_preview, visualize_rows


def make_row(index=0, page_index=0, background=None) -> RowLayout:
    style = CellStyle(content="a", background_color=background, row_index=index)
    cell = SizedCell(
        style=style,
        x=10,
        y=10 + index * 30,
        width=80,
        height=30,
        content_x=12,
        content_y=12 + index * 30,
        content_allocated_width=76,
        content_allocated_height=26,
        content_max=ContentSize(76, 26),
        content_bounds=ContentBounds(0, 0, 40, 10),
    )
    return RowLayout(index=index, y=cell.y, height=30, cells=(cell,), page_index=page_index)


class TestVisualizeRows:
    def test_when_scaled_then_image_size_follows_page(self):
        image = visualize_rows([make_row()], (200, 100), scale=2)
        assert image.size == (400, 200)
        assert image.mode == "RGB"

    def test_when_no_rows_then_blank_page(self):
        image = visualize_rows([], (50, 40))
        assert image.getextrema() == ((255, 255), (255, 255), (255, 255))

    def test_when_content_then_bounds_filled(self):
        # Arrange: content box spans x 12..52, y 12..22
        image = visualize_rows([make_row()], (200, 100))

        # Act
        pixel = image.getpixel((45, 20))

        # Assert: blue tint over white
        assert pixel[2] > pixel[0]

    def test_when_rows_on_other_page_then_skipped(self):
        rows = [make_row(0, page_index=0), make_row(1, page_index=1)]
        first = visualize_rows(rows, (200, 100), page_index=0)
        second = visualize_rows(rows, (200, 100), page_index=1)
        assert first.getpixel((45, 50)) == (255, 255, 255)
        assert second.getpixel((45, 50)) != (255, 255, 255)

    def test_when_background_then_cell_tinted(self):
        image = visualize_rows([make_row(background="red")], (200, 100))
        assert image.getpixel((80, 35)) != (255, 255, 255)
        assert COLORS["background"][3] < 255


class TestSaveDebugPreview:
    def test_when_saved_then_png_written(self, tmp_path):
        # Arrange
        output = tmp_path / "nested" / "preview.png"

        # Act
        result = save_debug_preview([make_row()], (100, 100), output)

        # Assert
        assert result == output
        assert output.exists()
        with Image.open(output) as image:
            assert image.format == "PNG"
            assert image.size == (100, 100)
