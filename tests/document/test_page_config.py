"""
Tests for page configuration.
"""

import pytest
from reportlab.lib.pagesizes import A4, letter

from pdftable.document.config import PageConfig


class TestPageConfig:
    def test_defaults_when_created_then_a4_with_inch_margins(self):
        config = PageConfig()
        assert config.page_size == A4
        assert config.margin_top == 72.0
        assert config.font_name == "Helvetica"
        assert config.available_width == pytest.approx(A4[0] - 144)
        assert config.available_height == pytest.approx(A4[1] - 144)

    def test_when_custom_page_then_dimensions_follow(self):
        config = PageConfig(page_size=letter, margin_left=36, margin_right=36)
        assert config.page_width == 612
        assert config.available_width == 540

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"page_size": (0, 100)}, "page_size"),
            ({"font_size": 0}, "font_size"),
            ({"line_height": -1}, "line_height"),
            ({"margin_left": 400, "margin_right": 400}, "page width"),
            ({"margin_top": 500, "margin_bottom": 500}, "page height"),
        ],
    )
    def test_when_invalid_then_raises(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            PageConfig(**kwargs)
