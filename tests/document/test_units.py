"""
Tests for size expression parsing and unit conversion.
"""

import pytest

from pdftable.document.units import SizeContext, parse_size, to_points

CONTEXT = SizeContext(font_size=10, root_font_size=12, ch_width=5, page_width=600, page_height=800)


class TestParseSize:
    @pytest.mark.parametrize(
        "expr, expected",
        [
            ("12", (12.0, None)),
            ("12.5mm", (12.5, "mm")),
            (" 3 em ", (3.0, "em")),
            (".5in", (0.5, "in")),
            ("-2pt", (-2.0, "pt")),
            ("50%", (50.0, "%")),
        ],
    )
    def test_when_valid_then_value_and_unit(self, expr, expected):
        assert parse_size(expr) == expected

    @pytest.mark.parametrize("expr", ["", "wide", "12 furlongs", "1.2.3pt", "em"])
    def test_when_invalid_then_raises(self, expr):
        with pytest.raises(ValueError, match="Unsupported size"):
            parse_size(expr)


class TestToPoints:
    """Tests for to_points()."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            ("1in", 72.0),
            ("96px", 72.0),
            ("2.54cm", 72.0),
            ("25.4mm", 72.0),
            ("1pc", 12.0),
            ("7pt", 7.0),
            ("7", 7.0),
        ],
    )
    def test_when_absolute_unit_then_converted(self, size, expected):
        assert to_points(size, CONTEXT) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "size, expected",
        [
            ("2em", 20.0),
            ("2rem", 24.0),
            ("2ex", 10.0),
            ("3ch", 15.0),
            ("10vw", 60.0),
            ("10vh", 80.0),
            ("10vmin", 60.0),
            ("10vmax", 80.0),
        ],
    )
    def test_when_relative_unit_then_uses_context(self, size, expected):
        assert to_points(size, CONTEXT) == pytest.approx(expected)

    def test_when_percent_without_reference_then_font_size(self):
        assert to_points("50%", CONTEXT) == 5.0

    def test_when_percent_with_reference_then_share_of_it(self):
        assert to_points("25%", CONTEXT, percent_of=400) == 100.0

    def test_when_number_then_points(self):
        assert to_points(3, CONTEXT) == 3.0
        assert to_points(2.5, CONTEXT) == 2.5

    def test_when_bool_then_zero_or_one(self):
        assert to_points(True, CONTEXT) == 1.0
        assert to_points(False, CONTEXT) == 0.0

    def test_when_unsupported_type_then_raises(self):
        with pytest.raises(ValueError, match="Unsupported size"):
            to_points([1, 2], CONTEXT)
