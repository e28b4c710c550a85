"""Tests for geometry value objects and size resolution."""

import pytest

from sitekit.models.geometry import (
    Box,
    Color,
    ExactSize,
    FitSize,
    Point,
    ScaleSize,
    box,
    color,
    parse_size,
    parse_size_text,
    point,
    resolve_crop_size,
    resolve_position,
    resolve_size,
)


class TestBox:
    """Tests for Box."""

    def test_rejects_non_positive_sides(self):
        with pytest.raises(ValueError):
            Box(0, 10)
        with pytest.raises(ValueError):
            Box(10, -1)

    def test_scale_rounds(self):
        assert Box(200, 100).scale(0.5) == Box(100, 50)
        assert Box(3, 3).scale(0.5) == Box(2, 2)

    def test_widen_and_heighten_keep_ratio(self):
        origin = Box(400, 200)
        assert origin.widen(100) == Box(100, 50)
        assert origin.heighten(100) == Box(200, 100)

    def test_contains(self):
        canvas = Box(100, 50)
        assert canvas.contains(Box(100, 50))
        assert canvas.contains(Box(10, 10), Point(90, 40))
        assert not canvas.contains(Box(10, 10), Point(91, 40))
        assert not canvas.contains(Box(101, 1))

    def test_str(self):
        assert str(Box(800, 600)) == "800x600"


class TestPoint:
    """Tests for Point."""

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            Point(-1, 0)

    def test_in_box(self):
        assert Point(0, 0).in_box(Box(1, 1))
        assert not Point(1, 0).in_box(Box(1, 1))

    def test_move(self):
        assert Point(1, 2).move(3) == Point(4, 5)
        assert Point(1, 2).move(3, 0) == Point(4, 2)


class TestCanonicalization:
    """Tests for the box/point/color helpers."""

    def test_box_shapes(self):
        assert box(Box(3, 4)) == Box(3, 4)
        assert box((3, 4)) == Box(3, 4)
        assert box([3, 4]) == Box(3, 4)
        assert box(3, 4) == Box(3, 4)

    def test_point_shapes(self):
        assert point(Point(1, 2)) == Point(1, 2)
        assert point((1, 2)) == Point(1, 2)
        assert point(1, 2) == Point(1, 2)
        assert point(5) == Point(5, 0)

    def test_color_scalar_is_grayscale(self):
        gray = color(128)
        assert gray.palette == "grayscale"
        assert gray.values == (128,)
        assert gray.alpha == 100

    def test_color_palette_by_count(self):
        assert color([1, 2, 3]).palette == "rgb"
        assert color((0, 0, 0, 100)).palette == "cmyk"

    def test_color_wrong_count_is_none(self):
        assert color([1, 2]) is None
        assert color([1, 2, 3, 4, 5]) is None

    def test_color_hex(self):
        assert color("#ff8800").values == (255, 136, 0)
        assert color("#fff").values == (255, 255, 255)

    def test_color_string_without_hash_is_grayscale(self):
        gray = color("128")

        assert gray.palette == "grayscale"
        assert gray.values == (128,)
        with pytest.raises(ValueError):
            color("fff")

    def test_color_alpha(self):
        assert color("#000000", 50).to_rgba() == (0, 0, 0, 128)
        with pytest.raises(ValueError):
            color(0, 101)

    def test_color_out_of_range(self):
        with pytest.raises(ValueError):
            color([256, 0, 0])
        with pytest.raises(ValueError):
            color([0, 0, 0, 101])

    def test_cmyk_to_rgba(self):
        assert Color("cmyk", (0, 0, 0, 100)).to_rgba() == (0, 0, 0, 255)
        assert Color("cmyk", (100, 0, 0, 0)).to_rgba() == (0, 255, 255, 255)

    def test_color_str_is_hex(self):
        assert str(color([255, 136, 0])) == "#ff8800"


class TestParseSize:
    """Tests for size parsing."""

    def test_int_is_square(self):
        assert parse_size(500) == ExactSize(500, 500)

    def test_float_is_ratio(self):
        assert parse_size(0.5) == ScaleSize(0.5)

    def test_sequence(self):
        assert parse_size((800, 600)) == ExactSize(800, 600)
        assert parse_size((800, 0)) == ExactSize(800, 0)
        assert parse_size((800, 600, True)) == FitSize(800, 600)

    def test_keep_ratio_needs_both_sides(self):
        assert parse_size((800, 0, True)) == ExactSize(800, 0)

    def test_any_third_item_keeps_ratio(self):
        assert parse_size((800, 600, False)) == FitSize(800, 600)
        assert parse_size((800, 600, 0)) == FitSize(800, 600)
        assert parse_size((800, 600, None)) == ExactSize(800, 600)

    def test_rejects_unsupported(self):
        for value in (True, "big", (1,), (1, 2, 3, 4), (0, 0), -5, 0.0):
            with pytest.raises(ValueError):
                parse_size(value)

    def test_text(self):
        assert parse_size_text("500") == ExactSize(500, 500)
        assert parse_size_text("0.25") == ScaleSize(0.25)
        assert parse_size_text("800x600") == ExactSize(800, 600)
        assert parse_size_text("x600") == ExactSize(0, 600)
        assert parse_size_text("800X600!") == FitSize(800, 600)

    def test_text_invalid(self):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size_text("wide")


class TestResolveSize:
    """Tests for target size computation."""

    origin = Box(400, 200)

    def test_exact(self):
        assert resolve_size((100, 100), self.origin) == Box(100, 100)

    def test_one_side_keeps_ratio(self):
        assert resolve_size((100, 0), self.origin) == Box(100, 50)
        assert resolve_size((0, 100), self.origin) == Box(200, 100)

    def test_ratio(self):
        assert resolve_size(0.25, self.origin) == Box(100, 50)

    def test_fit_limited_by_width(self):
        assert resolve_size((100, 100, True), self.origin) == Box(100, 50)

    def test_fit_limited_by_height(self):
        assert resolve_size((400, 50, True), self.origin) == Box(100, 50)

    def test_crop_missing_side_takes_original(self):
        assert resolve_crop_size((100, 0), self.origin) == Box(100, 200)
        assert resolve_crop_size((100, 100, True), self.origin) == Box(100, 100)
        assert resolve_crop_size(50, self.origin) == Box(50, 50)


class TestResolvePosition:
    """Tests for watermark placement."""

    canvas = Box(100, 50)
    item = Box(20, 10)

    def test_named_corners(self):
        assert resolve_position("top-left", self.canvas, self.item) == Point(0, 0)
        assert resolve_position("top-right", self.canvas, self.item) == Point(80, 0)
        assert resolve_position("bottom-left", self.canvas, self.item) == Point(0, 40)
        assert resolve_position("bottom-right", self.canvas, self.item) == Point(80, 40)

    def test_default_is_bottom_right(self):
        assert resolve_position("", self.canvas, self.item) == Point(80, 40)
        assert resolve_position("middle", self.canvas, self.item) == Point(80, 40)

    def test_explicit_point(self):
        assert resolve_position((5, 6), self.canvas, self.item) == Point(5, 6)
