"""Unit tests for the stroke renderer."""

import math

import numpy as np
import pytest
from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QImage

from sketch_canvas.widgets.drawing.models import DrawConfig, DrawingTool
from sketch_canvas.widgets.drawing.stroke_renderer import (
    arrow_head_length,
    arrow_head_points,
    begin_brush_stroke,
    clear_layer,
    create_layer,
    create_pen,
    draw_shape,
    ellipse_from_points,
    extend_brush_stroke,
    merge_layer,
    rect_from_points,
)


def _alpha(image, x, y):
    return image.pixelColor(x, y).alpha()


def _alpha_channel(image):
    """(height, width) array of alpha values."""
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    ptr = rgba.constBits()
    ptr.setsize(rgba.sizeInBytes())
    rows = np.frombuffer(ptr, dtype=np.uint8).reshape(rgba.height(), rgba.bytesPerLine())
    return rows[:, 3:rgba.width() * 4:4].copy()


def _painted_pixels(image):
    ys, xs = np.nonzero(_alpha_channel(image))
    return list(zip(xs.tolist(), ys.tolist()))


def _opaque_bounds(image):
    """(min_x, min_y, max_x, max_y) of fully opaque pixels."""
    ys, xs = np.nonzero(_alpha_channel(image) == 255)
    return xs.min(), ys.min(), xs.max(), ys.max()


class TestGeometry:
    """Tests for the pure shape geometry helpers."""

    def test_rect_from_points(self):
        assert rect_from_points(QPointF(10, 10), QPointF(50, 40)) == QRectF(10, 10, 40, 30)

    def test_rect_from_reversed_points(self):
        """Test that dragging up-left yields the same normalized box."""
        assert rect_from_points(QPointF(50, 40), QPointF(10, 10)) == QRectF(10, 10, 40, 30)

    def test_ellipse_from_points(self):
        center, radius_x, radius_y = ellipse_from_points(QPointF(0, 0), QPointF(40, 20))

        assert center == QPointF(20, 10)
        assert radius_x == 20
        assert radius_y == 10

    def test_degenerate_ellipse(self):
        center, radius_x, radius_y = ellipse_from_points(QPointF(5, 5), QPointF(5, 5))

        assert center == QPointF(5, 5)
        assert radius_x == 0
        assert radius_y == 0

    @pytest.mark.parametrize("brush_size,expected", [(1, 10.0), (2, 10.0), (4, 10.0), (8, 20.0), (20, 50.0)])
    def test_arrow_head_length(self, brush_size, expected):
        """Test that head length is max(10, 2.5 * brush size)."""
        assert arrow_head_length(brush_size) == pytest.approx(expected)

    def test_arrow_head_points_horizontal(self):
        """Test wing placement for a left-to-right arrow."""
        wing1, wing2 = arrow_head_points(QPointF(0, 0), QPointF(100, 0), 2)
        spread = math.pi / 7

        assert wing1.x() == pytest.approx(100 - 10 * math.cos(spread))
        assert wing1.y() == pytest.approx(10 * math.sin(spread))
        assert wing2.x() == pytest.approx(100 - 10 * math.cos(spread))
        assert wing2.y() == pytest.approx(-10 * math.sin(spread))

    def test_arrow_wings_are_symmetric(self):
        start, end = QPointF(10, 10), QPointF(70, 90)
        wing1, wing2 = arrow_head_points(start, end, 8)

        line_angle = math.atan2(end.y() - start.y(), end.x() - start.x())
        for wing in (wing1, wing2):
            length = math.hypot(end.x() - wing.x(), end.y() - wing.y())
            assert length == pytest.approx(20.0)

        angle1 = math.atan2(end.y() - wing1.y(), end.x() - wing1.x())
        angle2 = math.atan2(end.y() - wing2.y(), end.x() - wing2.x())
        assert angle1 - line_angle == pytest.approx(-(angle2 - line_angle))


class TestPen:
    """Tests for create_pen."""

    def test_pen_uses_config(self):
        pen = create_pen(DrawConfig(brush_size=7, stroke_color="#ff0000"))

        assert pen.widthF() == 7
        assert pen.color().name() == "#ff0000"
        assert pen.capStyle() == Qt.PenCapStyle.RoundCap
        assert pen.joinStyle() == Qt.PenJoinStyle.RoundJoin


class TestDrawShape:
    """Tests for draw_shape rendering."""

    def test_rectangle_outline(self, black_outline):
        """Test that an outline-only rectangle paints its edges and nothing inside."""
        layer = create_layer(60, 60)

        draw_shape(layer, DrawingTool.RECTANGLE, QPointF(10, 10), QPointF(50, 40),
                   black_outline(DrawingTool.RECTANGLE))

        assert layer.pixelColor(10, 25).name() == "#000000"
        assert _alpha(layer, 10, 25) == 255
        assert _alpha(layer, 30, 25) == 0
        assert _alpha(layer, 5, 25) == 0

        painted = _painted_pixels(layer)
        assert painted
        assert all(8 <= x <= 51 and 8 <= y <= 41 for x, y in painted)
        # 2px pen centered on x=10..50, y=10..40
        assert _opaque_bounds(layer) == (9, 9, 50, 40)

    def test_filled_rectangle(self):
        layer = create_layer(60, 60)
        config = DrawConfig(tool=DrawingTool.RECTANGLE, brush_size=2,
                            stroke_color="#000000", fill_color="#ff0000")

        draw_shape(layer, DrawingTool.RECTANGLE, QPointF(10, 10), QPointF(50, 40), config)

        assert layer.pixelColor(30, 25).name() == "#ff0000"
        assert layer.pixelColor(10, 25).name() == "#000000"

    def test_fill_only_rectangle(self):
        layer = create_layer(60, 60)
        config = DrawConfig(tool=DrawingTool.RECTANGLE, brush_size=2,
                            stroke_color="transparent", fill_color="#00ff00")

        draw_shape(layer, DrawingTool.RECTANGLE, QPointF(10, 10), QPointF(50, 40), config)

        assert layer.pixelColor(30, 25).name() == "#00ff00"
        assert _alpha(layer, 5, 25) == 0

    def test_fully_transparent_draws_nothing(self):
        layer = create_layer(60, 60)
        config = DrawConfig(tool=DrawingTool.RECTANGLE, brush_size=4,
                            stroke_color="transparent", fill_color="transparent")

        draw_shape(layer, DrawingTool.RECTANGLE, QPointF(10, 10), QPointF(50, 40), config)

        assert _painted_pixels(layer) == []

    def test_zero_brush_size_skips_stroke(self):
        layer = create_layer(60, 60)
        config = DrawConfig(tool=DrawingTool.CIRCLE, brush_size=0,
                            stroke_color="#000000", fill_color="transparent")

        draw_shape(layer, DrawingTool.CIRCLE, QPointF(0, 0), QPointF(40, 20), config)

        assert _painted_pixels(layer) == []

    def test_ellipse_outline(self, black_outline):
        layer = create_layer(60, 60)

        draw_shape(layer, DrawingTool.CIRCLE, QPointF(0, 0), QPointF(40, 20),
                   black_outline(DrawingTool.CIRCLE))

        assert _alpha(layer, 39, 10) > 0
        assert _alpha(layer, 20, 10) == 0

    def test_arrow_line_and_head(self, black_outline):
        layer = create_layer(120, 40)
        wing1, wing2 = arrow_head_points(QPointF(10, 20), QPointF(100, 20), 2)

        draw_shape(layer, DrawingTool.ARROW, QPointF(10, 20), QPointF(100, 20),
                   black_outline(DrawingTool.ARROW))

        assert _alpha(layer, 50, 20) > 0
        assert _alpha(layer, int(wing1.x()), int(wing1.y())) > 0
        assert _alpha(layer, int(wing2.x()), int(wing2.y())) > 0
        assert _alpha(layer, 50, 5) == 0

    def test_arrow_ignores_fill(self):
        layer = create_layer(60, 60)
        config = DrawConfig(tool=DrawingTool.ARROW, brush_size=2,
                            stroke_color="transparent", fill_color="#ff0000")

        draw_shape(layer, DrawingTool.ARROW, QPointF(5, 5), QPointF(50, 50), config)

        assert _painted_pixels(layer) == []

    def test_brush_is_not_a_shape(self, black_brush):
        with pytest.raises(ValueError):
            draw_shape(create_layer(10, 10), DrawingTool.BRUSH,
                       QPointF(0, 0), QPointF(5, 5), black_brush)


class TestBrushStroke:
    """Tests for freehand brush painting."""

    def test_begin_stamps_a_dot(self, black_brush):
        layer = create_layer(40, 40)

        begin_brush_stroke(layer, QPointF(20, 20), black_brush)

        assert layer.pixelColor(20, 20).name() == "#000000"
        assert _alpha(layer, 2, 2) == 0

    def test_extend_paints_segment(self, black_brush):
        layer = create_layer(60, 40)

        extend_brush_stroke(layer, QPointF(10, 20), QPointF(50, 20), black_brush)

        assert _alpha(layer, 30, 20) == 255
        assert _alpha(layer, 30, 2) == 0

    def test_transparent_brush_paints_nothing(self):
        layer = create_layer(40, 40)
        config = DrawConfig(brush_size=10, stroke_color="transparent")

        begin_brush_stroke(layer, QPointF(20, 20), config)
        extend_brush_stroke(layer, QPointF(5, 5), QPointF(35, 35), config)

        assert _painted_pixels(layer) == []


class TestLayers:
    """Tests for layer helpers."""

    def test_create_layer_is_transparent(self):
        layer = create_layer(8, 6)

        assert (layer.width(), layer.height()) == (8, 6)
        assert _painted_pixels(layer) == []

    def test_merge_and_clear(self, solid_image, black_outline):
        target = solid_image(60, 60, "#808080")
        layer = create_layer(60, 60)
        draw_shape(layer, DrawingTool.RECTANGLE, QPointF(10, 10), QPointF(50, 40),
                   black_outline(DrawingTool.RECTANGLE))

        merge_layer(target, layer)
        clear_layer(layer)

        assert target.pixelColor(10, 25).name() == "#000000"
        assert target.pixelColor(30, 25).name() == "#808080"
        assert _painted_pixels(layer) == []
