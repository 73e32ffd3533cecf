"""
Stroke renderer for painting tools onto raster layers.

Provides functions to draw brush segments and parametric shapes
(rectangle, ellipse, arrow) into a QImage with QPainter.
"""

import math
from typing import Tuple

from PyQt6.QtCore import Qt, QPointF, QRectF, QLineF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QImage

from ...config import Config
from .models import DrawConfig, DrawingTool


def _begin_painter(target: QImage) -> QPainter:
    painter = QPainter(target)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    return painter


def create_pen(config: DrawConfig) -> QPen:
    """Create pen with round caps/joins, brush-size width and stroke color."""
    pen = QPen(QColor(config.stroke_color), config.brush_size)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


# ==================== Brush ====================

def begin_brush_stroke(target: QImage, point: QPointF, config: DrawConfig):
    """
    Start a freehand stroke by stamping its first point.

    Args:
        target: Layer to paint on
        point: First point of the stroke
        config: Drawing configuration
    """
    if not config.has_stroke:
        return
    painter = _begin_painter(target)
    try:
        painter.setPen(create_pen(config))
        painter.drawPoint(point)
    finally:
        painter.end()


def extend_brush_stroke(target: QImage, last: QPointF, point: QPointF, config: DrawConfig):
    """
    Extend a freehand stroke by one segment.

    Only the newest segment is painted, so each move costs the same
    regardless of how long the stroke already is.

    Args:
        target: Layer to paint on
        last: Previous point of the stroke
        point: New point
        config: Drawing configuration
    """
    if not config.has_stroke:
        return
    painter = _begin_painter(target)
    try:
        painter.setPen(create_pen(config))
        painter.drawLine(QLineF(last, point))
    finally:
        painter.end()


# ==================== Shape Geometry ====================

def rect_from_points(start: QPointF, end: QPointF) -> QRectF:
    """Axis-aligned rectangle spanned by two corner points."""
    x = min(start.x(), end.x())
    y = min(start.y(), end.y())
    w = abs(end.x() - start.x())
    h = abs(end.y() - start.y())
    return QRectF(x, y, w, h)


def ellipse_from_points(start: QPointF, end: QPointF) -> Tuple[QPointF, float, float]:
    """
    Ellipse inscribed in the box spanned by two points.

    Returns:
        (center, radius_x, radius_y)
    """
    center = QPointF((start.x() + end.x()) / 2.0, (start.y() + end.y()) / 2.0)
    radius_x = abs(end.x() - start.x()) / 2.0
    radius_y = abs(end.y() - start.y()) / 2.0
    return center, radius_x, radius_y


def arrow_head_length(brush_size: int) -> float:
    return max(Config.ARROW_HEAD_MIN_LENGTH, brush_size * Config.ARROW_HEAD_SCALE)


def arrow_head_points(start: QPointF, end: QPointF, brush_size: int) -> Tuple[QPointF, QPointF]:
    """
    Compute the two wing endpoints of an arrow head.

    Wings leave the end point backwards along the line, spread by
    Config.ARROW_HEAD_SPREAD on either side.

    Args:
        start: Start point of the arrow line
        end: End point (where the head is drawn)
        brush_size: Stroke width, scales the head length

    Returns:
        (wing1, wing2) endpoints
    """
    length = arrow_head_length(brush_size)
    angle = math.atan2(end.y() - start.y(), end.x() - start.x())
    spread = Config.ARROW_HEAD_SPREAD

    wing1 = QPointF(
        end.x() - length * math.cos(angle - spread),
        end.y() - length * math.sin(angle - spread)
    )
    wing2 = QPointF(
        end.x() - length * math.cos(angle + spread),
        end.y() - length * math.sin(angle + spread)
    )
    return wing1, wing2


# ==================== Shape Drawing ====================

def draw_shape(
    target: QImage,
    tool: DrawingTool,
    start: QPointF,
    end: QPointF,
    config: DrawConfig
):
    """
    Draw the whole shape for a start/end pair.

    The fill pass is skipped for a transparent fill color; the stroke pass
    is skipped for a transparent stroke color or a zero brush size.
    Arrows have no fill.

    Args:
        target: Layer to paint on
        tool: Shape tool (RECTANGLE, CIRCLE or ARROW)
        start: Gesture start point
        end: Current gesture point
        config: Drawing configuration
    """
    if not tool.is_shape:
        raise ValueError(f"Not a shape tool: {tool}")

    painter = _begin_painter(target)
    try:
        if tool == DrawingTool.ARROW:
            _draw_arrow(painter, start, end, config)
        else:
            _draw_box_shape(painter, tool, start, end, config)
    finally:
        painter.end()


def _draw_box_shape(painter: QPainter, tool: DrawingTool, start: QPointF, end: QPointF,
                    config: DrawConfig):
    if config.has_fill:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(config.fill_color)))
        _draw_box_geometry(painter, tool, start, end)

    if config.has_stroke:
        painter.setPen(create_pen(config))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        _draw_box_geometry(painter, tool, start, end)


def _draw_box_geometry(painter: QPainter, tool: DrawingTool, start: QPointF, end: QPointF):
    if tool == DrawingTool.RECTANGLE:
        painter.drawRect(rect_from_points(start, end))
    else:
        center, radius_x, radius_y = ellipse_from_points(start, end)
        painter.drawEllipse(center, radius_x, radius_y)


def _draw_arrow(painter: QPainter, start: QPointF, end: QPointF, config: DrawConfig):
    if not config.has_stroke:
        return

    painter.setPen(create_pen(config))
    painter.drawLine(QLineF(start, end))

    if QLineF(start, end).length() > 0:
        wing1, wing2 = arrow_head_points(start, end, config.brush_size)
        painter.drawLine(QLineF(end, wing1))
        painter.drawLine(QLineF(end, wing2))


# ==================== Layers ====================

def create_layer(width: int, height: int) -> QImage:
    """Create a fully transparent layer."""
    layer = QImage(width, height, QImage.Format.Format_ARGB32)
    layer.fill(Qt.GlobalColor.transparent)
    return layer


def clear_layer(layer: QImage):
    """Reset a layer to fully transparent."""
    layer.fill(Qt.GlobalColor.transparent)


def merge_layer(target: QImage, layer: QImage):
    """Paint a layer over the target (source-over)."""
    painter = QPainter(target)
    try:
        painter.drawImage(0, 0, layer)
    finally:
        painter.end()


__all__ = [
    'create_pen',
    'begin_brush_stroke',
    'extend_brush_stroke',
    'rect_from_points',
    'ellipse_from_points',
    'arrow_head_length',
    'arrow_head_points',
    'draw_shape',
    'create_layer',
    'clear_layer',
    'merge_layer',
]
