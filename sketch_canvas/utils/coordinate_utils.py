"""
Coordinate conversion utilities for the drawing canvas.

Maps pointer, tablet and touch events from widget coordinates into
surface-local pixel coordinates.
"""

from typing import Optional
from PyQt6.QtCore import QPointF, QRectF


def event_position(event) -> Optional[QPointF]:
    """
    Extract the widget-local position carried by an input event.

    Touch events report a point list and the first point is used.
    Mouse and tablet events report a single position.

    Args:
        event: QMouseEvent, QTabletEvent, QTouchEvent or compatible object

    Returns:
        Position, or None if the event carries no point
    """
    points = getattr(event, 'points', None)
    if callable(points):
        touch_points = points()
        if not touch_points:
            return None
        return QPointF(touch_points[0].position())

    position = getattr(event, 'position', None)
    if callable(position):
        return QPointF(position())

    return None


def to_surface_coords(event, surface_rect: Optional[QRectF]) -> QPointF:
    """
    Convert an event position to surface-local coordinates.

    Args:
        event: Input event (see event_position)
        surface_rect: On-screen rectangle of the surface, None if unmounted

    Returns:
        Surface-local position, (0, 0) when no surface is mounted
    """
    if surface_rect is None:
        return QPointF(0, 0)

    pos = event_position(event)
    if pos is None:
        return QPointF(0, 0)

    return QPointF(pos.x() - surface_rect.x(), pos.y() - surface_rect.y())


class CoordinateConverter:
    """
    Tracks where the surface sits inside its host widget.

    The surface is letterboxed inside the widget, so every pointer event
    has to be shifted by the surface's top-left offset before drawing.
    """

    def __init__(self):
        self._surface_rect: Optional[QRectF] = None

    def set_surface_rect(self, rect: Optional[QRectF]):
        """
        Set the surface rectangle in widget coordinates.

        Args:
            rect: Surface area, or None when no surface is mounted
        """
        self._surface_rect = rect

    def get_surface_rect(self) -> Optional[QRectF]:
        """Get the current surface rectangle."""
        return self._surface_rect

    def has_surface(self) -> bool:
        return self._surface_rect is not None and not self._surface_rect.isEmpty()

    def to_surface_coords(self, event) -> QPointF:
        """Convert an event position to surface-local coordinates."""
        return to_surface_coords(event, self._surface_rect)

    def is_inside(self, event) -> bool:
        """
        Check if an event lands on the surface.

        Args:
            event: Input event

        Returns:
            True if the event position is inside the surface rect
        """
        if not self.has_surface():
            return False
        pos = event_position(event)
        return pos is not None and self._surface_rect.contains(pos)

    def clamp_to_surface(self, point: QPointF) -> QPointF:
        """
        Clamp a surface-local point to the surface bounds.

        Args:
            point: Surface-local position

        Returns:
            Clamped position
        """
        if not self.has_surface():
            return QPointF(0, 0)
        x = max(0.0, min(self._surface_rect.width(), point.x()))
        y = max(0.0, min(self._surface_rect.height(), point.y()))
        return QPointF(x, y)


__all__ = ['CoordinateConverter', 'event_position', 'to_surface_coords']
