"""UI Widgets for Sketch Canvas"""

from .drawing_canvas import DrawingCanvas

__all__ = [
    'DrawingCanvas',
]
