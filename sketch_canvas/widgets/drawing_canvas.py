"""
DrawingCanvas - Aspect-ratio constrained raster drawing widget

Hosts a DrawingSession inside a QWidget:
- Measures the widget as the container box (debounced on resize)
- Letterboxes the surface and maps mouse/touch input onto it
- Loads background images off the UI thread
- Paints the surface, the live shape preview and a brush-size cursor
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, pyqtSignal, QPointF, QRectF, QEvent, QTimer
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QCursor, QImage

from ..config import Config
from ..services.background_loader import BackgroundLoader
from ..utils.coordinate_utils import CoordinateConverter, event_position
from ..utils.image_utils import ImageSource
from .drawing.models import DrawConfig, DrawingTool, is_transparent
from .drawing.session import DrawingSession

logger = logging.getLogger(__name__)


class DrawingCanvas(QWidget):
    """
    Interactive drawing canvas.

    Features:
    - Brush, rectangle, circle and arrow tools
    - Solid background color with optional stretched background image
    - Snapshot undo (bounded)
    - Live re-rendering when the widget or aspect ratio changes size

    Public contract for the rest of the application:
    export_image(), clear() and undo().
    """

    # Signals
    drawing_started = pyqtSignal()
    drawing_finished = pyqtSignal()
    drawing_modified = pyqtSignal()
    history_changed = pyqtSignal(int)  # history length
    background_failed = pyqtSignal(str)  # error_message

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        session: Optional[DrawingSession] = None,
        background_loader: Optional[BackgroundLoader] = None
    ):
        super().__init__(parent)

        self._session = session or DrawingSession()
        self._config = DrawConfig()
        self._coord = CoordinateConverter()

        # Brush preview cursor position (widget coordinates)
        self._hover_pos: Optional[QPointF] = None

        self._loader = background_loader or BackgroundLoader(self)
        self._loader.image_loaded.connect(self._on_background_loaded)
        self._loader.image_cleared.connect(self._on_background_cleared)
        self._loader.load_failed.connect(self._on_background_failed)

        # Last resize wins: every resize restarts the timer
        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(Config.RESIZE_DEBOUNCE_MS)
        self._resize_timer.timeout.connect(self._apply_container_size)

        # Centered brush-size preview shown for a while after the size changes
        self._size_preview_timer = QTimer(self)
        self._size_preview_timer.setSingleShot(True)
        self._size_preview_timer.setInterval(Config.BRUSH_SIZE_PREVIEW_MS)
        self._size_preview_timer.timeout.connect(self.update)

        self._setup_widget()

    def _setup_widget(self):
        """Configure the widget."""
        self.setMouseTracking(True)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
        self.setMinimumSize(64, 64)

    # ==================== Properties ====================

    @property
    def session(self) -> DrawingSession:
        return self._session

    @property
    def draw_config(self) -> DrawConfig:
        return self._config

    @property
    def background_loader(self) -> BackgroundLoader:
        return self._loader

    @property
    def is_previewing_brush_size(self) -> bool:
        return self._size_preview_timer.isActive()

    # ==================== Configuration ====================

    def set_draw_config(self, config: DrawConfig):
        """Set the configuration used for the next gesture."""
        if config.brush_size != self._config.brush_size:
            self._size_preview_timer.start()
        self._config = config
        self.update()

    def set_aspect_ratio(self, aspect_ratio):
        """Change the surface aspect ratio ("W:H" or AspectRatio)."""
        if self._session.set_aspect_ratio(aspect_ratio):
            self._on_surface_changed()

    def set_background_color(self, color: str):
        """Set the background color; foreground content is reset."""
        self._apply_background(self._session.background.with_changes(color=color))

    def set_background_image(self, source: Optional[ImageSource]):
        """
        Set the background image.

        Decoding runs in the background; only the latest request is applied.

        Args:
            source: Encoded bytes, data URL, file path, or None to remove
        """
        self._loader.request(source)

    def connect_event_bus(self, event_bus):
        """
        Follow the configuration published on an event bus.

        Args:
            event_bus: EventBus instance
        """
        self.set_draw_config(event_bus.get_draw_config())
        self.set_aspect_ratio(event_bus.get_aspect_ratio())
        self.set_background_color(event_bus.get_background_color())
        if event_bus.get_background_image() is not None:
            self.set_background_image(event_bus.get_background_image())

        event_bus.draw_config_changed.connect(self.set_draw_config)
        event_bus.aspect_ratio_changed.connect(self.set_aspect_ratio)
        event_bus.background_color_changed.connect(self.set_background_color)
        event_bus.background_image_changed.connect(self.set_background_image)
        event_bus.undo_requested.connect(self.undo)
        event_bus.clear_requested.connect(self.clear)
        self.background_failed.connect(
            lambda message: event_bus.report_error('background', message)
        )

    # ==================== Background ====================

    def _apply_background(self, background):
        if not self._session.set_background(background):
            return
        self._emit_history_changed()
        self.drawing_modified.emit()
        self.update()

    def _on_background_loaded(self, image: QImage):
        self._apply_background(self._session.background.with_changes(image=image))

    def _on_background_cleared(self):
        self._apply_background(self._session.background.with_changes(image=None))

    def _on_background_failed(self, error_message: str):
        # Drop a previous image so the surface falls back to the solid color;
        # without one the drawing is left untouched
        if self._session.background.image is not None:
            self._apply_background(self._session.background.with_changes(image=None))
        self.background_failed.emit(error_message)

    # ==================== Layout ====================

    def surface_rect(self) -> Optional[QRectF]:
        """Surface rectangle in widget coordinates, centered in the widget."""
        width, height = self._session.surface_size
        if width <= 0 or height <= 0:
            return None
        x = (self.width() - width) / 2.0
        y = (self.height() - height) / 2.0
        return QRectF(x, y, width, height)

    def resizeEvent(self, event):
        """Debounce container resizes."""
        super().resizeEvent(event)
        self._coord.set_surface_rect(self.surface_rect())
        self._resize_timer.start()

    def flush_pending_resize(self):
        """Apply a pending container size immediately."""
        self._resize_timer.stop()
        self._apply_container_size()

    def _apply_container_size(self):
        if self._session.set_container_size(self.width(), self.height()):
            self._on_surface_changed()
        else:
            self._coord.set_surface_rect(self.surface_rect())
            self.update()

    def _on_surface_changed(self):
        self._coord.set_surface_rect(self.surface_rect())
        self._emit_history_changed()
        self.update()

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton or not self._coord.is_inside(event):
            super().mousePressEvent(event)
            return

        self._start_gesture(event)
        event.accept()

    def mouseMoveEvent(self, event):
        self._hover_pos = QPointF(event.position())

        if self._session.is_drawing:
            self._continue_gesture(event)
            event.accept()
        else:
            if self._config.tool == DrawingTool.BRUSH:
                self.update()
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if self._session.is_drawing and event.button() == Qt.MouseButton.LeftButton:
            self._finish_gesture(self._surface_point(event))
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        """Leaving the widget ends the gesture and hides the brush cursor."""
        self._hover_pos = None
        if self._session.is_drawing:
            self._finish_gesture(None)
        self.update()
        super().leaveEvent(event)

    # ==================== Touch Events ====================

    def event(self, event):
        """Route touch input into the same gesture handling as the mouse."""
        event_type = event.type()

        if event_type == QEvent.Type.TouchBegin:
            if self._coord.is_inside(event):
                self._start_gesture(event)
            return True
        elif event_type == QEvent.Type.TouchUpdate:
            if self._session.is_drawing:
                self._continue_gesture(event)
            return True
        elif event_type == QEvent.Type.TouchEnd:
            if self._session.is_drawing:
                self._finish_gesture(self._surface_point(event))
            return True
        elif event_type == QEvent.Type.TouchCancel:
            if self._session.cancel_gesture():
                self._emit_history_changed()
                self.update()
            return True

        return super().event(event)

    # ==================== Gestures ====================

    def _surface_point(self, event) -> Optional[QPointF]:
        if event_position(event) is None:
            return None
        return self._coord.clamp_to_surface(self._coord.to_surface_coords(event))

    def _start_gesture(self, event):
        point = self._surface_point(event)
        if point is None:
            return
        if self._session.pointer_down(point, self._config):
            self.drawing_started.emit()
            self.update()

    def _continue_gesture(self, event):
        point = self._surface_point(event)
        if point is not None and self._session.pointer_move(point):
            self.update()

    def _finish_gesture(self, point: Optional[QPointF]):
        if self._session.pointer_up(point):
            self.drawing_finished.emit()
            self.drawing_modified.emit()
            self._emit_history_changed()
        self.update()

    def _emit_history_changed(self):
        self.history_changed.emit(self._session.history_size)

    # ==================== Painting ====================

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), QColor(Config.CANVAS_BACKDROP_COLOR))

            rect = self.surface_rect()
            view = self._session.render_view()
            if rect is None or view is None:
                return

            painter.drawImage(rect.topLeft(), view)
            self._paint_brush_preview(painter, rect)
            self._paint_brush_size_preview(painter, rect)
        finally:
            painter.end()

    def _paint_brush_preview(self, painter: QPainter, rect: QRectF):
        """Translucent circle of the brush diameter under the cursor."""
        if self._config.tool != DrawingTool.BRUSH or self._hover_pos is None:
            return
        if not rect.contains(self._hover_pos):
            return

        radius = self._config.brush_size / 2.0
        color = QColor(self._config.stroke_color)
        if is_transparent(self._config.stroke_color):
            color = QColor(Qt.GlobalColor.white)
        color.setAlphaF(Config.BRUSH_PREVIEW_OPACITY)

        outline = QColor(255, 255, 255, 128)

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setBrush(QBrush(color))
        painter.setPen(QPen(outline, 1))
        painter.drawEllipse(self._hover_pos, radius, radius)

    def _paint_brush_size_preview(self, painter: QPainter, rect: QRectF):
        """Circle of the brush diameter in the middle of the surface."""
        if not self.is_previewing_brush_size or self._config.brush_size <= 0:
            return

        radius = self._config.brush_size / 2.0
        color = QColor(self._config.stroke_color)
        if is_transparent(self._config.stroke_color):
            color = QColor(Qt.GlobalColor.white)
        color.setAlphaF(Config.BRUSH_SIZE_PREVIEW_OPACITY)

        # Shape tools get an outline so a light stroke color stays visible
        pen = Qt.PenStyle.NoPen
        if self._config.tool != DrawingTool.BRUSH:
            pen = QPen(QColor(255, 255, 255, 128), 1)

        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setBrush(QBrush(color))
        painter.setPen(pen)
        painter.drawEllipse(rect.center(), radius, radius)

    # ==================== Public Operations ====================

    def export_image(self) -> bytes:
        """PNG bytes of the current surface at its current pixel size."""
        return self._session.export_image()

    def export_data_url(self) -> str:
        """PNG data URL of the current surface."""
        return self._session.export_data_url()

    def clear(self):
        """Reset to the background alone."""
        self._session.clear()
        self._emit_history_changed()
        self.drawing_modified.emit()
        self.update()

    def undo(self):
        """Step back one stroke or shape."""
        self._session.undo()
        self._emit_history_changed()
        self.drawing_modified.emit()
        self.update()


__all__ = ['DrawingCanvas']
