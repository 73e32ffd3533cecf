"""
EventBus - Central event system for drawing configuration

Pattern: Observer/Publisher-Subscriber
The toolbar, keyboard shortcuts and any other controls write here;
the canvas listens and receives the configuration explicitly.
"""

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..config import Config
from ..utils.image_utils import ImageSource
from ..utils.sizing_utils import AspectRatio
from ..widgets.drawing.models import DrawConfig, DrawingTool


class EventBus(QObject):
    """
    Central event bus for decoupled communication between components

    Usage:
        event_bus = EventBus()
        event_bus.draw_config_changed.connect(canvas.set_draw_config)
        event_bus.set_tool("rectangle")
    """

    # Drawing configuration events
    tool_changed = pyqtSignal(str)  # tool name
    brush_size_changed = pyqtSignal(int)  # size in pixels
    stroke_color_changed = pyqtSignal(str)  # color string
    fill_color_changed = pyqtSignal(str)  # color string or "transparent"
    draw_config_changed = pyqtSignal(object)  # DrawConfig

    # Surface events
    aspect_ratio_changed = pyqtSignal(str)  # "W:H"
    background_color_changed = pyqtSignal(str)  # color string
    background_image_changed = pyqtSignal(object)  # ImageSource or None

    # Canvas command events
    undo_requested = pyqtSignal()
    clear_requested = pyqtSignal()

    # Error events
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def __init__(self):
        super().__init__()

        # State storage
        self._tool: DrawingTool = DrawingTool.parse(Config.DEFAULT_TOOL)
        self._brush_size: int = Config.DEFAULT_BRUSH_SIZE
        self._stroke_color: str = Config.DEFAULT_STROKE_COLOR
        self._fill_color: str = Config.DEFAULT_FILL_COLOR
        self._aspect_ratio: AspectRatio = AspectRatio.parse(Config.DEFAULT_ASPECT_RATIO)
        self._background_color: str = Config.DEFAULT_BACKGROUND_COLOR
        self._background_image: Optional[ImageSource] = None

    # Getters (read current state)

    def get_tool(self) -> DrawingTool:
        return self._tool

    def get_brush_size(self) -> int:
        return self._brush_size

    def get_stroke_color(self) -> str:
        return self._stroke_color

    def get_fill_color(self) -> str:
        return self._fill_color

    def get_aspect_ratio(self) -> AspectRatio:
        return self._aspect_ratio

    def get_background_color(self) -> str:
        return self._background_color

    def get_background_image(self) -> Optional[ImageSource]:
        return self._background_image

    def get_draw_config(self) -> DrawConfig:
        """Snapshot of the current drawing configuration"""
        return DrawConfig(
            tool=self._tool,
            brush_size=self._brush_size,
            stroke_color=self._stroke_color,
            fill_color=self._fill_color,
        )

    # Setters (update state and emit signals)

    def set_tool(self, tool):
        """
        Set the active drawing tool

        Args:
            tool: DrawingTool or its name ("brush", "rectangle", "circle", "arrow")

        Raises:
            ValueError: If the tool name is unknown
        """
        tool = DrawingTool.parse(tool)
        if self._tool != tool:
            self._tool = tool
            self.tool_changed.emit(tool.value)
            self.draw_config_changed.emit(self.get_draw_config())

    def set_brush_size(self, size: int):
        """
        Set brush size, clamped to the supported range

        Args:
            size: Size in pixels
        """
        size = Config.clamp_brush_size(size)
        if self._brush_size != size:
            self._brush_size = size
            self.brush_size_changed.emit(size)
            self.draw_config_changed.emit(self.get_draw_config())

    def adjust_brush_size(self, delta: int):
        """Grow or shrink the brush by delta pixels"""
        self.set_brush_size(self._brush_size + delta)

    def set_stroke_color(self, color: str):
        if self._stroke_color != color:
            self._stroke_color = color
            self.stroke_color_changed.emit(color)
            self.draw_config_changed.emit(self.get_draw_config())

    def set_fill_color(self, color: str):
        if self._fill_color != color:
            self._fill_color = color
            self.fill_color_changed.emit(color)
            self.draw_config_changed.emit(self.get_draw_config())

    def set_aspect_ratio(self, aspect_ratio):
        """
        Set surface aspect ratio

        Args:
            aspect_ratio: "W:H" string or AspectRatio

        Raises:
            ValueError: If the ratio is malformed
        """
        aspect_ratio = AspectRatio.parse(aspect_ratio)
        if self._aspect_ratio != aspect_ratio:
            self._aspect_ratio = aspect_ratio
            self.aspect_ratio_changed.emit(str(aspect_ratio))

    def set_background_color(self, color: str):
        if self._background_color != color:
            self._background_color = color
            self.background_color_changed.emit(color)

    def set_background_image(self, source: Optional[ImageSource]):
        """
        Set background image source

        Args:
            source: Encoded bytes, data URL, file path, or None to remove
        """
        self._background_image = source
        self.background_image_changed.emit(source)

    # Convenience methods

    def request_undo(self):
        self.undo_requested.emit()

    def request_clear(self):
        self.clear_requested.emit()

    def report_error(self, error_type: str, message: str):
        """
        Report an error to the UI

        Args:
            error_type: Type of error (e.g., "background", "export")
            message: Human-readable error message
        """
        self.error_occurred.emit(error_type, message)


# Singleton instance (lazy initialization)
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


# Export
__all__ = ['EventBus', 'get_event_bus']
