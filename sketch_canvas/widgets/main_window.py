"""
MainWindow - Main application window

Hosts the drawing canvas, offers the aspect ratio presets in a Canvas menu
and binds the drawing keyboard shortcuts.
"""

from typing import Optional

from PyQt6.QtWidgets import QMainWindow, QStatusBar
from PyQt6.QtGui import QActionGroup, QKeySequence, QShortcut

from ..config import Config
from ..events.event_bus import EventBus, get_event_bus
from ..utils.sizing_utils import supported_aspect_ratios
from .drawing.models import DrawingTool
from .drawing_canvas import DrawingCanvas


class MainWindow(QMainWindow):
    """
    Main application window

    Shortcuts:
        B / R / C / A    Brush / Rectangle / Circle / Arrow
        [ / ]            Shrink / grow brush by 1px
        Ctrl+Z           Undo
        Ctrl+Backspace   Clear
    """

    TOOL_SHORTCUTS = {
        'B': DrawingTool.BRUSH,
        'R': DrawingTool.RECTANGLE,
        'C': DrawingTool.CIRCLE,
        'A': DrawingTool.ARROW,
    }

    def __init__(self, parent=None, event_bus: Optional[EventBus] = None):
        super().__init__(parent)

        self._event_bus = event_bus or get_event_bus()

        self.setWindowTitle(Config.APP_NAME)
        self.resize(Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

        self._canvas = DrawingCanvas(self)
        self.setCentralWidget(self._canvas)
        self._canvas.connect_event_bus(self._event_bus)

        self.setStatusBar(QStatusBar(self))
        self._canvas.history_changed.connect(self._update_status)
        self._event_bus.draw_config_changed.connect(lambda _config: self._update_status())
        self._event_bus.aspect_ratio_changed.connect(self._update_status)
        self._event_bus.error_occurred.connect(self._show_error)

        self._aspect_actions = {}
        self._setup_menus()

        self._shortcuts = []
        self._setup_shortcuts()
        self._update_status()

    @property
    def canvas(self) -> DrawingCanvas:
        return self._canvas

    def _setup_menus(self):
        """Canvas menu with one checkable action per aspect ratio preset."""
        bus = self._event_bus
        canvas_menu = self.menuBar().addMenu("&Canvas")

        aspect_menu = canvas_menu.addMenu("&Aspect Ratio")
        aspect_group = QActionGroup(self)
        aspect_group.setExclusive(True)

        for ratio in supported_aspect_ratios():
            action = aspect_menu.addAction(str(ratio))
            action.setCheckable(True)
            action.setActionGroup(aspect_group)
            action.triggered.connect(lambda _checked, r=ratio: bus.set_aspect_ratio(r))
            self._aspect_actions[str(ratio)] = action

        bus.aspect_ratio_changed.connect(self._sync_aspect_actions)
        self._sync_aspect_actions(str(bus.get_aspect_ratio()))

    def _sync_aspect_actions(self, aspect_ratio: str):
        action = self._aspect_actions.get(aspect_ratio)
        if action is not None:
            action.setChecked(True)

    def _setup_shortcuts(self):
        """Bind drawing shortcuts to the event bus."""
        bus = self._event_bus

        for key, tool in self.TOOL_SHORTCUTS.items():
            self._add_shortcut(key, lambda t=tool: bus.set_tool(t))

        self._add_shortcut('[', lambda: bus.adjust_brush_size(-1))
        self._add_shortcut(']', lambda: bus.adjust_brush_size(1))
        self._add_shortcut(QKeySequence.StandardKey.Undo, bus.request_undo)
        self._add_shortcut('Ctrl+Backspace', bus.request_clear)

    def _add_shortcut(self, key, handler):
        shortcut = QShortcut(QKeySequence(key), self)
        shortcut.activated.connect(handler)
        self._shortcuts.append(shortcut)

    def _update_status(self, *_args):
        config = self._event_bus.get_draw_config()
        self.statusBar().showMessage(
            f"{config.tool.value.title()}  |  Size {config.brush_size}px  |  "
            f"Aspect {self._event_bus.get_aspect_ratio()}  |  "
            f"Undo steps {max(0, self._canvas.session.history_size - 1)}"
        )

    def _show_error(self, error_type: str, message: str):
        self.statusBar().showMessage(f"{error_type.title()}: {message}", 5000)


__all__ = ['MainWindow']
