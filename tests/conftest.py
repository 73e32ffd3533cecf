"""Shared pytest fixtures for Sketch Canvas tests."""

import os

# Widgets need a platform plugin; render off-screen in tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from typing import Callable

from PyQt6.QtCore import Qt, QEvent, QPointF
from PyQt6.QtGui import QColor, QImage, QMouseEvent
from PyQt6.QtWidgets import QApplication

from sketch_canvas.widgets.drawing.models import BackgroundSpec, DrawConfig, DrawingTool
from sketch_canvas.widgets.drawing.session import DrawingSession


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> QApplication:
    """Create the QApplication shared by every test.

    Returns:
        The running QApplication instance
    """
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def background() -> BackgroundSpec:
    """Plain grey background without an image."""
    return BackgroundSpec(color="#808080")


@pytest.fixture
def session(background: BackgroundSpec) -> DrawingSession:
    """Drawing session measured into a 100x100 container.

    Args:
        background: Background fixture

    Returns:
        Ready DrawingSession with a 100x100 surface
    """
    drawing_session = DrawingSession("1:1", background)
    drawing_session.set_container_size(100, 100)
    return drawing_session


@pytest.fixture
def black_brush() -> DrawConfig:
    """Thick black brush."""
    return DrawConfig(tool=DrawingTool.BRUSH, brush_size=10,
                      stroke_color="#000000", fill_color="transparent")


@pytest.fixture
def black_outline() -> Callable[[DrawingTool], DrawConfig]:
    """Factory for 2px black outline configs of a given shape tool."""
    def factory(tool: DrawingTool) -> DrawConfig:
        return DrawConfig(tool=tool, brush_size=2,
                          stroke_color="#000000", fill_color="transparent")
    return factory


@pytest.fixture
def solid_image() -> Callable[[int, int, str], QImage]:
    """Factory for solid-color ARGB32 images."""
    def factory(width: int, height: int, color: str) -> QImage:
        image = QImage(width, height, QImage.Format.Format_ARGB32)
        image.fill(QColor(color))
        return image
    return factory


@pytest.fixture
def mouse_event() -> Callable[..., QMouseEvent]:
    """Factory for synthetic mouse events in widget coordinates."""
    def factory(event_type: QEvent.Type, x: float, y: float,
                button: Qt.MouseButton = Qt.MouseButton.LeftButton) -> QMouseEvent:
        pos = QPointF(x, y)
        buttons = Qt.MouseButton.LeftButton
        if event_type == QEvent.Type.MouseMove:
            button = Qt.MouseButton.NoButton
        return QMouseEvent(event_type, pos, pos, button, buttons,
                           Qt.KeyboardModifier.NoModifier)
    return factory
