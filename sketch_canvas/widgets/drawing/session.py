"""
Drawing session - state machine behind the drawing canvas.

Owns the surface, the preview layer and the undo history, and turns
pointer down/move/up into draw operations. Independent of any widget:
the host feeds it surface-local points, container sizes and configuration.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QImage

from ...config import Config
from ...utils.image_utils import image_to_bytes, image_to_data_url
from ...utils.sizing_utils import AspectRatio, compute_surface_size
from .compositor import compose
from .models import BackgroundSpec, DrawConfig, DrawingTool
from .stroke_renderer import (
    begin_brush_stroke,
    extend_brush_stroke,
    draw_shape,
    create_layer,
    clear_layer,
    merge_layer,
)
from .undo_history import SnapshotHistory

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Drawing session states."""
    IDLE = 0
    DRAWING = 1


@dataclass
class Gesture:
    """An active pointer-down → pointer-up sequence."""
    tool: DrawingTool
    config: DrawConfig
    start: QPointF
    last: QPointF


class DrawingSession:
    """
    Single-surface drawing session.

    Features:
    - Aspect-ratio constrained surface sized to the container
    - Freehand brush painted straight onto the surface
    - Shape tools previewed on a separate layer and merged on release
    - One undo snapshot per finished gesture, bounded history
    - Background color/image compositing with snapshot replay on resize

    The public contract for the surrounding UI is export_image(),
    clear() and undo(); none of them raise.
    """

    def __init__(
        self,
        aspect_ratio: Union[AspectRatio, str] = Config.DEFAULT_ASPECT_RATIO,
        background: Optional[BackgroundSpec] = None,
        history_capacity: int = Config.MAX_UNDO_STEPS
    ):
        self._aspect_ratio = AspectRatio.parse(aspect_ratio)
        self._background = background or BackgroundSpec()
        self._container_size: Tuple[int, int] = (0, 0)
        self._size: Tuple[int, int] = (0, 0)

        self._surface: Optional[QImage] = None
        self._preview: Optional[QImage] = None
        self._history = SnapshotHistory(history_capacity)

        self._state = SessionState.IDLE
        self._gesture: Optional[Gesture] = None

    # ==================== Properties ====================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_drawing(self) -> bool:
        return self._state == SessionState.DRAWING

    @property
    def is_ready(self) -> bool:
        """True once the container has been measured to a non-empty size."""
        return self._surface is not None

    @property
    def surface(self) -> Optional[QImage]:
        return self._surface

    @property
    def preview(self) -> Optional[QImage]:
        return self._preview

    @property
    def surface_size(self) -> Tuple[int, int]:
        return self._size

    @property
    def aspect_ratio(self) -> AspectRatio:
        return self._aspect_ratio

    @property
    def background(self) -> BackgroundSpec:
        return self._background

    @property
    def history_size(self) -> int:
        return len(self._history)

    @property
    def history(self) -> SnapshotHistory:
        return self._history

    # ==================== Sizing ====================

    def set_container_size(self, width: int, height: int) -> bool:
        """
        Update the available container box.

        Returns:
            True if the surface was reallocated
        """
        self._container_size = (int(width), int(height))
        return self._update_surface_size()

    def set_aspect_ratio(self, aspect_ratio: Union[AspectRatio, str]) -> bool:
        """
        Change the surface aspect ratio.

        Returns:
            True if the surface was reallocated
        """
        self._aspect_ratio = AspectRatio.parse(aspect_ratio)
        return self._update_surface_size()

    def _update_surface_size(self) -> bool:
        width, height = compute_surface_size(self._aspect_ratio, *self._container_size)

        if width <= 0 or height <= 0:
            # Not measured yet: keep history, defer drawing until a real size arrives
            if self._surface is not None:
                self.cancel_gesture()
                self._surface = None
                logger.debug("Surface unmounted, container is %sx%s", *self._container_size)
            self._size = (0, 0)
            return False

        if self._surface is not None and self._size == (width, height):
            return False

        self.cancel_gesture()
        self._size = (width, height)
        self._surface = compose(self._size, self._background, self._history.peek(), preserve=True)
        if self._history.is_empty():
            self._history.push(self._surface)

        logger.debug("Surface resized to %dx%d (%s)", width, height, self._aspect_ratio)
        return True

    # ==================== Background ====================

    def set_background(self, background: BackgroundSpec) -> bool:
        """
        Replace the background and start over from it.

        Foreground content is discarded and history is reset to the single
        background-only entry. An identical background changes nothing.

        Returns:
            True if the background changed
        """
        if background == self._background:
            return False

        self._background = background
        self.cancel_gesture()

        if not self.is_ready:
            self._history.clear()
            return True

        self._reset_to_background()
        return True

    def _reset_to_background(self):
        self._surface = compose(self._size, self._background, preserve=False)
        self._history.reset(self._surface)

    # ==================== Pointer Events ====================

    def pointer_down(self, point: QPointF, config: DrawConfig) -> bool:
        """
        Start a gesture at a surface-local point.

        Returns:
            True if a gesture started
        """
        if not self.is_ready:
            logger.debug("Pointer down ignored, surface not ready")
            return False

        if self.is_drawing:
            self._commit_gesture()

        self._gesture = Gesture(config.tool, config, QPointF(point), QPointF(point))
        self._state = SessionState.DRAWING

        if config.tool == DrawingTool.BRUSH:
            begin_brush_stroke(self._surface, point, config)
        else:
            self._preview = create_layer(*self._size)
            draw_shape(self._preview, config.tool, point, point, config)

        return True

    def pointer_move(self, point: QPointF) -> bool:
        """
        Continue the active gesture.

        Returns:
            True if anything was drawn
        """
        if not self.is_drawing or self._gesture is None:
            return False

        gesture = self._gesture
        if gesture.tool == DrawingTool.BRUSH:
            extend_brush_stroke(self._surface, gesture.last, point, gesture.config)
        else:
            # Earlier partial shapes are invalid, redraw from a clean layer
            clear_layer(self._preview)
            draw_shape(self._preview, gesture.tool, gesture.start, point, gesture.config)

        gesture.last = QPointF(point)
        return True

    def pointer_up(self, point: Optional[QPointF] = None) -> bool:
        """
        Finish the active gesture and record one history entry.

        Returns:
            True if a gesture was committed, False for a stray event
        """
        if not self.is_drawing or self._gesture is None:
            logger.debug("Ignoring pointer up without a matching pointer down")
            return False

        if point is not None and point != self._gesture.last:
            self.pointer_move(point)

        self._commit_gesture()
        return True

    def pointer_leave(self, point: Optional[QPointF] = None) -> bool:
        """Leaving the surface ends the gesture exactly like pointer up."""
        return self.pointer_up(point)

    def cancel_gesture(self) -> bool:
        """
        Abort the active gesture.

        A shape preview is dropped. Brush strokes are already on the surface,
        so the painted part is kept and recorded as one history entry.

        Returns:
            True if a gesture was active
        """
        if not self.is_drawing or self._gesture is None:
            return False

        if self._gesture.tool == DrawingTool.BRUSH and self._surface is not None:
            self._commit_gesture()
        else:
            self._end_gesture()
        return True

    def _commit_gesture(self):
        if self._gesture.tool != DrawingTool.BRUSH and self._preview is not None:
            merge_layer(self._surface, self._preview)
        self._history.push(self._surface)
        self._end_gesture()

    def _end_gesture(self):
        self._preview = None
        self._gesture = None
        self._state = SessionState.IDLE

    # ==================== Rendering ====================

    def render_view(self) -> Optional[QImage]:
        """
        Image to show on screen: the surface with any live preview on top.

        Returns:
            QImage, or None while the surface is not ready
        """
        if self._surface is None:
            return None
        if self._preview is None:
            return self._surface

        view = self._surface.copy()
        merge_layer(view, self._preview)
        return view

    # ==================== Public Operations ====================

    def export_image(self) -> bytes:
        """Encode the current surface as PNG at its current pixel size."""
        try:
            if self._surface is None:
                return b''
            return image_to_bytes(self._surface)
        except Exception:
            logger.exception("Failed to export drawing")
            return b''

    def export_data_url(self) -> str:
        """Encode the current surface as a PNG data URL."""
        try:
            if self._surface is None:
                return ''
            return image_to_data_url(self._surface)
        except Exception:
            logger.exception("Failed to export drawing")
            return ''

    def clear(self):
        """Reset the surface to the background alone and restart history."""
        try:
            self._end_gesture()
            if not self.is_ready:
                self._history.clear()
                return
            self._reset_to_background()
            logger.debug("Canvas cleared")
        except Exception:
            logger.exception("Failed to clear canvas")

    def undo(self):
        """
        Step back one history entry and recompose the surface from it.

        With a single entry left this recomposes from that entry and
        changes nothing.
        """
        try:
            self.cancel_gesture()
            if not self.is_ready:
                return
            self._history.pop()
            snapshot = self._history.peek()
            if snapshot is None:
                return
            self._surface = compose(self._size, self._background, snapshot, preserve=True)
        except Exception:
            logger.exception("Failed to undo")


__all__ = ['DrawingSession', 'SessionState', 'Gesture']
