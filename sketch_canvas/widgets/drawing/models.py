"""
Data model for the drawing canvas.

Tools, per-gesture drawing configuration and the background description.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from PyQt6.QtGui import QColor, QImage

from ...config import Config


TRANSPARENT = Config.TRANSPARENT_COLOR


class DrawingTool(Enum):
    """Available drawing tools."""
    BRUSH = 'brush'          # Freehand stroke
    RECTANGLE = 'rectangle'  # Axis-aligned box
    CIRCLE = 'circle'        # Ellipse inscribed in the drag box
    ARROW = 'arrow'          # Line with two-wing head

    @property
    def is_shape(self) -> bool:
        """Shape tools are defined by a start/end point pair."""
        return self is not DrawingTool.BRUSH

    @classmethod
    def parse(cls, value: Union['DrawingTool', str]) -> 'DrawingTool':
        """
        Resolve a tool from its name.

        Raises:
            ValueError: If the name is not a known tool
        """
        if isinstance(value, DrawingTool):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Invalid drawing tool: {value!r}") from None


def is_transparent(color: str) -> bool:
    """Check whether a color string means "skip this pass"."""
    if color is None:
        return True
    if color.strip().lower() == TRANSPARENT:
        return True
    qcolor = QColor(color)
    return not qcolor.isValid() or qcolor.alpha() == 0


@dataclass(frozen=True)
class DrawConfig:
    """
    Drawing configuration captured at the start of every gesture.

    Attributes:
        tool: Active drawing tool
        brush_size: Stroke width in pixels (0 disables the stroke pass)
        stroke_color: Outline/brush color, or "transparent"
        fill_color: Shape fill color, or "transparent"
    """
    tool: DrawingTool = DrawingTool.BRUSH
    brush_size: int = Config.DEFAULT_BRUSH_SIZE
    stroke_color: str = Config.DEFAULT_STROKE_COLOR
    fill_color: str = Config.DEFAULT_FILL_COLOR

    @property
    def has_stroke(self) -> bool:
        return self.brush_size > 0 and not is_transparent(self.stroke_color)

    @property
    def has_fill(self) -> bool:
        return not is_transparent(self.fill_color)

    def with_changes(self, **changes) -> 'DrawConfig':
        return replace(self, **changes)


@dataclass(frozen=True, eq=False)
class BackgroundSpec:
    """
    Background of the drawing surface.

    Two specs are equal when they paint the same surface: colors are
    compared after parsing and images pixel by pixel.

    Attributes:
        color: Opaque fill color painted first
        image: Optional decoded image stretched over the whole surface
    """
    color: str = Config.DEFAULT_BACKGROUND_COLOR
    image: Optional[QImage] = None

    def __eq__(self, other):
        if not isinstance(other, BackgroundSpec):
            return NotImplemented
        if self.qcolor() != other.qcolor():
            return False
        if self.image is None or other.image is None:
            return self.image is None and other.image is None
        return self.image is other.image or self.image == other.image

    def qcolor(self) -> QColor:
        """Background color as an opaque QColor."""
        color = QColor(self.color)
        if not color.isValid():
            color = QColor(Config.DEFAULT_BACKGROUND_COLOR)
        color.setAlpha(255)
        return color

    def with_changes(self, **changes) -> 'BackgroundSpec':
        return replace(self, **changes)


__all__ = [
    'TRANSPARENT',
    'DrawingTool',
    'DrawConfig',
    'BackgroundSpec',
    'is_transparent',
]
