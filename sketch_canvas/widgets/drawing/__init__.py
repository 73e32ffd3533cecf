"""
Drawing canvas subpackage.

Provides modular components for the drawing canvas:
- models: Tools, drawing configuration and background description
- stroke_renderer: Brush segments and shape drawing onto raster layers
- compositor: Background + snapshot compositing
- undo_history: Bounded snapshot stack
- session: Pointer-driven state machine owning the surface
"""

from .models import TRANSPARENT, DrawingTool, DrawConfig, BackgroundSpec, is_transparent
from .stroke_renderer import (
    create_pen,
    begin_brush_stroke,
    extend_brush_stroke,
    rect_from_points,
    ellipse_from_points,
    arrow_head_points,
    draw_shape,
)
from .compositor import compose
from .undo_history import SnapshotHistory
from .session import DrawingSession, SessionState

__all__ = [
    # Model
    'TRANSPARENT',
    'DrawingTool',
    'DrawConfig',
    'BackgroundSpec',
    'is_transparent',
    # Rendering
    'create_pen',
    'begin_brush_stroke',
    'extend_brush_stroke',
    'rect_from_points',
    'ellipse_from_points',
    'arrow_head_points',
    'draw_shape',
    # Compositing
    'compose',
    # History
    'SnapshotHistory',
    # Session
    'DrawingSession',
    'SessionState',
]
