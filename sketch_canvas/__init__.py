"""
Sketch Canvas

Aspect-ratio constrained raster drawing canvas built on PyQt6.
"""

__version__ = "1.0.0"

from .config import Config
from .events.event_bus import EventBus, get_event_bus
from .widgets.drawing import (
    DrawingSession,
    DrawingTool,
    DrawConfig,
    BackgroundSpec,
)

__all__ = [
    'Config',
    'EventBus',
    'get_event_bus',
    'DrawingSession',
    'DrawingTool',
    'DrawConfig',
    'BackgroundSpec',
]
