"""
Global configuration for Sketch Canvas

Defaults mirror the drawing panel of the host application:
white brush, transparent fill, grey canvas, square aspect ratio.
"""

import math
import os
import sys
from pathlib import Path
from typing import Final


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Sketch Canvas"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "Sketch Canvas"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent
    LOG_FILE_NAME: Final[str] = "sketch_canvas.log"
    LOG_LEVEL_ENV: Final[str] = "SKETCH_CANVAS_LOG_LEVEL"  # Console level override

    # Undo history
    MAX_UNDO_STEPS: Final[int] = 20

    # Tool defaults
    DEFAULT_TOOL: Final[str] = "brush"
    DEFAULT_BRUSH_SIZE: Final[int] = 10
    MIN_BRUSH_SIZE: Final[int] = 1
    MAX_BRUSH_SIZE: Final[int] = 100
    DEFAULT_STROKE_COLOR: Final[str] = "#FFFFFF"
    DEFAULT_FILL_COLOR: Final[str] = "transparent"
    TRANSPARENT_COLOR: Final[str] = "transparent"

    # Background defaults
    DEFAULT_BACKGROUND_COLOR: Final[str] = "#808080"

    # Aspect ratios offered to the user
    DEFAULT_ASPECT_RATIO: Final[str] = "1:1"
    ASPECT_RATIOS: Final[list] = ["1:1", "3:4", "4:3", "9:16", "16:9"]

    # Arrow head geometry
    ARROW_HEAD_MIN_LENGTH: Final[float] = 10.0
    ARROW_HEAD_SCALE: Final[float] = 2.5
    ARROW_HEAD_SPREAD: Final[float] = math.pi / 7

    # Resize handling
    RESIZE_DEBOUNCE_MS: Final[int] = 100

    # Background decoding
    BACKGROUND_LOADER_THREAD_COUNT: Final[int] = 1
    MAX_BACKGROUND_DIMENSION: Final[int] = 4096  # Larger images are shrunk on decode

    # Export
    EXPORT_FORMAT: Final[str] = "PNG"
    EXPORT_MIME_TYPE: Final[str] = "image/png"

    # Brush preview cursor
    BRUSH_PREVIEW_OPACITY: Final[float] = 0.3
    BRUSH_SIZE_PREVIEW_OPACITY: Final[float] = 0.5
    BRUSH_SIZE_PREVIEW_MS: Final[int] = 2000  # Centered preview after a size change

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 1200
    DEFAULT_WINDOW_HEIGHT: Final[int] = 800
    CANVAS_BACKDROP_COLOR: Final[str] = "#1E1E1E"

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Uses system AppData/Local (Windows) or .local/share (Linux)
        so logs survive application updates.
        """
        # If 'portable.txt' exists next to the package, stick to local folder
        portable_flag = cls.APP_ROOT.parent / 'portable.txt'
        if portable_flag.exists():
            user_dir = cls.APP_ROOT.parent / 'data'
        else:
            if sys.platform == 'win32':
                base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
                user_dir = base_path / 'SketchCanvas'
            elif sys.platform == 'darwin':
                user_dir = Path.home() / 'Library' / 'Application Support' / 'SketchCanvas'
            else:
                # Linux / Unix
                user_dir = Path.home() / '.local' / 'share' / 'SketchCanvas'

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get the logs folder inside the user data directory."""
        log_dir = cls.get_user_data_dir() / 'logs'
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    @classmethod
    def clamp_brush_size(cls, size: int) -> int:
        """Clamp a brush size into the supported range."""
        return max(cls.MIN_BRUSH_SIZE, min(cls.MAX_BRUSH_SIZE, int(size)))


__all__ = ['Config']
