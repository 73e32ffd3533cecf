"""Utility functions for Sketch Canvas"""

from .sizing_utils import (
    AspectRatio,
    compute_surface_size,
    supported_aspect_ratios,
)
from .coordinate_utils import CoordinateConverter, event_position, to_surface_coords
from .image_utils import (
    decode_data_url,
    decode_image,
    pil_to_qimage,
    image_to_bytes,
    image_to_data_url,
)
from .logging_config import LoggingConfig

__all__ = [
    # Sizing
    'AspectRatio',
    'compute_surface_size',
    'supported_aspect_ratios',
    # Coordinates
    'CoordinateConverter',
    'event_position',
    'to_surface_coords',
    # Images
    'decode_data_url',
    'decode_image',
    'pil_to_qimage',
    'image_to_bytes',
    'image_to_data_url',
    # Logging
    'LoggingConfig',
]
