"""Services for Sketch Canvas"""

from .background_loader import BackgroundLoader, BackgroundDecodeTask

__all__ = [
    'BackgroundLoader',
    'BackgroundDecodeTask',
]
