"""
Compositing pipeline for the drawing surface.

Builds the surface raster from a solid background color, an optional
stretched background image and an optional stretched snapshot.
"""

from typing import Optional, Tuple, Union

from PyQt6.QtCore import QRectF, QSize
from PyQt6.QtGui import QImage, QPainter

from .models import BackgroundSpec


SizeLike = Union[QSize, Tuple[int, int]]


def _as_size(size: SizeLike) -> Tuple[int, int]:
    if isinstance(size, QSize):
        return size.width(), size.height()
    return int(size[0]), int(size[1])


def compose(
    size: SizeLike,
    background: BackgroundSpec,
    snapshot: Optional[QImage] = None,
    preserve: bool = True
) -> QImage:
    """
    Compose a fresh surface.

    The background color is always painted first. A background image is
    stretched to fill the frame without keeping its own aspect ratio. When
    preserve is set and a snapshot is given, the snapshot is resampled to the
    new size and painted on top.

    Calling with preserve=False yields the background-only surface; the
    session pairs it with a history reset for its clear operation.

    Args:
        size: Target surface size (QSize or (width, height))
        background: Background color and optional image
        snapshot: Previously committed surface content
        preserve: Replay the snapshot over the background

    Returns:
        New ARGB32 QImage of the requested size
    """
    width, height = _as_size(size)
    surface = QImage(width, height, QImage.Format.Format_ARGB32)
    surface.fill(background.qcolor())

    if width <= 0 or height <= 0:
        return surface

    target = QRectF(0, 0, width, height)
    has_image = background.image is not None and not background.image.isNull()
    replay = preserve and snapshot is not None and not snapshot.isNull()

    if not has_image and not replay:
        return surface

    painter = QPainter(surface)
    try:
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        if has_image:
            painter.drawImage(target, background.image)
        if replay:
            if snapshot.width() == width and snapshot.height() == height:
                painter.drawImage(0, 0, snapshot)
            else:
                painter.drawImage(target, snapshot)
    finally:
        painter.end()

    return surface


__all__ = ['compose']
