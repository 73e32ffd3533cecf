"""
Image utilities for decoding and encoding rasters

Background images arrive as raw encoded bytes, data URLs or file paths;
drawings leave as PNG bytes or a PNG data URL.
"""

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageOps
from PyQt6.QtCore import QBuffer, QByteArray, QIODevice
from PyQt6.QtGui import QImage

from ..config import Config

logger = logging.getLogger(__name__)


ImageSource = Union[bytes, bytearray, str, Path]


def decode_data_url(data_url: str) -> Optional[bytes]:
    """
    Decode the payload of a base64 data URL.

    Args:
        data_url: "data:<mime>;base64,<payload>" string

    Returns:
        Decoded bytes, or None if the string is not a base64 data URL
    """
    if not data_url.startswith('data:'):
        return None

    header, sep, payload = data_url.partition(',')
    if not sep or ';base64' not in header:
        return None

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


def _open_source(source: ImageSource) -> Optional[Image.Image]:
    if isinstance(source, (bytes, bytearray)):
        return Image.open(BytesIO(bytes(source)))

    if isinstance(source, str) and source.startswith('data:'):
        data = decode_data_url(source)
        if data is None:
            return None
        return Image.open(BytesIO(data))

    path = Path(source)
    try:
        if not path.is_file():
            return None
    except OSError:
        return None

    return Image.open(path)


def pil_to_qimage(image: Image.Image) -> QImage:
    """
    Convert a PIL image to an ARGB32 QImage.

    Args:
        image: PIL image in any mode

    Returns:
        Detached QImage that owns its pixels
    """
    rgba = np.ascontiguousarray(np.asarray(image.convert('RGBA'), dtype=np.uint8))
    h, w = rgba.shape[:2]

    bytes_per_line = 4 * w
    qt_image = QImage(rgba.data, w, h, bytes_per_line, QImage.Format.Format_RGBA8888)

    # Converting copies out of the numpy buffer
    return qt_image.convertToFormat(QImage.Format.Format_ARGB32)


def decode_image(
    source: ImageSource,
    max_dimension: Optional[int] = Config.MAX_BACKGROUND_DIMENSION
) -> Optional[QImage]:
    """
    Decode an image from bytes, a data URL or a file path.

    EXIF orientation is applied so camera photos come out upright, and
    images larger than max_dimension are shrunk keeping their aspect ratio.

    Args:
        source: Encoded image bytes, data URL string or path
        max_dimension: Largest allowed width or height (None for no limit)

    Returns:
        QImage or None if decoding failed
    """
    try:
        image = _open_source(source)
        if image is None:
            return None

        image = ImageOps.exif_transpose(image)

        if max_dimension and max(image.size) > max_dimension:
            image.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

        return pil_to_qimage(image)

    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.debug(f"Could not decode image: {e}")
        return None


def image_to_bytes(image: QImage, image_format: str = Config.EXPORT_FORMAT) -> bytes:
    """
    Encode a QImage into an in-memory file format.

    Args:
        image: Source image
        image_format: Qt image format name ("PNG", "JPG", ...)

    Returns:
        Encoded bytes, empty if the image is null or encoding failed
    """
    if image is None or image.isNull():
        return b''

    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    ok = image.save(buffer, image_format)
    buffer.close()

    if not ok:
        return b''
    return bytes(data)


def image_to_data_url(image: QImage) -> str:
    """
    Encode a QImage as a PNG data URL.

    Args:
        image: Source image

    Returns:
        "data:image/png;base64,..." string, empty if encoding failed
    """
    data = image_to_bytes(image, Config.EXPORT_FORMAT)
    if not data:
        return ''
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{Config.EXPORT_MIME_TYPE};base64,{encoded}"


__all__ = [
    'ImageSource',
    'decode_data_url',
    'decode_image',
    'pil_to_qimage',
    'image_to_bytes',
    'image_to_data_url',
]
