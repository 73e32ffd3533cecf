"""
Sizing utilities for the drawing surface.

Maps an aspect ratio and an available container box to the pixel
dimensions of the largest undistorted surface that fits inside it.
"""

from typing import NamedTuple, Tuple, Union

from ..config import Config


class AspectRatio(NamedTuple):
    """Ratio of two positive integers, e.g. 16:9."""

    width: int
    height: int

    @classmethod
    def parse(cls, value: Union['AspectRatio', str]) -> 'AspectRatio':
        """
        Parse an aspect ratio from a "W:H" string.

        Args:
            value: "W:H" string or an existing AspectRatio

        Returns:
            AspectRatio instance

        Raises:
            ValueError: If the string is malformed or not positive
        """
        if isinstance(value, AspectRatio):
            return value

        parts = str(value).split(':')
        if len(parts) != 2:
            raise ValueError(f"Invalid aspect ratio: {value!r}")

        try:
            width, height = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"Invalid aspect ratio: {value!r}") from None

        if width <= 0 or height <= 0:
            raise ValueError(f"Aspect ratio must be positive: {value!r}")

        return cls(width, height)

    @property
    def value(self) -> float:
        return self.width / self.height

    def __str__(self) -> str:
        return f"{self.width}:{self.height}"


def compute_surface_size(
    aspect_ratio: Union[AspectRatio, str],
    container_width: float,
    container_height: float
) -> Tuple[int, int]:
    """
    Compute the largest box with the given aspect ratio inside a container.

    When the container is wider than the target ratio the height is clamped
    to the container and the width derived; otherwise the width is clamped.

    Args:
        aspect_ratio: Target ratio ("16:9" or AspectRatio)
        container_width: Available width in pixels
        container_height: Available height in pixels

    Returns:
        (width, height) in whole pixels, (0, 0) for an unmeasured container
    """
    ratio = AspectRatio.parse(aspect_ratio)

    if container_width <= 0 or container_height <= 0:
        return (0, 0)

    if container_width / container_height > ratio.value:
        height = int(container_height)
        width = int(round(container_height * ratio.value))
    else:
        width = int(container_width)
        height = int(round(container_width / ratio.value))

    return (width, height)


def supported_aspect_ratios() -> Tuple[AspectRatio, ...]:
    """Aspect ratio presets offered by the drawing panel."""
    return tuple(AspectRatio.parse(r) for r in Config.ASPECT_RATIOS)


__all__ = [
    'AspectRatio',
    'compute_surface_size',
    'supported_aspect_ratios',
]
