"""Unit tests for surface sizing."""

import pytest

from sketch_canvas.config import Config
from sketch_canvas.utils.sizing_utils import (
    AspectRatio,
    compute_surface_size,
    supported_aspect_ratios,
)


class TestAspectRatio:
    """Tests for AspectRatio parsing."""

    def test_parse_string(self):
        """Test that "W:H" strings are parsed into integers."""
        ratio = AspectRatio.parse("16:9")

        assert ratio == AspectRatio(16, 9)
        assert ratio.value == pytest.approx(16 / 9)
        assert str(ratio) == "16:9"

    def test_parse_passes_instances_through(self):
        """Test that an AspectRatio is returned unchanged."""
        ratio = AspectRatio(4, 3)
        assert AspectRatio.parse(ratio) is ratio

    @pytest.mark.parametrize("value", ["16-9", "16:9:1", "a:b", "", "0:1", "4:-3"])
    def test_parse_rejects_invalid(self, value):
        """Test that malformed or non-positive ratios raise ValueError."""
        with pytest.raises(ValueError):
            AspectRatio.parse(value)


class TestComputeSurfaceSize:
    """Tests for compute_surface_size."""

    def test_wide_container_clamps_height(self):
        """Test that a container wider than the ratio fills its height."""
        assert compute_surface_size("4:3", 1000, 300) == (400, 300)

    def test_tall_container_clamps_width(self):
        """Test that a container taller than the ratio fills its width."""
        assert compute_surface_size("16:9", 800, 2000) == (800, 450)

    def test_exact_fit(self):
        """Test that a container with the same ratio is filled exactly."""
        assert compute_surface_size("16:9", 1920, 1080) == (1920, 1080)

    def test_square_in_landscape(self):
        assert compute_surface_size(AspectRatio(1, 1), 400, 300) == (300, 300)

    @pytest.mark.parametrize("width,height", [(0, 0), (0, 300), (300, 0), (-10, 200)])
    def test_unmeasured_container_yields_zero(self, width, height):
        """Test that degenerate containers produce a zero-size surface."""
        assert compute_surface_size("1:1", width, height) == (0, 0)

    @pytest.mark.parametrize("ratio", Config.ASPECT_RATIOS)
    @pytest.mark.parametrize("container", [(640, 480), (480, 640), (1024, 1024), (333, 777), (1920, 1080)])
    def test_result_fits_and_keeps_ratio(self, ratio, container):
        """Test that the box fits, touches one side and keeps the ratio."""
        container_w, container_h = container
        aspect = AspectRatio.parse(ratio)

        width, height = compute_surface_size(ratio, container_w, container_h)

        assert width <= container_w
        assert height <= container_h
        assert width == container_w or height == container_h
        # Rounding to whole pixels may shift the derived side by at most one pixel
        assert abs(width - height * aspect.value) <= 1 or abs(height - width / aspect.value) <= 1

    def test_deterministic(self):
        assert compute_surface_size("3:4", 517, 389) == compute_surface_size("3:4", 517, 389)


def test_supported_aspect_ratios():
    """Test that the presets parse to the configured ratios."""
    ratios = supported_aspect_ratios()

    assert [str(r) for r in ratios] == Config.ASPECT_RATIOS
